import uuid

import pytest

from app.config import settings
from conftest import auth, create_job, create_user


class TestApply:
    @pytest.mark.asyncio
    async def test_apply_defaults_to_pending(self, client, job, student):
        resp = await client.post(f"/api/v1/application/apply/{job.id}", headers=auth(student))
        assert resp.status_code == 201
        body = resp.json()
        assert body["job_id"] == str(job.id)
        assert body["applicant_id"] == str(student.id)
        assert body["status"] == "pending"

        # Reads back the same way
        resp = await client.get(f"/api/v1/application/{body['id']}", headers=auth(student))
        assert resp.status_code == 200
        assert resp.json()["status"] == "pending"
        assert resp.json()["job"]["company"]["name"] == "TechCorp"
        assert resp.json()["applicant"]["email"] == "jane@example.com"

    @pytest.mark.asyncio
    async def test_apply_twice(self, client, application, job, student):
        resp = await client.post(f"/api/v1/application/apply/{job.id}", headers=auth(student))
        assert resp.status_code == 400
        assert resp.json()["detail"] == "You have already applied for this job"

    @pytest.mark.asyncio
    async def test_apply_unknown_job(self, client, student):
        resp = await client.post(f"/api/v1/application/apply/{uuid.uuid4()}", headers=auth(student))
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Job not found"

    @pytest.mark.asyncio
    async def test_apply_requires_user(self, client, job):
        resp = await client.post(f"/api/v1/application/apply/{job.id}")
        assert resp.status_code == 401


class TestListApplications:
    @pytest.mark.asyncio
    async def test_applied_jobs(self, client, db_session, company, recruiter, student):
        first = await create_job(db_session, company, recruiter, "Backend Engineer")
        second = await create_job(db_session, company, recruiter, "Data Analyst")
        await client.post(f"/api/v1/application/apply/{first.id}", headers=auth(student))
        await client.post(f"/api/v1/application/apply/{second.id}", headers=auth(student))

        resp = await client.get("/api/v1/application/get", headers=auth(student))
        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 2
        assert {a["job"]["title"] for a in body["applications"]} == {"Backend Engineer", "Data Analyst"}

    @pytest.mark.asyncio
    async def test_applicants_for_recruiter(self, client, application, job, recruiter):
        resp = await client.get(f"/api/v1/application/{job.id}/applicants", headers=auth(recruiter))
        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 1
        assert body["applications"][0]["applicant"]["fullname"] == "Jane Doe"
        assert body["applications"][0]["applicant"]["profile"]["skills"] == ["Python", "SQL"]

    @pytest.mark.asyncio
    async def test_applicants_hidden_from_others(self, client, application, job, student):
        resp = await client.get(f"/api/v1/application/{job.id}/applicants", headers=auth(student))
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_get_missing(self, client, student):
        resp = await client.get(f"/api/v1/application/{uuid.uuid4()}", headers=auth(student))
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_get_requires_user(self, client, application):
        resp = await client.get(f"/api/v1/application/{application.id}")
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_get_visible_to_recruiter(self, client, application, recruiter):
        resp = await client.get(f"/api/v1/application/{application.id}", headers=auth(recruiter))
        assert resp.status_code == 200
        assert resp.json()["applicant"]["email"] == "jane@example.com"

    @pytest.mark.asyncio
    async def test_get_hidden_from_strangers(self, client, db_session, application):
        stranger = await create_user(db_session, fullname="Stranger")
        resp = await client.get(f"/api/v1/application/{application.id}", headers=auth(stranger))
        assert resp.status_code == 403


class TestStatusUpdate:
    @pytest.mark.asyncio
    async def test_accept(self, client, application, recruiter):
        resp = await client.post(
            f"/api/v1/application/status/{application.id}/update",
            json={"status": "Accepted"},
            headers=auth(recruiter),
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Status updated successfully."
        assert body["application"]["status"] == "accepted"

    @pytest.mark.asyncio
    async def test_accepted_back_to_pending_is_allowed_by_default(self, client, application, recruiter):
        url = f"/api/v1/application/status/{application.id}/update"
        resp = await client.post(url, json={"status": "accepted"}, headers=auth(recruiter))
        assert resp.status_code == 200

        resp = await client.post(url, json={"status": "pending"}, headers=auth(recruiter))
        assert resp.status_code == 200
        assert resp.json()["application"]["status"] == "pending"

    @pytest.mark.asyncio
    async def test_strict_mode_makes_decisions_final(self, client, application, recruiter, monkeypatch):
        monkeypatch.setattr(settings, "strict_status_transitions", True)
        url = f"/api/v1/application/status/{application.id}/update"
        resp = await client.post(url, json={"status": "rejected"}, headers=auth(recruiter))
        assert resp.status_code == 200

        resp = await client.post(url, json={"status": "pending"}, headers=auth(recruiter))
        assert resp.status_code == 409

        resp = await client.get(f"/api/v1/application/{application.id}", headers=auth(recruiter))
        assert resp.json()["status"] == "rejected"

    @pytest.mark.asyncio
    async def test_invalid_status(self, client, application, recruiter):
        resp = await client.post(
            f"/api/v1/application/status/{application.id}/update",
            json={"status": "hired"},
            headers=auth(recruiter),
        )
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_only_job_recruiter(self, client, application, student):
        resp = await client.post(
            f"/api/v1/application/status/{application.id}/update",
            json={"status": "accepted"},
            headers=auth(student),
        )
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_application(self, client, recruiter):
        resp = await client.post(
            f"/api/v1/application/status/{uuid.uuid4()}/update",
            json={"status": "accepted"},
            headers=auth(recruiter),
        )
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_full_job_rejects_more_accepts(self, client, db_session, company, recruiter):
        job = await create_job(db_session, company, recruiter, "Solo Role", position=1)
        first = await create_user(db_session, fullname="First")
        second = await create_user(db_session, fullname="Second")
        resp1 = await client.post(f"/api/v1/application/apply/{job.id}", headers=auth(first))
        resp2 = await client.post(f"/api/v1/application/apply/{job.id}", headers=auth(second))

        resp = await client.post(
            f"/api/v1/application/status/{resp1.json()['id']}/update",
            json={"status": "accepted"},
            headers=auth(recruiter),
        )
        assert resp.status_code == 200

        resp = await client.post(
            f"/api/v1/application/status/{resp2.json()['id']}/update",
            json={"status": "accepted"},
            headers=auth(recruiter),
        )
        assert resp.status_code == 409
        assert resp.json()["detail"] == "All positions for this job have been filled"

        # Re-accepting the one already accepted is a no-op, not a capacity hit
        resp = await client.post(
            f"/api/v1/application/status/{resp1.json()['id']}/update",
            json={"status": "accepted"},
            headers=auth(recruiter),
        )
        assert resp.status_code == 200


class TestDeleteApplication:
    @pytest.mark.asyncio
    async def test_applicant_withdraws(self, client, application, student):
        resp = await client.delete(f"/api/v1/application/{application.id}", headers=auth(student))
        assert resp.status_code == 204

        resp = await client.get(f"/api/v1/application/{application.id}", headers=auth(student))
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_stranger_cannot_delete(self, client, db_session, application):
        stranger = await create_user(db_session, fullname="Stranger")
        resp = await client.delete(f"/api/v1/application/{application.id}", headers=auth(stranger))
        assert resp.status_code == 403
