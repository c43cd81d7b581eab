from urllib.parse import quote

DESCRIPTION_ROUTE = "/description/{job_id}"


def description_path(job_id) -> str:
    """Client route for a job's detail page."""
    job_id = str(job_id).strip()
    if not job_id:
        raise ValueError("job id is required")
    return DESCRIPTION_ROUTE.format(job_id=quote(job_id, safe=""))
