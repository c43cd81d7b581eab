from app.models.application import ApplicationStatus
from app.services.status import can_transition, parse_status


class TestParseStatus:
    def test_lowercase(self):
        assert parse_status("accepted") == ApplicationStatus.ACCEPTED

    def test_case_insensitive(self):
        assert parse_status("Rejected") == ApplicationStatus.REJECTED

    def test_whitespace(self):
        assert parse_status("  pending ") == ApplicationStatus.PENDING

    def test_unknown(self):
        assert parse_status("hired") is None


class TestCanTransition:
    def test_lenient_allows_reopening(self):
        assert can_transition("accepted", ApplicationStatus.PENDING, strict=False) is True

    def test_lenient_allows_flip(self):
        assert can_transition("rejected", ApplicationStatus.ACCEPTED, strict=False) is True

    def test_strict_pending_can_be_decided(self):
        assert can_transition("pending", ApplicationStatus.ACCEPTED, strict=True) is True
        assert can_transition("pending", ApplicationStatus.REJECTED, strict=True) is True

    def test_strict_decisions_are_final(self):
        assert can_transition("accepted", ApplicationStatus.PENDING, strict=True) is False
        assert can_transition("accepted", ApplicationStatus.REJECTED, strict=True) is False
        assert can_transition("rejected", ApplicationStatus.ACCEPTED, strict=True) is False

    def test_same_status_is_noop(self):
        assert can_transition("accepted", ApplicationStatus.ACCEPTED, strict=True) is True
