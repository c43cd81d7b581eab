import logging

from app.models.application import ApplicationStatus

logger = logging.getLogger(__name__)

# Only a pending application can be decided; decisions are final.
STRICT_TRANSITIONS: dict[ApplicationStatus, set[ApplicationStatus]] = {
    ApplicationStatus.PENDING: {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED},
    ApplicationStatus.ACCEPTED: set(),
    ApplicationStatus.REJECTED: set(),
}


def parse_status(value: str) -> ApplicationStatus | None:
    """Case-insensitive lookup; None for anything outside the enum."""
    try:
        return ApplicationStatus(value.strip().lower())
    except ValueError:
        return None


def can_transition(current: str, target: ApplicationStatus, strict: bool) -> bool:
    """Whether an application in `current` may move to `target`.

    Same-status updates are always allowed. Without `strict`, any status may
    follow any other.
    """
    if current == target:
        return True
    if not strict:
        return True
    allowed = STRICT_TRANSITIONS.get(ApplicationStatus(current), set())
    if target not in allowed:
        logger.warning("Rejected status transition %s -> %s", current, target)
        return False
    return True
