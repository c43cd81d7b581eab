from dataclasses import dataclass


@dataclass(frozen=True)
class Notification:
    level: str  # success, error
    message: str


class Notifier:
    """Collects user-facing messages in the order they were raised."""

    def __init__(self):
        self.notifications: list[Notification] = []

    def success(self, message: str):
        self.notifications.append(Notification("success", message))

    def error(self, message: str):
        self.notifications.append(Notification("error", message))

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None
