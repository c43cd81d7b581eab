from collections.abc import Callable

UserListener = Callable[[dict | None], None]


class UserStore:
    """Client-side holder for the signed-in user.

    Views read `user` and call `set_user` with whatever the server returned;
    the stored object is replaced wholesale, never merged. Subscribers are
    called after every write.
    """

    def __init__(self, user: dict | None = None):
        self._user = user
        self._listeners: list[UserListener] = []

    @property
    def user(self) -> dict | None:
        return self._user

    def set_user(self, user: dict | None):
        self._user = user
        for listener in list(self._listeners):
            listener(user)

    def clear(self):
        self.set_user(None)

    def subscribe(self, listener: UserListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


class SavedJobs:
    """Jobs marked "save for later". Lives only as long as the session."""

    def __init__(self):
        self._ids: set[str] = set()

    def toggle(self, job_id: str) -> bool:
        if job_id in self._ids:
            self._ids.discard(job_id)
            return False
        self._ids.add(job_id)
        return True

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)
