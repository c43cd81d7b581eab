import logging

from webui.api import JobBoardApi, NoResponseError, RequestSetupError, ServerError
from webui.forms import ProfileForm, ResumeFile
from webui.notifications import Notifier
from webui.state import UserStore

logger = logging.getLogger(__name__)

UNSUCCESSFUL_MESSAGE = "Something went wrong, please try again."
SERVER_ERROR_MESSAGE = "An error occurred. Please try again."
NO_RESPONSE_MESSAGE = "No response from the server. Please try again later."
SETUP_ERROR_MESSAGE = "Error in setting up the request."


class ProfileUpdateDialog:
    """Edit-profile dialog: form state, submission and its outcome.

    The form is re-populated from the store whenever the dialog opens or the
    stored user changes. A failed submit leaves the dialog open with the
    user's input intact; only a successful one closes it.
    """

    def __init__(self, store: UserStore, api: JobBoardApi, notifier: Notifier):
        self.store = store
        self.api = api
        self.notifier = notifier
        self.is_open = False
        self.loading = False
        self.form = ProfileForm.from_user(store.user)
        self._unsubscribe = store.subscribe(self._sync)

    def _sync(self, user: dict | None):
        self.form = ProfileForm.from_user(user)

    def open(self):
        self._sync(self.store.user)
        self.is_open = True

    def close(self):
        self.is_open = False

    def change(self, **fields):
        self.form = self.form.model_copy(update=fields)

    def choose_file(self, filename: str, content: bytes, content_type: str = "application/pdf"):
        self.change(file=ResumeFile(filename=filename, content=content, content_type=content_type))

    async def submit(self) -> bool:
        self.loading = True
        try:
            body = await self.api.update_profile(self.form)
        except ServerError as exc:
            logger.warning("Profile update rejected (%d): %s", exc.status_code, exc.message)
            self.notifier.error(exc.message or SERVER_ERROR_MESSAGE)
            return False
        except NoResponseError as exc:
            logger.warning("Profile update got no response: %s", exc)
            self.notifier.error(NO_RESPONSE_MESSAGE)
            return False
        except RequestSetupError as exc:
            logger.warning("Profile update request could not be built: %s", exc)
            self.notifier.error(SETUP_ERROR_MESSAGE)
            return False
        finally:
            self.loading = False

        if not body.get("success"):
            self.notifier.error(UNSUCCESSFUL_MESSAGE)
            return False

        self.store.set_user(body.get("user"))
        self.notifier.success(body.get("message") or "Profile updated.")
        self.close()
        return True

    def dispose(self):
        self._unsubscribe()
