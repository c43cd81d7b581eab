import asyncio
import logging

import httpx

from webui.config import client_settings
from webui.forms import ProfileForm, encode_profile_update

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A call that failed in a way the UI has to explain to the user."""


class ServerError(ApiError):
    """The server answered with an error status."""

    def __init__(self, status_code: int, message: str = ""):
        super().__init__(message or f"HTTP {status_code}")
        self.status_code = status_code
        self.message = message


class NoResponseError(ApiError):
    """The request went out but nothing came back (timeout, network)."""


class RequestSetupError(ApiError):
    """The request could not be built or sent at all."""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if isinstance(message, str):
            return message
    return ""


class JobBoardApi:
    def __init__(
        self,
        base_url: str | None = None,
        user_id: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or client_settings.api_base_url).rstrip("/")
        self.user_id = user_id
        self.timeout = timeout if timeout is not None else client_settings.request_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {}
        if self.user_id:
            headers["X-User-ID"] = str(self.user_id)
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def request(self, method: str, path: str, **kwargs) -> dict:
        try:
            async with self._client() as client:
                # httpx timeouts are per phase; the deadline covers the whole call
                response = await asyncio.wait_for(client.request(method, path, **kwargs), self.timeout)
        except (TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("%s %s timed out after %.1fs", method, path, self.timeout)
            raise NoResponseError("Request timed out") from exc
        except httpx.UnsupportedProtocol as exc:
            raise RequestSetupError(str(exc)) from exc
        except httpx.RequestError as exc:
            logger.warning("%s %s got no response: %s", method, path, exc)
            raise NoResponseError(str(exc)) from exc
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise RequestSetupError(str(exc)) from exc

        if response.is_error:
            raise ServerError(response.status_code, _error_message(response))
        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ServerError(response.status_code, "Invalid response from server") from exc

    async def register_user(self, fullname: str, email: str, phone_number: str = "", role: str = "student") -> dict:
        return await self.request(
            "POST",
            "/user/register",
            json={"fullname": fullname, "email": email, "phone_number": phone_number, "role": role},
        )

    async def current_user(self) -> dict:
        return await self.request("GET", "/user/me")

    async def update_profile(self, form: ProfileForm) -> dict:
        encoded = encode_profile_update(form)
        return await self.request(
            "POST",
            "/user/profile/update",
            data=encoded.data,
            files=encoded.files or None,
        )

    async def list_jobs(self, keyword: str | None = None) -> dict:
        params = {"keyword": keyword} if keyword else None
        return await self.request("GET", "/job/get", params=params)

    async def get_job(self, job_id: str) -> dict:
        return await self.request("GET", f"/job/get/{job_id}")

    async def apply(self, job_id: str) -> dict:
        return await self.request("POST", f"/application/apply/{job_id}")

    async def applied_jobs(self) -> dict:
        return await self.request("GET", "/application/get")
