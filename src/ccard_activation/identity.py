"""HTTP client for the identity server (the service of record for accounts)."""

from __future__ import annotations

import logging
from typing import Any, Final

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from ccard_activation.auth import bearer_headers
from ccard_activation.config import IdentityServerConfig

logger = logging.getLogger(__name__)

CHANGE_PASSWORD_PATH: Final[str] = "/api/citizens/change-password"
LOGIN_PATH: Final[str] = "/api/citizens/login"
ACTIVATION_CODE_MODE: Final[str] = "activationCode"


class MessageResponse(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    message: str | None = None


class IdentityServerError(Exception):
    """Base class for failed calls to the identity server."""


class UpstreamRejection(IdentityServerError):
    """The identity server answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str | None) -> None:
        super().__init__(message or f"Identity server responded with {status_code}")
        self.status_code = status_code
        self.message = message


class TransportFailure(IdentityServerError):
    """No response was received (network, DNS, malformed request)."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def parse_message_response(response: httpx.Response) -> MessageResponse | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    try:
        return MessageResponse.model_validate(body)
    except ValidationError:
        return None


def _describe_transport_error(exc: httpx.RequestError) -> str:
    text = str(exc).strip()
    return text or type(exc).__name__


class IdentityClient:
    """Thin async wrapper around the identity server's citizen endpoints.

    One instance is shared by the application; it holds no per-request state.
    """

    def __init__(
        self,
        config: IdentityServerConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=config.uri.rstrip("/"),
            headers=bearer_headers(config.api_key),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, path: str, payload: Any) -> httpx.Response:
        try:
            return await self._client.post(path, json=payload)
        except httpx.RequestError as exc:
            logger.error("Identity server request to %s failed: %r", path, exc)
            raise TransportFailure(_describe_transport_error(exc)) from exc

    async def change_password(
        self, *, activation_code: str, old_password: str, new_password: str
    ) -> MessageResponse:
        """Change a password using an activation code.

        Raises UpstreamRejection on a non-2xx answer and TransportFailure when
        no answer was received.
        """

        response = await self._post(
            CHANGE_PASSWORD_PATH,
            {
                "mode": ACTIVATION_CODE_MODE,
                "value": activation_code,
                "oldPassword": old_password,
                "newPassword": new_password,
            },
        )
        body = parse_message_response(response)

        if not response.is_success:
            logger.error(
                "change-password rejected: status=%s body=%s",
                response.status_code,
                response.text,
            )
            raise UpstreamRejection(response.status_code, body.message if body else None)

        logger.info("change-password accepted: status=%s", response.status_code)
        return body or MessageResponse()

    async def login(self, payload: dict[str, Any]) -> httpx.Response:
        """Forward a login payload verbatim; the raw response is returned."""

        return await self._post(LOGIN_PATH, payload)
