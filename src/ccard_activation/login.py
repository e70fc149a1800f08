from __future__ import annotations

import logging
from typing import Any, Final

from ccard_activation.identity import IdentityClient, IdentityServerError

logger = logging.getLogger(__name__)

AUTHORIZED_MESSAGE: Final[str] = "authorized"

LoginPayload = dict[str, Any]


def is_authorized(body: Any) -> bool:
    """Reduce an identity server login response body to an authorization flag."""

    if not isinstance(body, dict):
        return False
    return body.get("message") == AUTHORIZED_MESSAGE


async def authenticate(client: IdentityClient, payload: LoginPayload) -> bool:
    """Forward ``payload`` to the identity server's login endpoint.

    Never raises: any transport or upstream failure yields False.
    """

    logger.info("Forwarding login payload with fields %s", sorted(payload))
    try:
        response = await client.login(payload)
    except IdentityServerError:
        return False

    if not response.is_success:
        logger.info("Login rejected by identity server: status=%s", response.status_code)
        return False

    try:
        body = response.json()
    except ValueError:
        logger.warning("Login response is not JSON: status=%s", response.status_code)
        return False

    authorized = is_authorized(body)
    logger.info("Login response: status=%s authorized=%s", response.status_code, authorized)
    return authorized
