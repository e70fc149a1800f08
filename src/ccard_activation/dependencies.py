from __future__ import annotations

from fastapi import HTTPException, Request

from ccard_activation.i18n import MessageCatalog
from ccard_activation.identity import IdentityClient


def get_message_catalog(request: Request) -> MessageCatalog:
    catalog = getattr(request.app.state, "message_catalog", None)
    if catalog is None:
        raise HTTPException(status_code=500, detail="Message catalog not initialized")
    return catalog


def get_identity_client(request: Request) -> IdentityClient:
    client = getattr(request.app.state, "identity_client", None)
    if client is None:
        raise HTTPException(status_code=500, detail="Identity client not initialized")
    return client
