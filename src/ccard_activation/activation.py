"""Server-rendered account activation form.

GET renders the form (optionally pre-filled from ``?code=``); POST validates
the submission and asks the identity server to swap the temporary password
for the new one. Every outcome ends in a rendered page.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ccard_activation.dependencies import get_identity_client, get_message_catalog
from ccard_activation.i18n import MessageCatalog, build_message_catalog
from ccard_activation.identity import IdentityClient, TransportFailure, UpstreamRejection
from ccard_activation.validation import ActivationRequest, validate_activation

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

ACTIVATION_VIEW = "activation.html"
SUCCESS_VIEW = "success.html"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["activation"])


def _render_form(
    request: Request,
    catalog: MessageCatalog,
    *,
    data: dict[str, Any],
    validation_errors: dict[str, str] | None = None,
    error: str | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        ACTIVATION_VIEW,
        {
            "title": catalog.messages.activate_login_title,
            "lang": catalog.locale,
            "labels": catalog.labels,
            "data": data,
            "validation_errors": validation_errors or {},
            "error": error,
        },
        status_code=status_code,
    )


def render_error_page(request: Request, *, status_code: int) -> HTMLResponse:
    """Activation form with the generic error, for failures outside the handlers."""

    catalog = getattr(request.app.state, "message_catalog", None) or build_message_catalog()
    return _render_form(
        request,
        catalog,
        data={},
        error=catalog.messages.unexpected_error,
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
async def activation_form(
    request: Request,
    code: str | None = None,
    catalog: MessageCatalog = Depends(get_message_catalog),  # noqa: B008
) -> HTMLResponse:
    return _render_form(request, catalog, data={"activationCode": code or ""})


@router.post("/", response_class=HTMLResponse)
async def activation_submit(
    request: Request,
    catalog: MessageCatalog = Depends(get_message_catalog),  # noqa: B008
    client: IdentityClient = Depends(get_identity_client),  # noqa: B008
) -> HTMLResponse:
    form = ActivationRequest.from_form(await request.form())
    data = form.form_data()

    validation_errors = validate_activation(form, catalog.validation_message)
    if validation_errors:
        logger.info("Activation form rejected: fields=%s", sorted(validation_errors))
        return _render_form(
            request, catalog, data=data, validation_errors=validation_errors, status_code=400
        )

    try:
        await client.change_password(
            activation_code=form.activation_code,
            old_password=form.old_password,
            new_password=form.new_password,
        )
    except UpstreamRejection as exc:
        return _render_form(
            request,
            catalog,
            data=data,
            error=exc.message or catalog.messages.unexpected_error,
            status_code=400,
        )
    except TransportFailure as exc:
        return _render_form(request, catalog, data=data, error=exc.detail, status_code=502)

    return templates.TemplateResponse(
        request,
        SUCCESS_VIEW,
        {
            "title": catalog.messages.activate_login_success_title,
            "lang": catalog.locale,
            "message": catalog.messages.activate_login_success_title,
            "sub_message": catalog.messages.activate_login_success_message,
        },
    )
