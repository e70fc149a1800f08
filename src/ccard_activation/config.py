from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ccard_activation.home import ActivationPaths
from ccard_activation.i18n import DEFAULT_LOCALE, MessageCatalog, build_message_catalog


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class IdentityServerConfig(_FrozenModel):
    uri: str = Field(
        default="http://127.0.0.1:3000",
        description="Base URI of the identity server, e.g. https://identity.example.org",
    )
    api_key: str = Field(
        default="", description="Static key sent as 'Authorization: Bearer <api_key>'"
    )


class NetworkConfig(_FrozenModel):
    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)


class LoggingConfig(_FrozenModel):
    level: str = Field(default="INFO")
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class AuthConfig(_FrozenModel):
    api_token: str | None = Field(
        default=None,
        description=(
            "Token callers of /api/* must send as 'Authorization: Bearer <api_token>'. "
            "When unset the /api routes answer 503."
        ),
    )


class I18nConfig(_FrozenModel):
    locale: str = Field(default=DEFAULT_LOCALE)
    overrides: dict[str, Any] = Field(
        default_factory=dict,
        description=(
            "Per-key catalog overrides, e.g. {'messages': {'unexpectedError': '...'}}."
        ),
    )


class AppConfig(_FrozenModel):
    version: str = Field(default="1")
    identity_server: IdentityServerConfig = Field(default_factory=IdentityServerConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)

    def message_catalog(self) -> MessageCatalog:
        return build_message_catalog(self.i18n.locale, self.i18n.overrides)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def apply_env_overrides(config: AppConfig, environ: dict[str, str] | None = None) -> AppConfig:
    """Overlay the CCARD_* environment variables on top of ``config``."""

    env = os.environ if environ is None else environ

    identity_update: dict[str, Any] = {}
    uri = (env.get("CCARD_IDENTITY_SERVER_URI") or "").strip()
    if uri:
        identity_update["uri"] = uri
    api_key = (env.get("CCARD_IDENTITY_SERVER_APIKEY") or "").strip()
    if api_key:
        identity_update["api_key"] = api_key

    update: dict[str, Any] = {}
    if identity_update:
        update["identity_server"] = config.identity_server.model_copy(update=identity_update)

    api_token = (env.get("CCARD_API_TOKEN") or "").strip()
    if api_token:
        update["auth"] = config.auth.model_copy(update={"api_token": api_token})

    locale = (env.get("CCARD_LOCALE") or "").strip()
    if locale:
        update["i18n"] = config.i18n.model_copy(update={"locale": locale})

    if not update:
        return config
    return config.model_copy(update=update)


def load_app_config(
    paths: ActivationPaths, environ: dict[str, str] | None = None
) -> AppConfig:
    """Load config from ${CCARD_ACTIVATION_HOME}/config/activation.json.

    - If missing: starts from defaults.
    - Validation is performed by Pydantic.
    - Environment overrides are applied last.
    """

    config_path = paths.config_path
    if config_path.exists():
        config = AppConfig.model_validate(_read_json(config_path))
    else:
        config = AppConfig()

    return apply_env_overrides(config, environ)
