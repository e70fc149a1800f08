from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOME_NAME = ".ccard-activation"


@dataclass(frozen=True)
class ActivationPaths:
    home: Path
    config_dir: Path
    logs_dir: Path

    @property
    def config_path(self) -> Path:
        return self.config_dir / "activation.json"

    @property
    def log_path(self) -> Path:
        return self.logs_dir / "activation.log"


def resolve_activation_home(environ: dict[str, str] | None = None) -> Path:
    """Return ${CCARD_ACTIVATION_HOME}, or ~/.ccard-activation when unset.

    Relative values are anchored at the user's home, never at the CWD.
    """

    env = os.environ if environ is None else environ

    raw = (env.get("CCARD_ACTIVATION_HOME") or "").strip()
    if not raw:
        return (Path.home() / DEFAULT_HOME_NAME).resolve()

    candidate = Path(raw).expanduser()
    if not candidate.is_absolute():
        candidate = Path.home() / candidate
    return candidate.resolve()


def ensure_activation_layout(home: Path) -> ActivationPaths:
    home.mkdir(parents=True, exist_ok=True)

    config_dir = home / "config"
    logs_dir = home / "logs"

    for path in (config_dir, logs_dir):
        path.mkdir(parents=True, exist_ok=True)

    return ActivationPaths(home=home, config_dir=config_dir, logs_dir=logs_dir)
