from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

import uvicorn

from ccard_activation.app import create_app
from ccard_activation.config import load_app_config
from ccard_activation.home import ensure_activation_layout, resolve_activation_home
from ccard_activation.logs import LOG_FORMAT


def main() -> None:
    home = resolve_activation_home()
    paths = ensure_activation_layout(home)
    config = load_app_config(paths)

    logging.basicConfig(
        level=config.logging.level.upper(),
        format=LOG_FORMAT,
        handlers=[
            RotatingFileHandler(
                paths.log_path,
                maxBytes=config.logging.max_size_mb * 1024 * 1024,
                backupCount=config.logging.backup_count,
                encoding="utf-8",
            ),
            logging.StreamHandler(),
        ],
    )

    host = os.environ.get("CCARD_ACTIVATION_BIND") or config.network.bind_host

    env_port = os.environ.get("CCARD_ACTIVATION_PORT")
    port = int(env_port) if env_port else config.network.port

    uvicorn.run(create_app(config), host=host, port=port)


if __name__ == "__main__":
    main()
