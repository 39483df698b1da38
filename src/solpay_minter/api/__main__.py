"""
solpay_minter.api.__main__

Entrypoint for running the FastAPI application via `python -m solpay_minter.api`.

Responsibilities:
- Load `MINTER_*` settings.
- Build the app (config, catalog and RPC client are created by the factory).
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from solpay_minter.api.app import create_app
from solpay_minter.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# Also installed as the `solpay-minter` console script. The service keypair is read from
# settings here, so a missing or malformed key stops startup before uvicorn binds the port.
