"""
solpay_minter.api.app

FastAPI app factory for the minting service.

Responsibilities:
- Build the runtime mint config, catalog and RPC client once.
- Build the FastAPI application and register routers/middleware.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from solpay_minter import __version__
from solpay_minter.api.routers.health import router as health_router
from solpay_minter.api.routers.mint import router as mint_router
from solpay_minter.catalog.store import Catalog, StaticCatalog, load_catalog
from solpay_minter.minting.config import MintConfig, build_mint_config
from solpay_minter.minting.ports import IssuanceInstructionBuilder, SolanaNetwork
from solpay_minter.observability.logging import configure_logging, get_logger
from solpay_minter.observability.middleware import RequestContextMiddleware
from solpay_minter.services.mint_dispatcher import MintCollaborators, MintDispatcher
from solpay_minter.settings import Settings
from solpay_minter.solana.bubblegum import build_mint_to_collection_instruction
from solpay_minter.solana.rpc import SolanaRpcClient

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    config: MintConfig | None = None,
    catalog: Catalog | None = None,
    network: SolanaNetwork | None = None,
    build_instruction: IssuanceInstructionBuilder = build_mint_to_collection_instruction,
) -> FastAPI:
    """
    Collaborators not passed in are built from `settings`; tests pass fakes.
    """

    configure_logging(service_name=settings.service_name, level=settings.log_level)

    config = config or build_mint_config(settings)
    if catalog is None:
        catalog = load_catalog(settings.catalog_path) if settings.catalog_path else StaticCatalog([])

    http: httpx.AsyncClient | None = None
    if network is None:
        http = httpx.AsyncClient(timeout=settings.rpc_timeout_seconds)
        network = SolanaRpcClient(
            http=http, url=settings.solana_rpc_url, commitment=settings.solana_commitment
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log.info(
            "startup",
            env=settings.env,
            service_address=str(config.service_address),
            catalog_items=len(catalog) if hasattr(catalog, "__len__") else None,
        )
        try:
            yield
        finally:
            if http is not None:
                await http.aclose()
            log.info("shutdown")

    app = FastAPI(
        title="Solana Pay cNFT Minter",
        version=__version__,
        docs_url="/docs" if settings.env != "prod" else None,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.network = network
    app.state.dispatcher = MintDispatcher(
        config=config,
        collaborators=MintCollaborators(
            catalog=catalog, network=network, build_instruction=build_instruction
        ),
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(mint_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Config and collaborators are fixed here and never mutated afterwards; request handlers
# only read them through `solpay_minter.api.deps`.
