import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .adapters.base import StorageReader
from .adapters.web3_reader import Web3StorageReader
from .config import Settings, get_settings
from .routes import estimate, health
from .services.estimate_service import EstimateService

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _setup_logging(level: str):
    """
    Configure basic logging. Unknown levels fall back to INFO.
    """
    logging.basicConfig(
        level=_LEVELS.get(level.strip().lower(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Optional[Settings] = None, reader: Optional[StorageReader] = None) -> FastAPI:
    """
    Build the estimator API.

    :param settings: Defaults to get_settings() (environment / .env).
    :param reader: Injected storage reader. When given, no RPC connection is made
        at startup and the reader is not closed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log = logging.getLogger(__name__)
        owned: Optional[Web3StorageReader] = None

        if reader is None:
            s = settings or get_settings()
            _setup_logging(s.LOG_LEVEL)
            log.info("Starting uniswap-estimator (lifespan startup)...")
            owned = Web3StorageReader(s.RPC_URL, timeout_sec=s.RPC_TIMEOUT_SEC)
            await owned.connect()
            app.state.estimate_service = EstimateService(owned)
        else:
            app.state.estimate_service = EstimateService(reader)

        try:
            yield
        finally:
            log.info("Shutting down uniswap-estimator (lifespan shutdown)...")
            if owned is not None:
                await owned.close()

    app = FastAPI(title="Uniswap V2 Estimator API", version="0.1.0", lifespan=lifespan)
    app.include_router(health.router)
    app.include_router(estimate.router)
    return app


app = create_app()


def run():
    s = get_settings()
    host, port = s.listen_host_port()
    uvicorn.run(create_app(s), host=host, port=port, log_level=_LEVELS.get(s.LOG_LEVEL.strip().lower(), logging.INFO))


if __name__ == "__main__":
    run()
