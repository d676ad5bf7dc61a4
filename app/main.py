import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.api.v1.router import api_router
from app.core.config import get_settings
from app.core.errors import StorageInitError, register_error_handlers
from app.core.storage import ensure_data_dir

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    if not ensure_data_dir(settings.DATA_DIR) and settings.REQUIRE_DATA_DIR:
        raise StorageInitError(f"Storage directory unavailable: {settings.DATA_DIR}")

    logger.info("Webhook server running on port %s", settings.PORT)
    logger.info("Bearer token: %s", settings.redacted_token())
    if settings.uses_default_token:
        logger.warning("BEARER_TOKEN is the placeholder default; set it before deploying")
    logger.info("Data will be saved to: %s", settings.DATA_DIR)
    yield

app = FastAPI(title=get_settings().PROJECT_NAME, version=get_settings().VERSION, lifespan=lifespan)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

register_error_handlers(app)

app.include_router(api_router)


def run():
    settings = get_settings()
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, proxy_headers=True)


if __name__ == "__main__":
    run()
