"""FastAPI application for verifying legacy PHPass credentials during a migration."""

import logging

from fastapi import FastAPI

from phpass_verify.config import get_settings
from phpass_verify.middleware import BasicAuthMiddleware
from phpass_verify.routers import verify

logger = logging.getLogger(__name__)


def create_app(get_settings_fn=get_settings) -> FastAPI:
    settings = get_settings_fn()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="phpass-verify")
    app.add_middleware(BasicAuthMiddleware, get_settings_fn=get_settings_fn)
    app.dependency_overrides[get_settings] = get_settings_fn
    app.include_router(verify.router)

    @app.get("/api/ping")
    async def ping():
        return {"status": "ok"}

    logger.info(
        "Service ready (auth %s, max count exponent %d)",
        "enabled" if settings.is_auth_configured else "disabled",
        settings.max_count_log2,
    )
    return app


app = create_app()
