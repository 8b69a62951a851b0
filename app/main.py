import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes.admin_progress_reset import router as admin_progress_reset_router
from app.api.routes.entitlements import router as entitlements_router
from app.api.routes.health import router as health_router
from app.api.routes.stripe_webhook import router as stripe_webhook_router
from app.core.config import get_settings
from app.core.logging import configure_logging

CORS_ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    is_prod = settings.app_env == "prod"
    app = FastAPI(
        title="Season Pass Entitlement API",
        version="0.1.0",
        docs_url=None if is_prod else "/docs",
        redoc_url=None if is_prod else "/redoc",
        openapi_url=None if is_prod else "/openapi.json",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origin_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=CORS_ALLOWED_HEADERS,
    )
    app.include_router(health_router)
    app.include_router(stripe_webhook_router)
    app.include_router(entitlements_router)
    app.include_router(admin_progress_reset_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
