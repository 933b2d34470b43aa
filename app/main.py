import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.config import Settings, settings
from app.services.container import AgentServices, build_services
from app.services.github import close_github_client


def setup_logging(debug: bool = False) -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    # Configure root logger
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    # Quieten uvicorn access logs (we'll log requests ourselves)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# Paths always worth a log line, whatever the status
LOGGED_PATH_KEYWORDS = ("analyze", "webhook", "fix-gaps", "trigger", "reset")


def create_app(config: Settings = settings, services: AgentServices | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Settings to run with
        services: Pre-built service graph; built from `config` when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan: startup and shutdown events."""
        # Startup
        setup_logging(config.debug)
        if getattr(app.state, "services", None) is None:
            app.state.services = build_services(config)
        logger.info("Docs agent starting up")
        logger.info(f"  Docs repo:    {config.docs_repo_full_name}")
        logger.info(f"  Product repo: {config.product_repo_full_name}")
        logger.info(f"  Access level: {config.agent_access_level}")
        if not config.github_token:
            logger.warning("GITHUB_TOKEN is not set; GitHub calls will be rejected")
        if not config.admin_auth_enabled:
            logger.warning("ADMIN_SECRET is not set; admin endpoints are unauthenticated")
        yield
        # Shutdown
        await close_github_client()
        logger.info("Docs agent shutting down")

    app = FastAPI(
        title="Docs Agent",
        description="Keeps product documentation in step with code changes",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.services = services

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log HTTP requests, skipping OPTIONS preflight."""
        # Skip OPTIONS (CORS preflight) and health checks
        if request.method == "OPTIONS" or request.url.path == "/health":
            return await call_next(request)

        response = await call_next(request)

        # Only log non-2xx or important endpoints
        path = request.url.path
        if response.status_code >= 400 or any(keyword in path for keyword in LOGGED_PATH_KEYWORDS):
            logger.info(f"{request.method} {path} -> {response.status_code}")

        return response

    # Include API routes
    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
