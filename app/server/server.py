from fastapi import FastAPI

from api.router import api_router
from api.dependencies.rate_limits import setup_rate_limiter
from server.lifespan import lifespan


def create_app() -> FastAPI:
    """Build the FastAPI application serving the mailbox."""
    app = FastAPI(title="Mailbox Relay", lifespan=lifespan)
    setup_rate_limiter(app)
    app.include_router(api_router)
    return app


handler = create_app()
