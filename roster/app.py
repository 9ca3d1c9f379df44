import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from roster.modules.config import APP_TITLE, CORS_ORIGINS, configure_logging
from roster.modules.users.api import user_router, register_exception_handlers
from roster.modules.users.repositories.user_repository import InMemoryUserRepository
from roster.modules.users.services.user_service import UserService

logger = logging.getLogger("roster.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {APP_TITLE} | users={app.state.user_service.count_users()}")
    yield
    # Shutdown
    logger.info(f"Stopping {APP_TITLE} | users={app.state.user_service.count_users()}")


def create_app(user_service: Optional[UserService] = None) -> FastAPI:
    """
    Build the application. The user store is created here, once per app,
    unless a service is supplied.
    """
    configure_logging()

    app = FastAPI(title=APP_TITLE, version="0.1.0", lifespan=lifespan)
    app.state.user_service = user_service or UserService(InMemoryUserRepository())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(user_router)

    @app.get("/")
    async def root():
        return {"status": "online", "system": APP_TITLE}

    @app.get("/health")
    async def health():
        return {"status": "healthy", "users": app.state.user_service.count_users()}

    return app


app = create_app()
