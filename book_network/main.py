"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import sessionmaker

from book_network.api import router
from book_network.core.config import Settings, get_settings
from book_network.core.database import SessionLocal
from book_network.core.logging import configure_logging
from book_network.core.request_gate import RequestGateMiddleware
from book_network.core.security import PasswordHasher

SWAGGER_UI_PATH = "/swagger-ui/index.html"


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker | None = None,
    password_hasher: PasswordHasher | None = None,
) -> FastAPI:
    """
    Build the application with its collaborators constructed up front.

    The hasher, settings and session factory live on app.state; route
    dependencies and the request gate read them from there.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Book Network API",
        version="0.1.0",
        openapi_url="/v3/api-docs",
        docs_url=SWAGGER_UI_PATH,
        swagger_ui_oauth2_redirect_url="/swagger-ui/oauth2-redirect.html",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory or SessionLocal
    app.state.password_hasher = password_hasher or PasswordHasher(rounds=settings.BCRYPT_ROUNDS)

    app.add_middleware(
        RequestGateMiddleware,
        session_factory=app.state.session_factory,
        settings=settings,
    )
    # Added last so it wraps the gate and answers CORS preflights first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/swagger-ui.html", include_in_schema=False)
    def swagger_ui_redirect() -> RedirectResponse:
        return RedirectResponse(url=SWAGGER_UI_PATH)

    return app


app = create_app()
