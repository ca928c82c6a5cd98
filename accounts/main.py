"""FastAPI application entrypoint for the user accounts service."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from accounts.api.v1 import router as v1_router
from accounts.core.config import Settings, settings

# Account endpoints relative to API_V1_PREFIX, grouped by who may call them.
ACCOUNT_ENDPOINTS: dict[str, list[str]] = {
    "auth": ["/auth/register", "/auth/login", "/auth/refresh"],
    "admin": [
        "/admin/get-all-users",
        "/admin/get-users/{user_id}",
        "/admin/update/{user_id}",
        "/admin/delete/{user_id}",
    ],
    "profile": ["/adminuser/get-profile"],
    "health": ["/health/"],
}


def create_app(config: Settings) -> FastAPI:
    """Build the accounts app: open CORS only in dev, v1 routers under the configured prefix."""
    application = FastAPI(
        title="User Accounts API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if config.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(v1_router, prefix=config.API_V1_PREFIX)

    @application.get("/")
    def root() -> dict[str, object]:
        return {
            "message": "User Accounts API",
            "api": config.API_V1_PREFIX,
            "endpoints": {
                group: [f"{config.API_V1_PREFIX}{path}" for path in paths]
                for group, paths in ACCOUNT_ENDPOINTS.items()
            },
        }

    return application


app = create_app(settings)
