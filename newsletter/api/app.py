from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
from .utils.flash import LEVEL_ERROR, set_flash
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(
        f"Server error: {exc.base_error.code}: {exc.base_error.message}",
        exc_info=exc.base_error.cause,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    fields = [".".join(str(part) for part in e["loc"]) for e in exc.errors()]
    error_dict = {
        "code": "VALIDATION_ERROR",
        "message": f"Invalid request: {', '.join(fields)}",
    }
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict})


async def handle_anonymous_user(request: Request, exc: Exception):
    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    set_flash(response, "You must be logged in to access this page.", level=LEVEL_ERROR)
    return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield

    from newsletter.depends import blocking_pool, email_client, engine

    logger.info("Shutting down: closing the email client and the blocking work pool")
    await email_client.aclose()
    blocking_pool.shutdown()
    await engine.dispose()


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Newsletter API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from newsletter.api.routes import admin, health_check, login, password_reset, subscriptions
    from newsletter.depends import AnonymousUserError

    app.include_router(health_check.router, prefix=ApplicationConfig.API_PREFIX, tags=["Health"])
    app.include_router(login.router, prefix=ApplicationConfig.API_PREFIX, tags=["Authentication"])
    app.include_router(
        password_reset.router, prefix=ApplicationConfig.API_PREFIX, tags=["Password Reset"]
    )
    app.include_router(
        subscriptions.router, prefix=ApplicationConfig.API_PREFIX, tags=["Subscriptions"]
    )
    app.include_router(admin.router, prefix=ApplicationConfig.API_PREFIX, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(AnonymousUserError, handle_anonymous_user)

    return app
