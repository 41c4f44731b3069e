import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sponsor_tracker.core.config import settings, require_jwt_secret
from sponsor_tracker.core.database import Database
from sponsor_tracker.core.log import configure_logging
from sponsor_tracker.routes.applications import router as applications_router
from sponsor_tracker.routes.companies import router as companies_router
from sponsor_tracker.routes.predict import router as predict_router
from sponsor_tracker.routes.stats import router as stats_router

logger = logging.getLogger(__name__)

_ERROR_CODE_BY_STATUS: dict[int, str] = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
}


def _error_code(status_code: int) -> str:
    return _ERROR_CODE_BY_STATUS.get(int(status_code), "HTTP_ERROR")


def http_exception_handler(request: Request, exc: HTTPException):  # noqa: ARG001
    detail = exc.detail
    message: str
    details: dict | None = None

    if isinstance(detail, str):
        message = detail
    elif isinstance(detail, dict):
        msg = detail.get("message")
        message = msg if isinstance(msg, str) and msg else "Request failed"
        det = detail.get("details")
        details = det if isinstance(det, dict) else None
    else:
        message = str(detail) if detail is not None else "Request failed"

    payload: dict = {"error": _error_code(exc.status_code), "message": message}
    if details:
        payload["details"] = details
    return JSONResponse(status_code=exc.status_code, content=payload, headers=exc.headers)


def validation_exception_handler(request: Request, exc: RequestValidationError):  # noqa: ARG001
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Invalid request payload",
            "details": {"errors": jsonable_errors(exc)},
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # `ctx` may carry the raw exception object, which JSON can't encode.
    out: list[dict] = []
    for err in exc.errors():
        err = dict(err)
        ctx = err.get("ctx")
        if isinstance(ctx, dict):
            err["ctx"] = {k: str(v) for k, v in ctx.items()}
        out.append(err)
    return out


def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = "An internal server error occurred"
    if not settings.is_prod:
        message = f"{type(exc).__name__}: {exc}"
    return JSONResponse(status_code=500, content={"error": "INTERNAL_ERROR", "message": message})


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the API.

    Pass `database` to share an existing handle (tests, scripts); the caller
    then owns closing it. Otherwise one is opened at startup and disposed at
    shutdown.
    """
    configure_logging()
    require_jwt_secret()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = database is None
        db = database if database is not None else Database(settings.database_url)
        app.state.database = db
        if settings.DB_CREATE_TABLES:
            db.create_all()
        logger.info(
            "Startup config: ENV=%s cors_origins=%d map_max_points=%s",
            settings.ENV,
            len(settings.CORS_ORIGINS),
            settings.MAP_MAX_POINTS,
        )
        try:
            yield
        finally:
            if owned:
                db.close()

    app = FastAPI(title="Sponsor Tracker", lifespan=lifespan)

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(companies_router)
    app.include_router(applications_router)
    app.include_router(predict_router)
    app.include_router(stats_router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()
