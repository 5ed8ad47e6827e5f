# backend/homelist/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
import time
from typing import Any, Dict, List

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from homelist.core.logging_setup import setup_logging
from homelist.core.settings import settings
from homelist.db import close_db, get_session_factory
from homelist.routers.apartment import router as apartments_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    logger.info("homelist API ready (allowed origin: %s)", settings.ALLOWED_ORIGIN)
    yield
    await close_db()


app = FastAPI(
    title="homelist Apartment Listing API",
    lifespan=lifespan,
)

# ───── CORS ─────
# A single browser origin, read-only + create.
app.add_middleware(
   CORSMiddleware,
   allow_origins=[settings.ALLOWED_ORIGIN],
   allow_methods=["GET", "POST"],
   allow_headers=["Content-Type"],
   allow_credentials=False,  # no session cookies
)

# ───── Errors ─────
def flatten_errors(errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    {"formErrors": [...], "fieldErrors": {"pageSize": ["..."]}}
    Errors that point at a field are grouped by its top-level name,
    anything else (malformed body, missing body) goes to formErrors.
    """
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}
    for err in errors:
        loc = list(err.get("loc", ()))[1:]  # drop "body" / "query" / "path"
        msg = err.get("msg", "Invalid value")
        if loc and isinstance(loc[0], str):
            field_errors.setdefault(loc[0], []).append(msg)
        else:
            form_errors.append(msg)
    return {"formErrors": form_errors, "fieldErrors": field_errors}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("validation error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": flatten_errors(exc.errors())},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    status_code, message = exc.status_code, exc.detail
    headers = getattr(exc, "headers", None)
    # unmatched path or method: the router's own 404/405 carry the default phrase
    if (status_code, message) in (
        (status.HTTP_404_NOT_FOUND, "Not Found"),
        (status.HTTP_405_METHOD_NOT_ALLOWED, "Method Not Allowed"),
    ):
        status_code, message, headers = status.HTTP_404_NOT_FOUND, "Route not found", None
    return JSONResponse(
        status_code=status_code,
        content={"message": message},
        headers=headers,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )

# ───── Health ─────
@app.get("/health")
async def health():
    return {"status": "ok"}

@app.get("/health/db")
async def health_db(session_factory=Depends(get_session_factory)):
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
        return {"db": True}
    except Exception:
        logger.warning("database health check failed", exc_info=True)
        return {"db": False}

# ───── Routers ─────
app.include_router(apartments_router)  # /api/apartments


@app.middleware("http")
async def log_timing(request: Request, call_next):
    t0 = time.perf_counter()
    resp = await call_next(request)
    dt = (time.perf_counter() - t0) * 1000
    logger.info("[%s] %s?%s -> %s %.1fms", request.method, request.url.path, request.query_params, resp.status_code, dt)
    return resp


def run() -> None:
    import uvicorn

    uvicorn.run("homelist.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
