# macrolog/main.py
import logging
import time
import traceback
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from macrolog.config import settings

# Routers
from macrolog.routers import activity, bmr, goals, intake, summary, targets, tdee

# ───────────────────────────────────────────────
# Logging
# ───────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
log = logging.getLogger("macrolog")


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"code": code, "message": message}})


def create_app() -> FastAPI:
    app = FastAPI(title="Macrolog API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Correlation ID + access log ──────────────
    @app.middleware("http")
    async def correlation_and_access_log(request: Request, call_next):
        cid = request.headers.get("x-correlation-id") or str(uuid.uuid4())
        request.state.correlation_id = cid
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)
            log.info("access cid=%s %s %s status=%s dur_ms=%d", cid, request.method, request.url.path, status, duration_ms)
        response.headers["x-correlation-id"] = cid
        return response

    # ── Error handlers (never leak internals) ────
    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        log.warning("invalid_input path=%s error=%s", request.url.path, exc)
        return _error(400, "invalid_input", str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        cid = getattr(request.state, "correlation_id", None)
        log.error(
            "unhandled_error cid=%s path=%s error=%r\n%s",
            cid,
            request.url.path,
            exc,
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        )
        return _error(500, "internal_error", "Something went wrong. Please try again.")

    @app.get("/", summary="Root")
    def root():
        return {"message": "Macrolog API is running"}

    @app.get("/health", tags=["health"], summary="Health")
    def health():
        return {"status": "ok"}

    # API routers
    app.include_router(bmr.router, prefix="/v1", tags=["bmr"])
    app.include_router(targets.router, prefix="/v1/targets", tags=["targets"])
    app.include_router(intake.router, prefix="/v1/intake", tags=["intake"])
    app.include_router(activity.router, prefix="/v1/activity", tags=["activity"])
    app.include_router(goals.router, prefix="/v1/goals", tags=["goals"])
    app.include_router(tdee.router, prefix="/v1/tdee", tags=["tdee"])
    app.include_router(summary.router, prefix="/v1/summary", tags=["summary"])

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    log.info("Starting Macrolog API on http://%s:%s", settings.API_HOST, settings.API_PORT)
    uvicorn.run("macrolog.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=True)
