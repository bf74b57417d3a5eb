"""
Decision Compass FastAPI Application.

Guided questionnaire → scored decision recommendation:
  POST /decision/start               → open a session
  POST /decision/answer              → submit one answer
  GET  /decision/{session_id}/result → scores, risk, verdict, confidence
  GET  /questions                    → question catalog
  GET  /health                       → {"status": "ok"}
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes.decision import router as decision_router
from app.api.routes.health import APP_VERSION, router as health_router
from app.api.routes.questions import router as questions_router
from app.config import settings
from app.core.exceptions import DecisionCompassError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("compass")

app = FastAPI(
    title="Decision Compass",
    description="Guided questionnaire that turns weighted answers into a decision recommendation",
    version=APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(decision_router)
app.include_router(questions_router)
app.include_router(health_router)


@app.exception_handler(DecisionCompassError)
async def domain_exception_handler(request: Request, exc: DecisionCompassError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.error_code}): {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "detail": str(exc)},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = await request.body()
    logger.error(f"Validation Error. Raw body: {body.decode('utf-8')[:500]} | Errors: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"error": "validation_error", "detail": jsonable_errors(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "detail": "Internal server error"},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Pydantic errors with the unserializable ``ctx``/``input`` parts dropped."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
