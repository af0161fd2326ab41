import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deps.quizzes import APP_LOGGER_NAME
from errors import QuizError, ValidationFailed

# Routers
from routers.health import router as health_router
from routers.quizzes import router as quizzes_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    datefmt="%d/%m/%y %H:%M:%S",
)
logger = logging.getLogger(APP_LOGGER_NAME)

app = FastAPI(title="Simple Math Quizzes API")

_DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
]
_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins or _DEFAULT_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-api-key", "x-user-id"],
)


@app.exception_handler(QuizError)
async def quiz_error_handler(request: Request, exc: QuizError):
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # malformed request bodies/paths are bad input, reported like any other validation failure
    errors = [
        {k: v for k, v in err.items() if k in ("type", "loc", "msg")} for err in exc.errors()
    ]
    failure = ValidationFailed("Request data was invalid", errors)
    logger.info("%s %s -> invalid request (%d errors)", request.method, request.url.path, len(errors))
    return JSONResponse(status_code=failure.status_code, content=jsonable_encoder(failure.to_dict()))


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(quizzes_router)  # /api/quiz/...
app.include_router(health_router)  # /health/...


def run() -> None:
    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    run()
