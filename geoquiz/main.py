from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.config import settings
from .core.logging_setup import setup_logging
from .core.redis_manager import close_redis
from .domain.question_bank import QUESTION_BANK, validate_bank
from .api.v1.routers import quiz as quiz_router
from .api.v1.routers import ws_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(log_dir=settings.LOG_DIR, console_level=settings.LOG_LEVEL)
    # a bank the screen cannot show is a fatal configuration error
    validate_bank(QUESTION_BANK)
    yield
    await close_redis()

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
# the screen only reads, navigates and deletes sessions
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type"],
)

app.include_router(quiz_router.router, prefix=settings.API_V1_PREFIX)

app.include_router(ws_router.ws_router)

@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
