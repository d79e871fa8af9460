import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from routers.admin import router as admin_router

# Routers
from routers.health import router as health_router
from routers.marking import router as marking_router
from routers.questions import router as questions_router
from routers.session import router as session_router
from session import run_ticker

logger = logging.getLogger("sentence-builder")
logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ticker = None
    if config.AUTO_TICK:
        ticker = asyncio.create_task(run_ticker())
        logger.info("session ticker started")
    try:
        yield
    finally:
        if ticker is not None:
            ticker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await ticker


app = FastAPI(title="Sentence Builder – Exercise API", lifespan=lifespan)

# Allow calls from the renderer (dev server by default)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def health_root():
    return {"ok": True}


# Register routers
app.include_router(marking_router)  # /normalize, /mark, /mark-batch
app.include_router(session_router)  # /session/...
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...
app.include_router(questions_router)  # /questions/...
