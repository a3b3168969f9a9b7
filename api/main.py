import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from assets import router as assets_router
from auth import router as auth_router
from core import db, settings
from core.errors import register_error_handlers
from directory import router as directory_router
from entries import router as entries_router
from moderation import router as moderation_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings.configure_logging()
    # Initialize the DB pool once per process.
    await db.init_pool()
    logger.info("directory api started")
    try:
        yield
    finally:
        await db.close_pool()
        logger.info("directory api stopped")


app = FastAPI(title="Project Directory API", lifespan=lifespan)

# Allow the web frontend to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(directory_router.router, tags=["directory"])
app.include_router(entries_router.router, tags=["submissions"])
app.include_router(assets_router.router, tags=["assets"])
app.include_router(moderation_router.router, tags=["moderation"])
app.include_router(auth_router.router, tags=["auth"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "project directory api"}
