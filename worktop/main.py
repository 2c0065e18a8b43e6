from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import worktop

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("worktop")

app = FastAPI(
    title=settings.APP_NAME,
    description="Validation and pricing of custom-cut linear worktops",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(worktop.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "worktop-quoting-engine"}
