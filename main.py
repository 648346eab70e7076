"""
Student review generator API server.

Usage:
    python main.py                 # serve on $PORT (default 8000)
    python main.py --dev --port 8100
"""

import argparse
import logging
import os
from contextlib import asynccontextmanager

import sentry_sdk
from dotenv import load_dotenv
from fastapi import FastAPI

load_dotenv()
load_dotenv(".env.local", override=True)

from core.database import close_engine
from core.reviews import load_reference_data
from web_api.routes.reviews import router as reviews_router

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SENTRY_DSN = os.environ.get("SENTRY_DSN")
if SENTRY_DSN:
    sentry_sdk.init(dsn=SENTRY_DSN, traces_sample_rate=0.0)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load reference data once at start-up; dispose the engine on shutdown."""
    await load_reference_data()
    yield
    await close_engine()


app = FastAPI(title="Student Review Generator", lifespan=lifespan)
app.include_router(reviews_router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


def main() -> None:
    import uvicorn

    parser = argparse.ArgumentParser(description="Run the review generator API")
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")))
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--dev", action="store_true", help="Enable auto-reload")
    args = parser.parse_args()

    logger.info("Starting server on %s:%d", args.host, args.port)
    uvicorn.run("main:app", host=args.host, port=args.port, reload=args.dev)


if __name__ == "__main__":
    main()
