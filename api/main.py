import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import config, db, errors
from core.limits import BodySizeLimitMiddleware
from core.log import configure_logging
from sightings import router as sightings_router
from summary import router as summary_router

SERVICE_NAME = "invasive-sightings-api"

load_dotenv()
configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process; fails startup when DATABASE_URL is missing.
    app.state.pool = await db.create_pool()
    try:
        yield
    finally:
        await db.close_pool(app.state.pool)
        app.state.pool = None


app = FastAPI(title=SERVICE_NAME, lifespan=lifespan)
errors.install(app)

app.add_middleware(BodySizeLimitMiddleware, max_bytes=config.max_body_bytes())

# Open to any origin; there are no cookies or credentials to protect.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sightings_router.router, tags=["sightings"])
app.include_router(summary_router.router, tags=["summary"])


@app.get("/health")
def health() -> dict:
    return {"ok": True, "service": SERVICE_NAME}


def run() -> None:
    port = config.port()
    logger.info("api_starting port=%s", port)
    uvicorn.run(app, host=config.host(), port=port)


if __name__ == "__main__":
    run()
