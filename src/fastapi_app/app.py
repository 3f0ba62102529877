"""FastAPI application factory with lifespan hook."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from fastapi_app.routes import router
from helpers.constants import APP_CONFIG, APP_LOGGER


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration on startup."""
    APP_LOGGER.info(msg="Bedrock Quota Guard config", **APP_CONFIG)
    yield


app = FastAPI(
    title="Bedrock Quota Guard",
    description="Bedrock quota dashboard & threshold alarms on CloudWatch",
    version="1.0.0",
    lifespan=lifespan,
)
app.include_router(router)


@app.get("/")
@app.get("/health")
def health():
    """Lightweight health probe."""
    return {"status": "healthy", "service": "bedrock-quota-guard"}
