"""
Token Balance Alerts — FastAPI application (port 8010)

Receives transaction events, keeps a durable heartbeat, checks the sender's
balances against per-chain thresholds and raises Slack alerts.
"""
from contextlib import asynccontextmanager
import httpx
from fastapi import FastAPI
from shared.secrets import Secrets
from shared.storage import get_storage
from shared.utils.logging import setup_logging
from actions.token_alerts.config import ACTION_NAME
from actions.token_alerts.routes.api import router
from actions.token_alerts.services.handler import ActionContext
import structlog

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    http_client = httpx.AsyncClient()
    app.state.context = ActionContext(
        secrets=Secrets.from_settings(),
        storage=get_storage(),
        http_client=http_client,
    )
    logger.info("token_alerts_starting", action=ACTION_NAME)

    yield

    await http_client.aclose()
    logger.info("token_alerts_stopped")


app = FastAPI(
    title="Token Balance Alerts",
    description="Threshold-based balance alerts for relayers and signers, triggered by on-chain transactions, with a Slack heartbeat.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("actions.token_alerts.main:app", host="0.0.0.0", port=8010, reload=True)
