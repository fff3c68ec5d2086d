"""
Token Alerts REST API routes.
"""
from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import ValidationError
from web3.exceptions import Web3Exception
from shared.auth import verify_api_key
from shared.storage import DatabaseStorage
from actions.token_alerts.config import ACTION_NAME, HEART_BEAT_COUNTER_KEY, TOKEN_THRESHOLD_KEY
from actions.token_alerts.models.schemas import (
    ChainResponse, HealthResponse, InvocationResult, ThresholdConfig, TransactionEvent,
)
from actions.token_alerts.services.chains import CHAINS
from actions.token_alerts.services.handler import ActionContext, handle_transaction_event
import structlog

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1/token-alerts", tags=["token-alerts"])


def get_context(request: Request) -> ActionContext:
    return request.app.state.context


@router.get("/health", response_model=HealthResponse)
async def health(ctx: ActionContext = Depends(get_context)):
    resp = HealthResponse(action=ACTION_NAME)
    resp.storage = "database" if isinstance(ctx.storage, DatabaseStorage) else "memory"
    try:
        resp.heartbeat_count = await ctx.storage.get_number(HEART_BEAT_COUNTER_KEY) or 0
    except Exception as e:
        logger.error("health_storage_failed", error=str(e))
        resp.status = "degraded"
    return resp


@router.get("/chains", response_model=list[ChainResponse])
async def list_chains():
    return [
        ChainResponse(chain_id=int(info.chain_id), name=info.name, explorer_url=info.explorer_url)
        for info in CHAINS.values()
    ]


@router.post("/events", response_model=InvocationResult)
async def receive_event(
    event: TransactionEvent,
    ctx: ActionContext = Depends(get_context),
    _key: bool = Depends(verify_api_key),
):
    try:
        return await handle_transaction_event(ctx, event)
    except ValidationError as e:
        logger.error("threshold_config_invalid", tx_hash=event.hash, errors=e.error_count())
        raise HTTPException(status_code=422, detail="Stored threshold config is invalid")
    except (OSError, Web3Exception) as e:
        # Non-2xx lets the event source redeliver
        logger.error("balance_lookup_failed", tx_hash=event.hash, error=str(e))
        raise HTTPException(status_code=502, detail="Balance lookup failed")


@router.get("/thresholds")
async def get_thresholds(
    ctx: ActionContext = Depends(get_context),
    _key: bool = Depends(verify_api_key),
):
    return await ctx.storage.get_json(TOKEN_THRESHOLD_KEY) or {}


@router.put("/thresholds")
async def put_thresholds(
    raw: dict = Body(...),
    ctx: ActionContext = Depends(get_context),
    _key: bool = Depends(verify_api_key),
):
    try:
        config = ThresholdConfig.from_mapping(raw)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    mapping = config.to_mapping()
    await ctx.storage.put_json(TOKEN_THRESHOLD_KEY, mapping)
    logger.info("threshold_config_updated", chains=config.chain_ids, records=len(config.records))
    return mapping
