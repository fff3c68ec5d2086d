"""
Token alerts invocation — one run per delivered transaction event.

Heartbeat tick first, then chain and secret checks, then threshold evaluation
and alert dispatch. Collaborators come in through ActionContext so the flow
runs the same under the HTTP app and in tests.
"""
from typing import Callable
import httpx
from web3 import Web3
from shared.secrets import Secrets, SLACK_WEBHOOK_KEY, ALCHEMY_API_KEY
from shared.web3_client import get_web3
from actions.token_alerts.config import TOKEN_THRESHOLD_KEY, HEARTBEAT_INTERVAL
from actions.token_alerts.models.schemas import InvocationResult, ThresholdConfig, TransactionEvent
from actions.token_alerts.services.alerts import dispatch
from actions.token_alerts.services.balances import BalanceReader, TokenReader
from actions.token_alerts.services.chains import get_rpc_url, get_transaction_url, is_supported
from actions.token_alerts.services.evaluator import evaluate
from actions.token_alerts.services.heartbeat import HeartbeatTracker
import structlog

logger = structlog.get_logger()


class ActionContext:
    def __init__(
        self,
        secrets: Secrets,
        storage,
        web3_factory: Callable[[str], Web3] = get_web3,
        token_factory: Callable[[str], TokenReader] | None = None,
        http_client: httpx.AsyncClient | None = None,
        heartbeat_interval: int = HEARTBEAT_INTERVAL,
    ):
        self.secrets = secrets
        self.storage = storage
        self.web3_factory = web3_factory
        self.token_factory = token_factory
        self.http_client = http_client
        self.heartbeat_interval = heartbeat_interval


def _parse_chain_id(network: str) -> int | None:
    try:
        return int(network)
    except (TypeError, ValueError):
        return None


async def handle_transaction_event(ctx: ActionContext, event: TransactionEvent) -> InvocationResult:
    if event.hash is None:
        logger.info("event_without_hash_skipped", network=event.network)
        return InvocationResult(skipped="no_hash")

    webhook_url = ctx.secrets.get(SLACK_WEBHOOK_KEY)
    heartbeat = HeartbeatTracker(
        ctx.storage, webhook_url, interval=ctx.heartbeat_interval, http_client=ctx.http_client
    )
    count = await heartbeat.tick()

    chain_id = _parse_chain_id(event.network)
    if chain_id is None or not is_supported(chain_id):
        logger.error("unsupported_chain", network=event.network)
        return InvocationResult(heartbeat=count, skipped="unsupported_chain")

    logger.info(
        "transaction_received",
        chain_id=chain_id,
        tx_url=get_transaction_url(chain_id, event.hash),
        sender=event.from_address,
    )

    api_key = ctx.secrets.get(ALCHEMY_API_KEY)
    if not api_key:
        logger.error("rpc_api_key_missing")
        return InvocationResult(heartbeat=count, skipped="missing_rpc_key")

    raw_config = await ctx.storage.get_json(TOKEN_THRESHOLD_KEY)
    if raw_config is None:
        logger.warning("threshold_config_missing", key=TOKEN_THRESHOLD_KEY)
        return InvocationResult(heartbeat=count, skipped="no_config")

    config = ThresholdConfig.from_mapping(raw_config)
    logger.info("threshold_config_loaded", chains=config.chain_ids, records=len(config.records))

    w3 = ctx.web3_factory(get_rpc_url(chain_id, api_key))
    reader = BalanceReader(chain_id, w3, token_factory=ctx.token_factory)
    candidates = evaluate(chain_id, event, config, reader)

    delivered = 0
    for candidate in candidates:
        if await dispatch(candidate, webhook_url, client=ctx.http_client):
            delivered += 1

    if candidates:
        logger.info("alerts_dispatched", count=len(candidates), delivered=delivered)

    return InvocationResult(heartbeat=count, candidates=candidates, delivered=delivered)
