import httpx
from shared.slack import send_slack_notification
from actions.token_alerts.config import (
    HEART_BEAT_COUNTER_KEY, HEARTBEAT_INTERVAL, HEARTBEAT_TITLE, HEARTBEAT_MESSAGE,
)
import structlog

logger = structlog.get_logger()


class HeartbeatTracker:
    """Durable invocation counter with a liveness ping every ``interval`` ticks."""

    def __init__(
        self,
        storage,
        webhook_url: str | None,
        interval: int = HEARTBEAT_INTERVAL,
        http_client: httpx.AsyncClient | None = None,
    ):
        if interval < 1:
            raise ValueError(f"heartbeat interval must be positive, got {interval}")
        self.storage = storage
        self.webhook_url = webhook_url
        self.interval = interval
        self.http_client = http_client

    async def tick(self) -> int:
        count = await self.storage.increment_number(HEART_BEAT_COUNTER_KEY)
        logger.info("heartbeat_tick", count=count)

        if count % self.interval != 0:
            return count

        await send_slack_notification(
            HEARTBEAT_TITLE,
            HEARTBEAT_MESSAGE.format(count=count),
            self.webhook_url,
            client=self.http_client,
        )
        return count
