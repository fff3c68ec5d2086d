import httpx
import structlog

logger = structlog.get_logger()


def build_payload(title: str, message: str) -> dict:
    return {
        "blocks": [
            {"type": "section", "text": {"type": "mrkdwn", "text": title}},
            {"type": "section", "text": {"type": "mrkdwn", "text": message}},
        ]
    }


async def send_slack_notification(
    title: str,
    message: str,
    webhook_url: str | None,
    client: httpx.AsyncClient | None = None,
) -> bool:
    """Post a title + message to a Slack incoming webhook.

    Best-effort: a missing URL, a transport error or a non-2xx response is
    logged and reported as False. Nothing is retried and nothing is raised.
    """
    if not webhook_url:
        logger.error("slack_webhook_missing", title=title)
        return False

    logger.info("slack_notification_sending", title=title)
    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.post(webhook_url, json=build_payload(title, message))
        else:
            response = await client.post(webhook_url, json=build_payload(title, message))
    except httpx.HTTPError as e:
        logger.error("slack_notification_failed", title=title, error=str(e))
        return False

    if not response.is_success:
        logger.error(
            "slack_notification_failed",
            title=title,
            status=response.status_code,
            reason=response.reason_phrase,
        )
        return False

    logger.info("slack_notification_sent", title=title)
    return True
