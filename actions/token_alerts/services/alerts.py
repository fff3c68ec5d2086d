"""
Alert Formatter & Dispatcher — renders low-balance alerts as Slack mrkdwn and
posts them best-effort. A failed post is logged and never stops the batch.
"""
import httpx
from shared.slack import send_slack_notification
from actions.token_alerts.models.schemas import AlertCandidate, Contact
from actions.token_alerts.services.balances import format_decimal
from actions.token_alerts.services.chains import (
    get_network_name, get_address_url, get_token_url, get_transaction_url,
)
import structlog

logger = structlog.get_logger()


def format_contacts(contacts: list[Contact]) -> str:
    """Numbered contact list, deduplicated by Slack id in first-seen order."""
    seen = set()
    unique = []
    for c in contacts:
        if c.slack_id in seen:
            continue
        seen.add(c.slack_id)
        unique.append(c)
    return "".join(f"\t{i}. {c.name}: <@{c.slack_id}>\n" for i, c in enumerate(unique, start=1))


def build_alert(candidate: AlertCandidate) -> tuple[str, str]:
    c = candidate
    network = get_network_name(c.chain_id)
    account_url = get_address_url(c.chain_id, c.account)
    tx_url = get_transaction_url(c.chain_id, c.transaction_hash)
    balance = format_decimal(c.balance)
    threshold = format_decimal(c.threshold)

    if c.is_native:
        asset = "Native Token"
        balance_url = account_url
        description = f"The native token balance (e.g., ETH, POL, BNB) for {c.label} on {network}"
        check_step = f"Check {c.label}'s native token balance."
        replenish_step = "Replenish native token if necessary."
    else:
        asset = c.symbol
        balance_url = get_token_url(c.chain_id, c.account, c.token_address)
        description = f"The {c.symbol} balance for {c.label} on {network}"
        check_step = f"Check {c.label}'s {c.symbol} balance."
        replenish_step = f"Replenish {c.symbol} if necessary."

    title = f"*_({c.label}) {asset} Balance Below Threshold Alert ⚠️_*"
    message = (
        f"*[Description]*\n"
        f"\t{description} is <{balance_url}|{balance}> (below threshold of {threshold}).\n"
        f"*[Impact]*\n"
        f"\tLow balance may lead to transaction failures or delays in {c.label}.\n"
        f"*[Action Needed]*\n"
        f"\t1. {check_step}\n"
        f"\t2. Investigate recent withdrawals.\n"
        f"\t3. {replenish_step}\n"
        f"*[Details]*\n"
        f"\t1. {c.label}: <{account_url}|{c.account}>.\n"
        f"\t2. Guide: <{c.doc_url}|{c.label} document>.\n"
        f"*[Contact]*\n"
        f"{format_contacts(c.contacts)}"
        f"*[Triggered by]*\n"
        f"\tTransaction: <{tx_url}|{c.transaction_hash}>."
    )
    return title, message


async def dispatch(
    candidate: AlertCandidate,
    webhook_url: str | None,
    client: httpx.AsyncClient | None = None,
) -> bool:
    title, message = build_alert(candidate)
    logger.warning(
        "balance_below_threshold",
        label=candidate.label,
        chain_id=candidate.chain_id,
        token=candidate.token_address,
        balance=str(candidate.balance),
        threshold=str(candidate.threshold),
    )
    return await send_slack_notification(title, message, webhook_url, client=client)
