"""
Threshold Evaluator — checks the transaction sender's balances against the
watch-list configured for the event's chain.

Balances are read for the transaction's origin account. The watched address
in config only labels and groups the alert.
"""
from actions.token_alerts.models.schemas import AlertCandidate, ThresholdConfig, TransactionEvent
from actions.token_alerts.services.balances import BalanceReader, is_native_token
import structlog

logger = structlog.get_logger()


def evaluate(
    chain_id: int,
    event: TransactionEvent,
    config: ThresholdConfig,
    reader: BalanceReader,
) -> list[AlertCandidate]:
    account = event.from_address
    candidates = []

    for record in config.for_chain(chain_id):
        entry = record.entry
        logger.info(
            "watch_entry_evaluating",
            chain_id=chain_id,
            address=record.address,
            label=entry.label,
            tokens=len(entry.monitor_tokens),
        )

        for token_address, monitor in entry.monitor_tokens.items():
            if is_native_token(token_address):
                balance = reader.native_balance(account)
                symbol = None
            else:
                sample = reader.token_balance(token_address, account)
                balance = sample.balance
                symbol = sample.symbol

            logger.info(
                "balance_checked",
                label=entry.label,
                token=token_address,
                symbol=symbol or "native",
                balance=str(balance),
                threshold=str(monitor.threshold),
            )

            # Inclusive: only strictly-above balances are healthy
            if balance > monitor.threshold:
                continue

            candidates.append(AlertCandidate(
                chain_id=chain_id,
                transaction_hash=event.hash or "",
                account=account,
                label=entry.label,
                doc_url=entry.doc_url,
                contacts=entry.contacts,
                token_address=token_address,
                symbol=symbol,
                is_native=symbol is None,
                balance=balance,
                threshold=monitor.threshold,
            ))

    return candidates
