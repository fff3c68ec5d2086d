from decimal import Decimal
import pytest
from actions.token_alerts.config import NATIVE_TOKEN_ADDRESS
from actions.token_alerts.models.schemas import ThresholdConfig, TransactionEvent
from actions.token_alerts.services.balances import BalanceReader
from actions.token_alerts.services.evaluator import evaluate
from conftest import FakeChain, FakeToken, RELAYER, SIGNER, SENDER, OP_USDC, ONE_ETH

TX_HASH = "0x" + "ab" * 32


def _event(network="10", sender=SENDER):
    return TransactionEvent.model_validate({"hash": TX_HASH, "network": network, "from": sender})


def _config(mapping, overrides=None):
    """Override thresholds by (chain, address, token) -> value."""
    for (chain_key, address, token), value in (overrides or {}).items():
        mapping[chain_key][address]["monitorTokens"][token]["threshold"] = value
    return ThresholdConfig.from_mapping(mapping)


def _reader(chain, chain_id=10):
    return BalanceReader(chain_id, chain.web3_factory("url"), token_factory=chain.token_factory)


@pytest.mark.parametrize("balance_wei,threshold,alerts", [
    (ONE_ETH, "1", 1),            # equal: inclusive
    (ONE_ETH, "0.999999", 0),     # above: suppressed
    (ONE_ETH, "1.000001", 1),     # below: alerts
])
def test_threshold_is_inclusive(threshold_mapping, balance_wei, threshold, alerts):
    config = _config(threshold_mapping, overrides={
        ("10", RELAYER, NATIVE_TOKEN_ADDRESS): threshold,
        ("10", RELAYER, OP_USDC): "0",
    })
    chain = FakeChain(native={SENDER: balance_wei}, tokens={OP_USDC: FakeToken("USDC", 6, {SENDER: 1})})

    candidates = evaluate(10, _event(), config, _reader(chain))

    assert len(candidates) == alerts


def test_token_alert_carries_symbol_and_entry_details(threshold_mapping):
    config = _config(threshold_mapping, overrides={("10", RELAYER, NATIVE_TOKEN_ADDRESS): "0"})
    chain = FakeChain(native={SENDER: ONE_ETH}, tokens={OP_USDC: FakeToken("USDC", 6, {SENDER: 5_500_000})})

    [candidate] = evaluate(10, _event(), config, _reader(chain))

    assert candidate.symbol == "USDC"
    assert not candidate.is_native
    assert candidate.balance == Decimal("5.5")
    assert candidate.threshold == Decimal("5.5")
    assert candidate.label == "Cross-rollup Transfer Relayer"
    assert [c.slack_id for c in candidate.contacts] == ["U03HEAQL36X", "U040T88AV62"]
    assert candidate.transaction_hash == TX_HASH
    assert candidate.chain_id == 10


def test_balances_are_read_for_transaction_sender_not_watched_address(threshold_mapping):
    config = _config(threshold_mapping)
    chain = FakeChain(
        native={SENDER: 0, RELAYER: 100 * ONE_ETH},
        tokens={OP_USDC: FakeToken("USDC", 6, {SENDER: 0, RELAYER: 10 ** 12})},
    )

    candidates = evaluate(10, _event(), config, _reader(chain))

    assert len(candidates) == 2
    assert all(c.account == SENDER for c in candidates)
    assert [a.lower() for a in chain.eth.calls] == [SENDER.lower()]


def test_other_chains_are_never_looked_up(threshold_mapping):
    # Arbitrum signer would alert if it were evaluated
    config = _config(threshold_mapping, overrides={
        ("10", RELAYER, NATIVE_TOKEN_ADDRESS): "0",
        ("10", RELAYER, OP_USDC): "0",
        ("42161", SIGNER, NATIVE_TOKEN_ADDRESS): "1000",
    })
    chain = FakeChain(native={SENDER: ONE_ETH}, tokens={OP_USDC: FakeToken("USDC", 6, {SENDER: 10 ** 8})})

    assert evaluate(10, _event(), config, _reader(chain)) == []
    assert len(chain.eth.calls) == 1


def test_chain_without_config_issues_no_lookups(threshold_mapping):
    config = _config(threshold_mapping)
    chain = FakeChain()

    assert evaluate(8453, _event("8453"), config, _reader(chain, 8453)) == []
    assert chain.eth.calls == []


def test_rpc_failure_propagates(threshold_mapping):
    config = _config(threshold_mapping, overrides={("10", RELAYER, NATIVE_TOKEN_ADDRESS): "0"})
    chain = FakeChain(native={SENDER: ONE_ETH}, tokens={OP_USDC: FakeToken("USDC", 6, fail=True)})

    with pytest.raises(ConnectionError):
        evaluate(10, _event(), config, _reader(chain))
