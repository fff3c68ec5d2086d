import json
from types import SimpleNamespace
import httpx
import pytest
from shared.secrets import Secrets, SLACK_WEBHOOK_KEY, ALCHEMY_API_KEY
from shared.storage import MemoryStorage
from actions.token_alerts.config import NATIVE_TOKEN_ADDRESS
from actions.token_alerts.services.handler import ActionContext

WEBHOOK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"

RELAYER = "0xFf32609a2Ee397857841C46d96Edb85F0Ac64d61"
SIGNER = "0x23Bc2B107C7C7C04F2bA1d345376145adAdDFA35"
SENDER = "0x344c98e25f981976215669e048eccb21be16ac8e"
OP_USDC = "0x0b2C639c533813f4Aa9D7837CAf62653d097Ff85"

ONE_ETH = 10 ** 18


class FakeToken:
    def __init__(self, symbol: str, decimals: int, balances: dict[str, int] | None = None, fail: bool = False):
        self._symbol = symbol
        self._decimals = decimals
        self.balances = {k.lower(): v for k, v in (balances or {}).items()}
        self.fail = fail
        self.calls = []

    def symbol(self) -> str:
        self.calls.append("symbol")
        return self._symbol

    def decimals(self) -> int:
        self.calls.append("decimals")
        return self._decimals

    def balance_of(self, account: str) -> int:
        self.calls.append(("balance_of", account))
        if self.fail:
            raise ConnectionError("rpc unavailable")
        return self.balances.get(account.lower(), 0)


class FakeEth:
    def __init__(self, balances: dict[str, int]):
        self.balances = {k.lower(): v for k, v in balances.items()}
        self.calls = []

    def get_balance(self, account: str) -> int:
        self.calls.append(account)
        return self.balances.get(account.lower(), 0)


class FakeChain:
    """Stands in for both web3_factory and token_factory of an ActionContext."""

    def __init__(self, native: dict[str, int] | None = None, tokens: dict[str, FakeToken] | None = None):
        self.eth = FakeEth(native or {})
        self.tokens = {k.lower(): v for k, v in (tokens or {}).items()}
        self.rpc_urls = []

    def web3_factory(self, rpc_url: str):
        self.rpc_urls.append(rpc_url)
        return SimpleNamespace(eth=self.eth)

    def token_factory(self, address: str) -> FakeToken:
        return self.tokens[address.lower()]


class SlackRecorder:
    def __init__(self, status_code: int = 200):
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text="ok")

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]

    @property
    def titles(self) -> list[str]:
        return [p["blocks"][0]["text"]["text"] for p in self.payloads]


@pytest.fixture
def threshold_mapping():
    return {
        "10": {
            RELAYER: {
                "label": "Cross-rollup Transfer Relayer",
                "docUrl": "https://docs.example.com/relayer",
                "contacts": [
                    {"name": "Irara", "slackId": "U03HEAQL36X"},
                    {"name": "Alfred", "slackId": "U040T88AV62"},
                ],
                "monitorTokens": {
                    NATIVE_TOKEN_ADDRESS: {"threshold": 0.0025, "description": "ETH - Ethereum (18 decimals)"},
                    OP_USDC: {"threshold": 5.5, "description": "USDC - USD Coin (6 decimals)"},
                },
            },
        },
        "42161": {
            SIGNER: {
                "label": "ClaimableLink contract signer",
                "docUrl": "https://docs.example.com/signer",
                "contacts": [{"name": "David", "slackId": "U03T5DFP1F1"}],
                "monitorTokens": {
                    NATIVE_TOKEN_ADDRESS: {"threshold": 0.0025, "description": "ETH - Ethereum (18 decimals)"},
                },
            },
        },
    }


@pytest.fixture
def slack():
    return SlackRecorder()


@pytest.fixture
async def http_client(slack):
    async with httpx.AsyncClient(transport=httpx.MockTransport(slack)) as client:
        yield client


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def secrets():
    return Secrets({SLACK_WEBHOOK_KEY: WEBHOOK_URL, ALCHEMY_API_KEY: "test-key"})


@pytest.fixture
def chain():
    return FakeChain(
        native={SENDER: ONE_ETH},
        tokens={OP_USDC: FakeToken("USDC", 6, {SENDER: 100_000_000})},
    )


@pytest.fixture
def ctx(secrets, storage, chain, http_client):
    return ActionContext(
        secrets=secrets,
        storage=storage,
        web3_factory=chain.web3_factory,
        token_factory=chain.token_factory,
        http_client=http_client,
    )
