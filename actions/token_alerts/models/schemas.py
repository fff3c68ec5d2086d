from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, PrivateAttr, TypeAdapter, model_validator


class Contact(BaseModel):
    name: str
    slack_id: str = Field(alias="slackId")

    model_config = {"populate_by_name": True}


class MonitorToken(BaseModel):
    threshold: Decimal
    description: str = ""


class WatchEntry(BaseModel):
    label: str
    doc_url: str = Field(alias="docUrl")
    contacts: list[Contact] = []
    monitor_tokens: dict[str, MonitorToken] = Field(default_factory=dict, alias="monitorTokens")

    model_config = {"populate_by_name": True}


class WatchRecord(BaseModel):
    chain_id: int
    address: str
    entry: WatchEntry


_NESTED_CONFIG = TypeAdapter(dict[int, dict[str, WatchEntry]])


class ThresholdConfig(BaseModel):
    """Watch-list keyed by chain, then watched address.

    Stored as the nested JSON mapping ``{chainId: {address: WatchEntry}}``;
    held here as flat records with a per-chain index. Record order carries
    no meaning.
    """

    records: list[WatchRecord] = []

    _by_chain: dict[int, list[WatchRecord]] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def check_unique(self):
        seen = set()
        for r in self.records:
            key = (r.chain_id, r.address)
            if key in seen:
                raise ValueError(f"duplicate watched address {r.address} on chain {r.chain_id}")
            seen.add(key)
        return self

    def model_post_init(self, __context):
        for r in self.records:
            self._by_chain.setdefault(r.chain_id, []).append(r)

    @classmethod
    def from_mapping(cls, raw: dict | None) -> "ThresholdConfig":
        """Parse the stored nested mapping. Raises ``ValidationError`` on bad chain keys or entries."""
        nested = _NESTED_CONFIG.validate_python(raw or {})
        records = [
            WatchRecord(chain_id=chain_id, address=address, entry=entry)
            for chain_id, addresses in nested.items()
            for address, entry in addresses.items()
        ]
        return cls(records=records)

    def to_mapping(self) -> dict:
        out: dict[str, dict] = {}
        for r in self.records:
            out.setdefault(str(r.chain_id), {})[r.address] = r.entry.model_dump(by_alias=True, mode="json")
        return out

    def for_chain(self, chain_id: int) -> list[WatchRecord]:
        return list(self._by_chain.get(chain_id, []))

    @property
    def chain_ids(self) -> list[int]:
        return list(self._by_chain)


class TransactionEvent(BaseModel):
    hash: Optional[str] = None
    network: str
    from_address: str = Field(alias="from")

    model_config = {"populate_by_name": True}


class TokenBalanceSample(BaseModel):
    chain_id: int
    holder: str
    token: str
    raw_amount: int
    decimals: int
    symbol: str
    balance: Decimal


class AlertCandidate(BaseModel):
    chain_id: int
    transaction_hash: str
    account: str
    label: str
    doc_url: str
    contacts: list[Contact]
    token_address: str
    symbol: Optional[str] = None
    is_native: bool = False
    balance: Decimal
    threshold: Decimal


class InvocationResult(BaseModel):
    heartbeat: Optional[int] = None
    skipped: Optional[str] = None
    candidates: list[AlertCandidate] = []
    delivered: int = 0


class ChainResponse(BaseModel):
    chain_id: int
    name: str
    explorer_url: str


class HealthResponse(BaseModel):
    status: str = "ok"
    action: str = "token_alerts"
    version: str = "1.0.0"
    heartbeat_count: int = 0
    storage: str = "memory"
