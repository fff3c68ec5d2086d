"""
Balance Reader — native and ERC-20 balances for one chain, as exact Decimals.

Token symbol/decimals come from read-only contract calls and are cached per
token. RPC errors are not caught here; they abort the invocation.
"""
from decimal import Decimal, localcontext
from typing import Callable, Protocol
from web3 import Web3
from actions.token_alerts.config import NATIVE_TOKEN_ADDRESS, NATIVE_TOKEN_DECIMALS
from actions.token_alerts.models.schemas import TokenBalanceSample
import structlog

logger = structlog.get_logger()

# Read-only ERC-20 surface
ERC20_ABI = [
    {"constant": True, "inputs": [], "name": "name", "outputs": [{"name": "", "type": "string"}], "type": "function"},
    {"constant": True, "inputs": [], "name": "symbol", "outputs": [{"name": "", "type": "string"}], "type": "function"},
    {"constant": True, "inputs": [], "name": "decimals", "outputs": [{"name": "", "type": "uint8"}], "type": "function"},
    {"constant": True, "inputs": [{"name": "account", "type": "address"}], "name": "balanceOf", "outputs": [{"name": "", "type": "uint256"}], "type": "function"},
    {"constant": True, "inputs": [{"name": "owner", "type": "address"}, {"name": "spender", "type": "address"}], "name": "allowance", "outputs": [{"name": "", "type": "uint256"}], "type": "function"},
]


def to_decimal(raw: int, decimals: int) -> Decimal:
    """Exact ``raw / 10**decimals``, e.g. 4500000 with 6 decimals -> 4.5."""
    sign = "-" if raw < 0 else ""
    integer, remainder = divmod(abs(raw), 10 ** decimals)
    fraction = f"{remainder:0{decimals}d}".rstrip("0") if decimals else ""
    if fraction:
        return Decimal(f"{sign}{integer}.{fraction}")
    return Decimal(f"{sign}{integer}")


def to_raw(amount: Decimal | int | str, decimals: int) -> int:
    """Inverse of to_decimal, e.g. 1.0 with 18 decimals -> 10**18."""
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    with localcontext() as ctx:
        ctx.prec = len(value.as_tuple().digits) + decimals + 1
        scaled = value.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"{amount} has more than {decimals} decimal places")
        return int(scaled)


def format_decimal(value: Decimal) -> str:
    """Plain notation without exponent or trailing zeros."""
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def is_native_token(token_address: str) -> bool:
    return token_address.lower() == NATIVE_TOKEN_ADDRESS.lower()


class TokenReader(Protocol):
    def symbol(self) -> str: ...

    def decimals(self) -> int: ...

    def balance_of(self, account: str) -> int: ...


class ERC20Token:
    def __init__(self, w3: Web3, address: str):
        self.address = Web3.to_checksum_address(address)
        self.contract = w3.eth.contract(address=self.address, abi=ERC20_ABI)
        self._symbol: str | None = None
        self._decimals: int | None = None

    def name(self) -> str:
        return self.contract.functions.name().call()

    def symbol(self) -> str:
        if self._symbol is None:
            self._symbol = self.contract.functions.symbol().call()
        return self._symbol

    def decimals(self) -> int:
        if self._decimals is None:
            self._decimals = int(self.contract.functions.decimals().call())
        return self._decimals

    def balance_of(self, account: str) -> int:
        return self.contract.functions.balanceOf(Web3.to_checksum_address(account)).call()

    def allowance(self, owner: str, spender: str) -> int:
        return self.contract.functions.allowance(
            Web3.to_checksum_address(owner), Web3.to_checksum_address(spender)
        ).call()

    def format_amount(self, raw: int) -> Decimal:
        return to_decimal(raw, self.decimals())

    def parse_amount(self, amount: Decimal | int | str) -> int:
        return to_raw(amount, self.decimals())


class BalanceReader:
    def __init__(
        self,
        chain_id: int,
        w3: Web3,
        token_factory: Callable[[str], TokenReader] | None = None,
    ):
        self.chain_id = chain_id
        self.w3 = w3
        self._token_factory = token_factory or (lambda address: ERC20Token(w3, address))
        self._tokens: dict[str, TokenReader] = {}

    def token(self, token_address: str) -> TokenReader:
        address = Web3.to_checksum_address(token_address)
        if address not in self._tokens:
            self._tokens[address] = self._token_factory(address)
        return self._tokens[address]

    def native_balance(self, holder: str) -> Decimal:
        raw = self.w3.eth.get_balance(Web3.to_checksum_address(holder))
        balance = to_decimal(raw, NATIVE_TOKEN_DECIMALS)
        logger.debug("native_balance_fetched", chain_id=self.chain_id, holder=holder, balance=str(balance))
        return balance

    def token_balance(self, token_address: str, holder: str) -> TokenBalanceSample:
        token = self.token(token_address)
        decimals = token.decimals()
        symbol = token.symbol()
        raw = token.balance_of(Web3.to_checksum_address(holder))
        sample = TokenBalanceSample(
            chain_id=self.chain_id,
            holder=holder,
            token=Web3.to_checksum_address(token_address),
            raw_amount=raw,
            decimals=decimals,
            symbol=symbol,
            balance=to_decimal(raw, decimals),
        )
        logger.debug(
            "token_balance_fetched",
            chain_id=self.chain_id,
            token=sample.token,
            symbol=symbol,
            balance=str(sample.balance),
        )
        return sample
