"""
Chain Registry — static table of supported networks: display name, Alchemy
RPC base URL and Etherscan-family explorer URLs.
"""
from enum import IntEnum
from pydantic import BaseModel


class ChainId(IntEnum):
    # Mainnet
    MAINNET = 1
    OPTIMISM = 10
    ARBITRUM = 42161
    BASE = 8453
    # Testnet
    SEPOLIA = 11155111
    OPTIMISM_SEPOLIA = 11155420
    ARBITRUM_SEPOLIA = 421614
    BASE_SEPOLIA = 84532


class ChainInfo(BaseModel):
    chain_id: ChainId
    name: str
    rpc_base_url: str
    explorer_url: str

    model_config = {"frozen": True}

    @property
    def tx_base_url(self) -> str:
        return f"{self.explorer_url}/tx/"

    @property
    def address_base_url(self) -> str:
        return f"{self.explorer_url}/address/"

    @property
    def token_base_url(self) -> str:
        return f"{self.explorer_url}/token/"


CHAINS: dict[ChainId, ChainInfo] = {
    info.chain_id: info
    for info in [
        ChainInfo(
            chain_id=ChainId.MAINNET,
            name="Mainnet",
            rpc_base_url="https://eth-mainnet.g.alchemy.com/v2/",
            explorer_url="https://etherscan.io",
        ),
        ChainInfo(
            chain_id=ChainId.OPTIMISM,
            name="Optimism",
            rpc_base_url="https://opt-mainnet.g.alchemy.com/v2/",
            explorer_url="https://optimistic.etherscan.io",
        ),
        ChainInfo(
            chain_id=ChainId.ARBITRUM,
            name="Arbitrum One",
            rpc_base_url="https://arb-mainnet.g.alchemy.com/v2/",
            explorer_url="https://arbiscan.io",
        ),
        ChainInfo(
            chain_id=ChainId.BASE,
            name="Base",
            rpc_base_url="https://base-mainnet.g.alchemy.com/v2/",
            explorer_url="https://basescan.org",
        ),
        ChainInfo(
            chain_id=ChainId.SEPOLIA,
            name="Sepolia Testnet",
            rpc_base_url="https://eth-sepolia.g.alchemy.com/v2/",
            explorer_url="https://sepolia.etherscan.io",
        ),
        ChainInfo(
            chain_id=ChainId.OPTIMISM_SEPOLIA,
            name="Optimism Sepolia Testnet",
            rpc_base_url="https://opt-sepolia.g.alchemy.com/v2/",
            explorer_url="https://sepolia-optimism.etherscan.io",
        ),
        ChainInfo(
            chain_id=ChainId.ARBITRUM_SEPOLIA,
            name="Arbitrum Sepolia Testnet",
            rpc_base_url="https://arb-sepolia.g.alchemy.com/v2/",
            explorer_url="https://sepolia.arbiscan.io",
        ),
        ChainInfo(
            chain_id=ChainId.BASE_SEPOLIA,
            name="Base Sepolia Testnet",
            rpc_base_url="https://base-sepolia.g.alchemy.com/v2/",
            explorer_url="https://sepolia.basescan.org",
        ),
    ]
}


def resolve(chain_id: int) -> ChainInfo | None:
    """Look up a chain; None means the network is unsupported."""
    try:
        return CHAINS.get(ChainId(chain_id))
    except ValueError:
        return None


def is_supported(chain_id: int) -> bool:
    return resolve(chain_id) is not None


def get_rpc_url(chain_id: int, api_key: str) -> str | None:
    info = resolve(chain_id)
    return f"{info.rpc_base_url}{api_key}" if info else None


def get_network_name(chain_id: int) -> str:
    info = resolve(chain_id)
    return info.name if info else "unknown"


def get_transaction_url(chain_id: int, tx_hash: str) -> str | None:
    info = resolve(chain_id)
    return f"{info.tx_base_url}{tx_hash}#eventlog" if info else None


def get_address_url(chain_id: int, address: str) -> str | None:
    info = resolve(chain_id)
    return f"{info.address_base_url}{address}" if info else None


def get_token_url(chain_id: int, account: str, token: str) -> str | None:
    """Explorer view of one account's holdings of a token."""
    info = resolve(chain_id)
    return f"{info.token_base_url}{token}?a={account}" if info else None
