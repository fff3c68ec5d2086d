from web3 import Web3


def get_web3(rpc_url: str) -> Web3:
    """Build a read-only Web3 client for one chain's RPC endpoint."""
    return Web3(Web3.HTTPProvider(rpc_url))
