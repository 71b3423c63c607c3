import os
from dataclasses import dataclass

from web3 import Web3

DEFAULT_ARTIFACTS_DIR = "artifacts"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ChainConfig:
    rpc_url: str
    private_key: str
    artifacts_dir: str = DEFAULT_ARTIFACTS_DIR


def load_chain_config(env=None) -> ChainConfig:
    env = os.environ if env is None else env

    rpc_url = env.get("TESTNET_RPC_URL")
    private_key = env.get("PRIVATE_KEY")

    missing = [
        name
        for name, value in (("TESTNET_RPC_URL", rpc_url), ("PRIVATE_KEY", private_key))
        if not value
    ]
    if missing:
        raise ConfigError(f"Missing blockchain environment variables: {', '.join(missing)}")

    return ChainConfig(
        rpc_url=rpc_url,
        private_key=private_key,
        artifacts_dir=env.get("ARTIFACTS_DIR") or DEFAULT_ARTIFACTS_DIR,
    )


def require_address(name: str, env=None) -> str:
    """
    Read a contract address from the environment.
    Returns the checksummed form; raises ConfigError if unset or malformed.
    """
    env = os.environ if env is None else env

    value = (env.get(name) or "").strip()
    if not value:
        raise ConfigError(f"{name} is not set")
    if not Web3.is_address(value):
        raise ConfigError(f"{name} is not a valid address: {value!r}")

    return Web3.to_checksum_address(value)
