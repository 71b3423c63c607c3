import json
from pathlib import Path

from eth_account import Account
from web3 import Web3


class ChainError(Exception):
    pass


# ----------------- Setup -----------------
def init_chain(config):
    w3 = Web3(Web3.HTTPProvider(config.rpc_url))
    if not w3.is_connected():
        raise ChainError(f"RPC connection failed: {config.rpc_url}")

    account = Account.from_key(config.private_key)
    return w3, account


# ----------------- Artifacts -----------------
def load_artifact(name, artifacts_dir):
    """
    Find the compiled Hardhat artifact for contract `name`.

    Hardhat writes artifacts/contracts/<Source>.sol/<Name>.json next to a
    <Name>.dbg.json; only the former carries abi and bytecode.
    """
    root = Path(artifacts_dir)
    if not root.is_dir():
        raise ChainError(f"Artifacts directory not found: {root}")

    matches = sorted(root.rglob(f"{name}.json"))
    if not matches:
        raise ChainError(f"Artifact for contract {name!r} not found under {root}")
    if len(matches) > 1:
        sources = ", ".join(str(p.relative_to(root)) for p in matches)
        raise ChainError(f"Multiple artifacts for contract {name!r}: {sources}")

    with open(matches[0]) as f:
        artifact = json.load(f)

    if "abi" not in artifact:
        raise ChainError(f"Artifact {matches[0]} has no abi")
    return artifact


def get_contract_at(w3, name, address, artifacts_dir):
    artifact = load_artifact(name, artifacts_dir)
    return w3.eth.contract(
        address=Web3.to_checksum_address(address),
        abi=artifact["abi"],
    )


def get_contract_factory(w3, name, artifacts_dir):
    artifact = load_artifact(name, artifacts_dir)

    bytecode = artifact.get("bytecode")
    if not bytecode or bytecode == "0x":
        raise ChainError(f"{name} has no bytecode (abstract contract or interface)")

    return w3.eth.contract(abi=artifact["abi"], bytecode=bytecode)


# ----------------- Transactions -----------------
def send_tx(w3, account, call, gas=None):
    """Sign and submit a contract call or constructor. Does not wait for mining."""
    tx = call.build_transaction({
        "from": account.address,
        "nonce": w3.eth.get_transaction_count(account.address, "pending"),
        "chainId": w3.eth.chain_id,
    })
    if gas:
        tx["gas"] = gas

    signed = account.sign_transaction(tx)
    tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
    return Web3.to_hex(tx_hash)


def deploy(w3, account, factory, *args):
    tx_hash = send_tx(w3, account, factory.constructor(*args))

    receipt = w3.eth.wait_for_transaction_receipt(tx_hash)
    if receipt["status"] != 1:
        raise ChainError(f"Deployment reverted: {tx_hash}")

    return receipt["contractAddress"]
