import json
from unittest.mock import MagicMock

import pytest

CONTRACT = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
PROXY = "0xe7f1725e7734ce288f8367e1bb143e90bb3f0512"
PRIVATE_KEY = "0x" + "11" * 32


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr("invite.cli.load_dotenv", lambda *a, **k: False)


@pytest.fixture
def chain_env(monkeypatch, tmp_path):
    monkeypatch.setenv("TESTNET_RPC_URL", "http://127.0.0.1:8545")
    monkeypatch.setenv("PRIVATE_KEY", PRIVATE_KEY)
    monkeypatch.setenv("ARTIFACTS_DIR", str(tmp_path))
    monkeypatch.setenv("TESTNET_CONTRACT_ADDRESS", CONTRACT)
    monkeypatch.setenv("TESTNET_PROXY_ADDRESS", PROXY)


@pytest.fixture
def w3():
    w3 = MagicMock()
    w3.eth.chain_id = 31337
    w3.eth.get_transaction_count.return_value = 7
    return w3


@pytest.fixture
def account():
    account = MagicMock()
    account.address = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
    return account


@pytest.fixture
def make_artifact(tmp_path):
    """Write a Hardhat-style artifact (plus its .dbg.json) under tmp_path."""

    def write(source, name, abi, bytecode="0x6080"):
        folder = tmp_path / "contracts" / f"{source}.sol"
        folder.mkdir(parents=True, exist_ok=True)
        artifact = {"contractName": name, "abi": abi, "bytecode": bytecode}
        (folder / f"{name}.json").write_text(json.dumps(artifact))
        (folder / f"{name}.dbg.json").write_text(json.dumps({"buildInfo": "x"}))
        return folder / f"{name}.json"

    return write


SET_MINT_APPROVALS_ABI = [
    {
        "inputs": [
            {"name": "addresses", "type": "address[]"},
            {"name": "approvals", "type": "bool[]"},
            {"name": "threshold", "type": "uint256"},
        ],
        "name": "setMintApprovals",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    }
]


@pytest.fixture
def invite1155_artifact(make_artifact):
    return make_artifact("Invite1155", "Invite1155", SET_MINT_APPROVALS_ABI)
