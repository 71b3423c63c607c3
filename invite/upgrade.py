from collections import namedtuple

from web3 import Web3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from invite.chain import ChainError, deploy, get_contract_factory, send_tx

IMPLEMENTATION_NAME = "InviteV2"

# ERC-1967 slots: keccak256("eip1967.proxy.admin") - 1
ADMIN_SLOT = 0xB53127684A568B3173AE13B9F8A6016E243E63B6E8EE1178D6A717850B5D6103

UPGRADE_INTERFACE_V5 = "5.0.0"

# ---------------------------
# Upgrade ABIs (OpenZeppelin v4 and v5 entry points)
# ---------------------------
VERSION_ABI = {
    "inputs": [],
    "name": "UPGRADE_INTERFACE_VERSION",
    "outputs": [{"name": "", "type": "string"}],
    "stateMutability": "view",
    "type": "function",
}

UUPS_ABI = [
    VERSION_ABI,
    {
        "inputs": [{"name": "newImplementation", "type": "address"}],
        "name": "upgradeTo",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "newImplementation", "type": "address"},
            {"name": "data", "type": "bytes"},
        ],
        "name": "upgradeToAndCall",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
]

PROXY_ADMIN_ABI = [
    VERSION_ABI,
    {
        "inputs": [
            {"name": "proxy", "type": "address"},
            {"name": "implementation", "type": "address"},
        ],
        "name": "upgrade",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "proxy", "type": "address"},
            {"name": "implementation", "type": "address"},
            {"name": "data", "type": "bytes"},
        ],
        "name": "upgradeAndCall",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
]

UpgradeResult = namedtuple("UpgradeResult", ["implementation", "tx_hash"])


def read_admin(w3, proxy_address):
    """Return the ERC-1967 admin of a transparent proxy, or None for UUPS."""
    raw = bytes(w3.eth.get_storage_at(proxy_address, ADMIN_SLOT))
    if not any(raw):
        return None
    return Web3.to_checksum_address("0x" + raw[-20:].hex())


def upgrade_interface_version(contract):
    try:
        return contract.functions.UPGRADE_INTERFACE_VERSION().call()
    except (BadFunctionCallOutput, ContractLogicError):
        # pre-5.0 contracts do not expose it
        return None


def build_upgrade_call(w3, proxy_address, implementation):
    admin = read_admin(w3, proxy_address)

    # an EOA admin upgrades the proxy directly, like UUPS
    if admin is None or not w3.eth.get_code(admin):
        proxy = w3.eth.contract(address=proxy_address, abi=UUPS_ABI)
        if upgrade_interface_version(proxy) == UPGRADE_INTERFACE_V5:
            return proxy.functions.upgradeToAndCall(implementation, b"")
        return proxy.functions.upgradeTo(implementation)

    proxy_admin = w3.eth.contract(address=admin, abi=PROXY_ADMIN_ABI)
    if upgrade_interface_version(proxy_admin) == UPGRADE_INTERFACE_V5:
        return proxy_admin.functions.upgradeAndCall(proxy_address, implementation, b"")
    return proxy_admin.functions.upgrade(proxy_address, implementation)


def upgrade_proxy(w3, account, proxy_address, artifacts_dir, implementation_name=IMPLEMENTATION_NAME):
    proxy_address = Web3.to_checksum_address(proxy_address)

    if not w3.eth.get_code(proxy_address):
        raise ChainError(f"No contract deployed at proxy address {proxy_address}")

    factory = get_contract_factory(w3, implementation_name, artifacts_dir)
    implementation = deploy(w3, account, factory)

    call = build_upgrade_call(w3, proxy_address, implementation)
    tx_hash = send_tx(w3, account, call)

    return UpgradeResult(implementation, tx_hash)
