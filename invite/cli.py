import argparse
import sys

from dotenv import find_dotenv, load_dotenv

from invite.approvals import set_mint_approvals
from invite.chain import init_chain
from invite.config import load_chain_config, require_address
from invite.upgrade import upgrade_proxy


# ----------------- Commands -----------------

def setapprovals(args):
    config = load_chain_config()
    contract_address = require_address("TESTNET_CONTRACT_ADDRESS")

    w3, account = init_chain(config)
    tx_hash = set_mint_approvals(w3, account, contract_address, config.artifacts_dir)
    print("Tx: ", tx_hash)


def upgrade(args):
    config = load_chain_config()
    proxy_address = require_address("TESTNET_PROXY_ADDRESS")

    w3, account = init_chain(config)
    print("Upgrading Contract...")
    upgrade_proxy(w3, account, proxy_address, config.artifacts_dir)
    print("Collectible upgraded")


FUNC_MAP = {
    "setapprovals": setapprovals,
    "upgrade": upgrade,
}


def run(fn, args=None):
    """Run a command; 0 if it returned, 1 if it raised."""
    try:
        fn(args)
    except Exception as e:
        print("❌ Failed:", e, file=sys.stderr)
        return 1
    return 0


# ----------------- CLI -----------------

def main(argv=None):
    load_dotenv(find_dotenv(usecwd=True))

    parser = argparse.ArgumentParser(description="Maintain the Invite contracts")
    parser.add_argument("function", choices=sorted(FUNC_MAP))
    args = parser.parse_args(argv)

    sys.exit(run(FUNC_MAP[args.function], args))


def set_mint_approvals_main():
    load_dotenv(find_dotenv(usecwd=True))
    sys.exit(run(setapprovals))


def upgrade_main():
    load_dotenv(find_dotenv(usecwd=True))
    sys.exit(run(upgrade))


if __name__ == "__main__":
    main()
