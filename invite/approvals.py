from web3 import Web3

from invite.chain import get_contract_at, send_tx

CONTRACT_NAME = "Invite1155"

WHITELIST = ["0x4Dd958cA0455BFb231770cD06898894b4c974671"]
APPROVALS = [True]
APPROVAL_THRESHOLD = 5


def set_mint_approvals(
    w3,
    account,
    contract_address,
    artifacts_dir,
    addresses=WHITELIST,
    approvals=APPROVALS,
    threshold=APPROVAL_THRESHOLD,
):
    """
    Submit setMintApprovals(addresses, approvals, threshold) on Invite1155.
    Returns the transaction hash as soon as the node accepts it.
    """
    if len(addresses) != len(approvals):
        raise ValueError(
            f"{len(addresses)} addresses but {len(approvals)} approval flags"
        )

    contract = get_contract_at(w3, CONTRACT_NAME, contract_address, artifacts_dir)

    call = contract.functions.setMintApprovals(
        [Web3.to_checksum_address(a) for a in addresses],
        list(approvals),
        threshold,
    )
    return send_tx(w3, account, call)
