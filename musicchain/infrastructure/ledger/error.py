"""Translation of web3 and transport exceptions into MusicChain errors."""

import asyncio

import aiohttp
from web3.exceptions import ContractLogicError, Web3RPCError

from musicchain.domain.shared.error import (
    LedgerConnectionError,
    MusicChainError,
    RejectedError,
    RevertError,
)

# EIP-1193 "user rejected request"
USER_REJECTED_CODE = 4001

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


def revert_detail(e: ContractLogicError) -> str:
    detail = getattr(e, "message", None) or str(e)
    return detail.removeprefix("execution reverted: ") or "execution reverted"


def translate_rpc_error(e: Web3RPCError) -> MusicChainError:
    error = (getattr(e, "rpc_response", None) or {}).get("error") or {}
    code = error.get("code")
    message = error.get("message") or str(e)
    if code == USER_REJECTED_CODE:
        return RejectedError("Transaction rejected in wallet")
    if "revert" in message.lower():
        return RevertError(message.removeprefix("execution reverted: "))
    return LedgerConnectionError(f"Ledger RPC error: {message}", code=str(code) if code else None)
