"""Signer adapter that delegates signing to a wallet or node over JSON-RPC."""

import logging
from typing import Any

from web3 import AsyncWeb3
from web3.exceptions import Web3RPCError

from musicchain.domain.ledger.port.signer import Signer
from musicchain.domain.shared.error import (
    LedgerConnectionError,
    NotConnectedError,
    RejectedError,
)
from musicchain.domain.shared.model.value import Address
from musicchain.infrastructure.ledger.error import (
    TRANSPORT_ERRORS,
    USER_REJECTED_CODE,
    translate_rpc_error,
)

logger = logging.getLogger(__name__)


class NodeSigner(Signer):
    """Signs through ``eth_sendTransaction`` on an endpoint that holds the keys.

    With no configured account the first account the endpoint exposes is
    used, the way a browser wallet answers ``eth_requestAccounts``.
    """

    def __init__(self, w3: AsyncWeb3, account: str | None = None) -> None:
        self._w3 = w3
        self._account = Address(account) if account else None

    async def address(self) -> Address:
        if self._account is not None:
            return self._account
        try:
            accounts = await self._w3.eth.accounts
        except Web3RPCError as e:
            raise translate_rpc_error(e) from e
        except TRANSPORT_ERRORS as e:
            raise LedgerConnectionError(f"Signer endpoint unreachable: {e}") from e
        if not accounts:
            raise NotConnectedError("Signer endpoint exposes no accounts")
        return Address(accounts[0])

    async def send_transaction(self, transaction: dict[str, Any]) -> str:
        try:
            tx_hash = await self._w3.eth.send_transaction(transaction)  # type: ignore[arg-type]
        except Web3RPCError as e:
            error = (e.rpc_response or {}).get("error") or {}
            if error.get("code") == USER_REJECTED_CODE:
                logger.info("Signer declined transaction from %s", transaction.get("from"))
                raise RejectedError("Transaction rejected in wallet") from e
            raise
        return AsyncWeb3.to_hex(tx_hash)
