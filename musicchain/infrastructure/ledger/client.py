"""web3 adapter for the LedgerClient port."""

import logging
from datetime import UTC, datetime
from typing import Any

from web3 import AsyncWeb3
from web3.contract import AsyncContract
from web3.exceptions import (
    BadFunctionCallOutput,
    ContractLogicError,
    TimeExhausted,
    Web3RPCError,
)

from musicchain.domain.ledger.model.value import (
    CallDescriptor,
    FeeKind,
    PendingTransaction,
    Receipt,
)
from musicchain.domain.ledger.port.client import LedgerClient
from musicchain.domain.ledger.port.signer import Signer
from musicchain.domain.registry.model.record import Record
from musicchain.domain.shared.error import (
    ConfigurationError,
    ConfirmationTimeoutError,
    LedgerConnectionError,
    NotFoundError,
    RevertError,
)
from musicchain.domain.shared.model.value import Address
from musicchain.infrastructure.ledger.abi import REGISTRY_ABI
from musicchain.infrastructure.ledger.error import (
    TRANSPORT_ERRORS,
    revert_detail,
    translate_rpc_error,
)

logger = logging.getLogger(__name__)


class Web3LedgerClient(LedgerClient):
    """LedgerClient backed by a read-only JSON-RPC node and an external signer."""

    def __init__(
        self,
        w3: AsyncWeb3,
        contract_address: str,
        signer: Signer,
        *,
        payment_gas_limit: int | None = None,
        poll_latency: float = 1.0,
        default_timeout: float = 120.0,
    ) -> None:
        self._w3 = w3
        self._signer = signer
        self._payment_gas_limit = payment_gas_limit
        self._poll_latency = poll_latency
        self._default_timeout = default_timeout
        self._contract: AsyncContract = w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(contract_address),
            abi=REGISTRY_ABI,
        )

    # ------------------------------------------------------------------ reads

    async def read_fee(self, kind: FeeKind) -> int:
        fn = self._contract.get_function_by_name(kind.value)
        return int(await self._read(fn()))

    async def read_record(self, song_id: int) -> Record:
        if song_id < 1:
            raise NotFoundError(f"Song not found: {song_id}")
        try:
            raw = await self._read(self._contract.functions.getSong(song_id))
        except RevertError as e:
            raise NotFoundError(f"Song not found: {song_id}") from e

        record = _decode_song(raw)
        # Unset storage slots decode as zeroes rather than reverting.
        if record is None:
            raise NotFoundError(f"Song not found: {song_id}")
        return record

    async def read_total_count(self) -> int:
        return int(await self._read(self._contract.functions.getTotalSongs()))

    async def read_records_by_registrant(self, address: Address) -> list[int]:
        fn = self._contract.functions.getSongsByRegistrant(
            AsyncWeb3.to_checksum_address(address.normalized)
        )
        ids = await self._read(fn)
        return list(dict.fromkeys(int(i) for i in ids))

    # ----------------------------------------------------------------- writes

    async def signer_address(self) -> Address:
        return await self._signer.address()

    async def simulate(self, call: CallDescriptor, value: int, sender: Address) -> None:
        fn = self._bind(call)
        try:
            await fn.call({"from": _checksum(sender), "value": value})
        except ContractLogicError as e:
            raise RevertError(revert_detail(e)) from e
        except Web3RPCError as e:
            raise translate_rpc_error(e) from e
        except TRANSPORT_ERRORS as e:
            raise LedgerConnectionError(f"Ledger unreachable during simulation: {e}") from e
        logger.debug("Simulated %s from %s: ok", call, sender)

    async def submit(self, call: CallDescriptor, value: int) -> PendingTransaction:
        try:
            sender = await self._signer.address()
            params: dict[str, Any] = {"from": _checksum(sender), "value": value}
            if call.function == "payForAccess" and self._payment_gas_limit:
                params["gas"] = self._payment_gas_limit
            transaction = await self._bind(call).build_transaction(params)
            tx_hash = await self._signer.send_transaction(dict(transaction))
        except ContractLogicError as e:
            raise RevertError(revert_detail(e)) from e
        except Web3RPCError as e:
            raise translate_rpc_error(e) from e
        except TRANSPORT_ERRORS as e:
            raise LedgerConnectionError(f"Ledger unreachable during submission: {e}") from e

        logger.info("Submitted %s value=%d tx=%s", call, value, tx_hash)
        return PendingTransaction(tx_hash=tx_hash, call=call, value=value, sender=sender)

    async def await_confirmation(
        self, pending: PendingTransaction, timeout: float | None = None
    ) -> Receipt:
        timeout = timeout if timeout is not None else self._default_timeout
        try:
            raw = await self._w3.eth.wait_for_transaction_receipt(
                pending.tx_hash,  # type: ignore[arg-type]
                timeout=timeout,
                poll_latency=self._poll_latency,
            )
        except TimeExhausted as e:
            raise ConfirmationTimeoutError(
                f"Transaction {pending.tx_hash} not included after {timeout}s"
            ) from e
        except Web3RPCError as e:
            raise translate_rpc_error(e) from e
        except TRANSPORT_ERRORS as e:
            raise LedgerConnectionError(f"Ledger unreachable while waiting: {e}") from e

        receipt = Receipt(
            tx_hash=pending.tx_hash,
            block_number=int(raw["blockNumber"]),
            gas_used=int(raw["gasUsed"]),
            success=raw["status"] == 1,
        )
        if not receipt.success:
            raise RevertError(f"{pending.call} reverted in block {receipt.block_number}")
        return receipt

    # ---------------------------------------------------------------- helpers

    def _bind(self, call: CallDescriptor):
        return self._contract.get_function_by_name(call.function)(*call.args)

    async def _read(self, fn) -> Any:
        try:
            return await fn.call()
        except ContractLogicError as e:
            raise RevertError(revert_detail(e)) from e
        except BadFunctionCallOutput as e:
            raise ConfigurationError(
                f"No registry contract at {self._contract.address}", code="contract_missing"
            ) from e
        except Web3RPCError as e:
            raise translate_rpc_error(e) from e
        except TRANSPORT_ERRORS as e:
            raise LedgerConnectionError(f"Ledger unreachable: {e}") from e


def _decode_song(raw: Any) -> Record | None:
    (song_id, registrant, title, author, content_id, license, timestamp, access_count, active) = raw
    if int(song_id) == 0:
        return None
    return Record(
        id=int(song_id),
        registrant=Address(registrant),
        title=title,
        author=author,
        content_id=content_id,
        license=license,
        registered_at=datetime.fromtimestamp(int(timestamp), UTC),
        access_count=int(access_count),
        active=bool(active),
    )


def _checksum(address: Address) -> str:
    return AsyncWeb3.to_checksum_address(address.normalized)
