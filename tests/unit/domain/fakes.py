"""In-memory ledger and record helpers shared by the domain tests."""

from datetime import UTC, datetime

from musicchain.domain.ledger.model.value import (
    CallDescriptor,
    FeeKind,
    PendingTransaction,
    Receipt,
)
from musicchain.domain.ledger.port.client import LedgerClient
from musicchain.domain.registry.model.record import Record
from musicchain.domain.shared.error import (
    MusicChainError,
    NotConnectedError,
    NotFoundError,
    RevertError,
)
from musicchain.domain.shared.model.value import Address

ALICE = Address("0xA11cE00000000000000000000000000000000001")
BOB = Address("0xB0b0000000000000000000000000000000000002")


def make_record(song_id: int = 1, registrant: Address = ALICE, **overrides) -> Record:
    defaults = dict(
        id=song_id,
        registrant=registrant,
        title=f"Song {song_id}",
        author="A",
        content_id=f"cid{song_id}",
        license="CC0",
        registered_at=datetime(2025, 1, song_id, tzinfo=UTC),
    )
    defaults.update(overrides)
    return Record(**defaults)


class FakeLedgerClient(LedgerClient):
    """Ledger double that records every call and applies registrations."""

    def __init__(
        self,
        registration_fee: int = 1000,
        access_fee: int = 500,
        signer: Address | None = BOB,
    ) -> None:
        self.fees = {FeeKind.REGISTRATION: registration_fee, FeeKind.ACCESS: access_fee}
        self.songs: dict[int, Record] = {}
        self.signer = signer
        self.calls: list[tuple] = []
        self.fail_fee_reads: MusicChainError | None = None
        self.fail_total: MusicChainError | None = None
        self.fail_read_ids: set[int] = set()
        self.signer_error: MusicChainError | None = None
        self.simulate_error: MusicChainError | None = None
        self.submit_error: MusicChainError | None = None
        self.confirm_error: MusicChainError | None = None
        self._nonce = 0

    def add(self, record: Record) -> Record:
        self.songs[record.id] = record
        return record

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    async def read_fee(self, kind: FeeKind) -> int:
        self.calls.append(("read_fee", kind))
        if self.fail_fee_reads:
            raise self.fail_fee_reads
        return self.fees[kind]

    async def read_record(self, song_id: int) -> Record:
        self.calls.append(("read_record", song_id))
        if song_id in self.fail_read_ids:
            raise NotFoundError(f"Song not found: {song_id}")
        if song_id not in self.songs:
            raise NotFoundError(f"Song not found: {song_id}")
        return self.songs[song_id]

    async def read_total_count(self) -> int:
        self.calls.append(("read_total_count",))
        if self.fail_total:
            raise self.fail_total
        return len(self.songs)

    async def read_records_by_registrant(self, address: Address) -> list[int]:
        self.calls.append(("read_records_by_registrant", address))
        return sorted(i for i, r in self.songs.items() if r.is_registrant(address))

    async def signer_address(self) -> Address:
        self.calls.append(("signer_address",))
        if self.signer_error:
            raise self.signer_error
        if self.signer is None:
            raise NotConnectedError("Signer endpoint exposes no accounts")
        return self.signer

    async def simulate(self, call: CallDescriptor, value: int, sender: Address) -> None:
        self.calls.append(("simulate", call, value, sender))
        if self.simulate_error:
            raise self.simulate_error
        if call.function == "payForAccess" and self.songs[call.args[0]].is_registrant(sender):
            raise RevertError("Registrant does not need to pay")

    async def submit(self, call: CallDescriptor, value: int) -> PendingTransaction:
        self.calls.append(("submit", call, value))
        if self.submit_error:
            raise self.submit_error
        sender = await self.signer_address()
        self._nonce += 1
        return PendingTransaction(
            tx_hash=f"0x{self._nonce:064x}", call=call, value=value, sender=sender
        )

    async def await_confirmation(
        self, pending: PendingTransaction, timeout: float | None = None
    ) -> Receipt:
        self.calls.append(("await_confirmation", pending.tx_hash, timeout))
        if self.confirm_error:
            raise self.confirm_error
        self._apply(pending)
        return Receipt(tx_hash=pending.tx_hash, block_number=100 + self._nonce, gas_used=21000)

    def _apply(self, pending: PendingTransaction) -> None:
        call = pending.call
        if call.function == "registerSong":
            title, author, content_id, license = call.args
            song_id = len(self.songs) + 1
            self.songs[song_id] = make_record(
                song_id,
                registrant=pending.sender,
                title=title,
                author=author,
                content_id=content_id,
                license=license,
            )
        elif call.function == "payForAccess":
            song = self.songs[call.args[0]]
            self.songs[song.id] = song.model_copy(update={"access_count": song.access_count + 1})
