"""AccessAttempt aggregate - one viewer's attempt to open a certificate."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from musicchain.domain.access.model.certificate import Certificate
from musicchain.domain.ledger.model.value import Receipt
from musicchain.domain.shared.error import InvalidStateError, MusicChainError
from musicchain.domain.shared.model.value import Address


class AccessState(StrEnum):
    """Steps of one access attempt.

    AWAITING_SIGNATURE covers both signing and broadcast, which the signer
    performs as one call. SUBMITTING means the transaction hash is known and
    CONFIRMING that inclusion is being awaited.
    """

    IDLE = "idle"
    CHECKING_IDENTITY = "checking_identity"
    FREE_ACCESS = "free_access"
    NEEDS_PAYMENT = "needs_payment"
    AWAITING_USER_CONFIRMATION = "awaiting_user_confirmation"
    SIMULATING = "simulating"
    AWAITING_SIGNATURE = "awaiting_signature"
    SUBMITTING = "submitting"
    CONFIRMING = "confirming"
    UNLOCKED = "unlocked"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in _TERMINAL


_TERMINAL = frozenset({AccessState.FREE_ACCESS, AccessState.UNLOCKED, AccessState.FAILED})

# FAILED is reachable from every non-terminal state and is not listed here.
_TRANSITIONS: dict[AccessState, frozenset[AccessState]] = {
    AccessState.IDLE: frozenset({AccessState.CHECKING_IDENTITY}),
    AccessState.CHECKING_IDENTITY: frozenset(
        {AccessState.FREE_ACCESS, AccessState.NEEDS_PAYMENT}
    ),
    AccessState.NEEDS_PAYMENT: frozenset({AccessState.AWAITING_USER_CONFIRMATION}),
    AccessState.AWAITING_USER_CONFIRMATION: frozenset({AccessState.SIMULATING}),
    AccessState.SIMULATING: frozenset(
        {AccessState.AWAITING_SIGNATURE, AccessState.FREE_ACCESS}
    ),
    AccessState.AWAITING_SIGNATURE: frozenset({AccessState.SUBMITTING}),
    AccessState.SUBMITTING: frozenset({AccessState.CONFIRMING}),
    AccessState.CONFIRMING: frozenset({AccessState.UNLOCKED}),
}


class AccessAttempt(BaseModel):
    """State machine for a single access attempt.

    Terminal states are FREE_ACCESS, UNLOCKED and FAILED. Only the first two
    carry a certificate; FAILED carries a reason and the original error.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    song_id: int
    viewer: Address | None = None
    state: AccessState = AccessState.IDLE
    history: list[AccessState] = Field(default_factory=lambda: [AccessState.IDLE])
    fee: int | None = None
    tx_hash: str | None = None
    certificate: Certificate | None = None
    receipt: Receipt | None = None
    reason: str | None = None
    cause: MusicChainError | None = None
    warnings: list[str] = Field(default_factory=list)

    def advance(self, to: AccessState) -> None:
        if to == AccessState.FAILED:
            raise InvalidStateError("Use fail() to enter the failed state")
        allowed = _TRANSITIONS.get(self.state, frozenset())
        if to not in allowed:
            raise InvalidStateError(f"Cannot move from {self.state} to {to}")
        self.state = to
        self.history.append(to)

    def grant(self, to: AccessState, certificate: Certificate) -> None:
        """Enter FREE_ACCESS or UNLOCKED and expose the certificate."""
        if to not in (AccessState.FREE_ACCESS, AccessState.UNLOCKED):
            raise InvalidStateError(f"{to} does not grant access")
        self.advance(to)
        self.certificate = certificate

    def fail(self, error: MusicChainError) -> None:
        if self.state.terminal:
            raise InvalidStateError(f"Attempt already finished in {self.state}")
        self.state = AccessState.FAILED
        self.history.append(AccessState.FAILED)
        self.reason = error.message
        self.cause = error

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    @property
    def granted(self) -> bool:
        return self.state in (AccessState.FREE_ACCESS, AccessState.UNLOCKED)
