"""Error hierarchy for MusicChain.

Error layers:
- MusicChainError: Base class for all MusicChain errors
- DomainError: Business rule violations, precondition failures, ledger rejections
- InfrastructureError: System-level failures like an unreachable RPC node or IPFS daemon

Every workflow failure ends in one of these, carrying a human-readable message
and a stable code for the presentation layer.
"""

from enum import StrEnum


class MusicChainError(Exception):
    """Base class for all MusicChain errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(MusicChainError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class PartialLoadError(DomainError):
    """A catalog refresh could not read every record in the ledger's id range."""

    def __init__(self, song_id: int, loaded: int, total: int) -> None:
        super().__init__(
            f"Failed to load song {song_id} ({loaded} of {total} loaded)",
            code="partial_load",
        )
        self.song_id = song_id
        self.loaded = loaded
        self.total = total


class FeeNotLoadedError(DomainError):
    """Fee schedule has not been read from the ledger yet."""

    def __init__(self, message: str = "Fee schedule not loaded") -> None:
        super().__init__(message, code="fee_not_loaded")


class NotConnectedError(DomainError):
    """No viewer identity or signer account is available."""

    def __init__(self, message: str = "No wallet connected") -> None:
        super().__init__(message, code="not_connected")


class RejectedError(DomainError):
    """The user or the signer declined the action."""

    def __init__(self, message: str = "Declined by user") -> None:
        super().__init__(message, code="rejected")


class RevertReason(StrEnum):
    REGISTRANT_EXEMPT = "registrant_exempt"
    UNKNOWN = "unknown"

    @classmethod
    def classify(cls, detail: str) -> "RevertReason":
        """Map a free-text revert reason from the ledger to a known code."""
        lowered = detail.lower()
        for needle, reason in _KNOWN_REVERTS.items():
            if needle in lowered:
                return reason
        return cls.UNKNOWN


_KNOWN_REVERTS = {
    "registrant does not need to pay": RevertReason.REGISTRANT_EXEMPT,
}


class RevertError(DomainError):
    """The ledger rejected a call, either in simulation or on-chain."""

    def __init__(self, detail: str, reason: RevertReason | None = None) -> None:
        self.reason = reason or RevertReason.classify(detail)
        self.detail = detail
        super().__init__(f"Transaction reverted: {detail}", code=self.reason.value)


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(MusicChainError):
    """Base class for infrastructure/system errors."""


class LedgerConnectionError(InfrastructureError):
    """The ledger's JSON-RPC endpoint is unreachable."""


class ConfirmationTimeoutError(InfrastructureError):
    """A submitted transaction was not included within the wait bound."""


class ContentStoreError(InfrastructureError):
    """The content store failed to accept or return a payload."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
