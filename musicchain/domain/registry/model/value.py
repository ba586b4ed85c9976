from musicchain.domain.ledger.model.value import Receipt
from musicchain.domain.registry.model.record import Record
from musicchain.domain.shared.model.value import ValueObject


class RegistrationResult(ValueObject):
    """Outcome of a committed registration.

    ``record`` is None when the catalog could not be refreshed after the
    transaction was included; the registration itself still stands.
    """

    receipt: Receipt
    fee_paid: int
    content_id: str
    record: Record | None = None
    refresh_error: str | None = None
