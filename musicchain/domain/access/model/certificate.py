from musicchain.domain.registry.model.record import Record
from musicchain.domain.shared.model.value import ValueObject


class Certificate(ValueObject):
    """Proof-of-registration view of a record, with verification links."""

    record: Record
    contract_address: str
    ledger_url: str
    content_url: str


class CertificateLinks(ValueObject):
    """Where a certificate can be independently verified."""

    contract_address: str
    explorer_url: str = "https://etherscan.io"
    gateway_url: str = "https://ipfs.io"

    def issue(self, record: Record) -> Certificate:
        return Certificate(
            record=record,
            contract_address=self.contract_address,
            ledger_url=f"{self.explorer_url.rstrip('/')}/address/{self.contract_address}",
            content_url=f"{self.gateway_url.rstrip('/')}/ipfs/{record.content_id}",
        )
