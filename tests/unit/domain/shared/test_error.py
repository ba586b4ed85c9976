"""Tests for the error hierarchy and revert classification."""

from musicchain.domain.shared.error import (
    DomainError,
    FeeNotLoadedError,
    InfrastructureError,
    LedgerConnectionError,
    PartialLoadError,
    RevertError,
    RevertReason,
)


class TestRevertReason:
    def test_classifies_registrant_exemption(self):
        assert RevertReason.classify("Registrant does not need to pay") == RevertReason.REGISTRANT_EXEMPT

    def test_classification_ignores_case_and_prefix(self):
        detail = "execution reverted: REGISTRANT DOES NOT NEED TO PAY"
        assert RevertReason.classify(detail) == RevertReason.REGISTRANT_EXEMPT

    def test_unknown_reason_falls_back(self):
        assert RevertReason.classify("Song does not exist") == RevertReason.UNKNOWN


class TestRevertError:
    def test_keeps_free_text_and_typed_reason(self):
        err = RevertError("Registrant does not need to pay")
        assert err.detail == "Registrant does not need to pay"
        assert err.reason == RevertReason.REGISTRANT_EXEMPT
        assert err.code == "registrant_exempt"
        assert "Registrant does not need to pay" in err.message

    def test_explicit_reason_wins(self):
        err = RevertError("custom error 0x1234", reason=RevertReason.UNKNOWN)
        assert err.reason == RevertReason.UNKNOWN

    def test_is_domain_error(self):
        assert isinstance(RevertError("x"), DomainError)


class TestErrorLayers:
    def test_connection_error_is_infrastructure(self):
        assert isinstance(LedgerConnectionError("down"), InfrastructureError)

    def test_default_code_is_class_name(self):
        assert LedgerConnectionError("down").code == "LedgerConnectionError"

    def test_fee_not_loaded_has_stable_code(self):
        assert FeeNotLoadedError().code == "fee_not_loaded"

    def test_partial_load_reports_progress(self):
        err = PartialLoadError(song_id=2, loaded=1, total=3)
        assert (err.song_id, err.loaded, err.total) == (2, 1, 3)
        assert "1 of 3" in err.message
