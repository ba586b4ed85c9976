"""Global test fixtures."""

import logfire
import pytest

# Keep spans local; tests must never ship telemetry
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop MUSICCHAIN_* settings from the developer's shell."""
    import os

    for key in list(os.environ):
        if key.startswith("MUSICCHAIN_"):
            monkeypatch.delenv(key, raising=False)
