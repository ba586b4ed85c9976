"""Tests for the application DI container wiring."""

from unittest.mock import AsyncMock

import pytest

from musicchain.application.di import create_container
from musicchain.config import Config
from musicchain.domain.access.command.view_certificate import ViewCertificateHandler
from musicchain.domain.access.model.certificate import CertificateLinks
from musicchain.domain.access.port.confirmation import PaymentConfirmation
from musicchain.domain.ledger.port.client import LedgerClient
from musicchain.domain.registry.command.register_song import RegisterSongHandler
from musicchain.domain.registry.service.catalog import RecordCatalog
from musicchain.domain.registry.service.fee_cache import FeeCache
from musicchain.infrastructure.ledger.client import Web3LedgerClient


class TestContainer:
    @pytest.mark.asyncio
    async def test_caches_are_process_wide(self):
        container = create_container(Config())
        try:
            async with container() as first, container() as second:
                handler_a = await first.get(RegisterSongHandler)
                handler_b = await second.get(RegisterSongHandler)
                assert handler_a is not handler_b
                assert handler_a.registration.fee_cache is handler_b.registration.fee_cache
            assert await container.get(FeeCache) is await container.get(FeeCache)
            assert isinstance(await container.get(RecordCatalog), RecordCatalog)
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_ledger_client_is_web3_backed(self):
        container = create_container(Config())
        try:
            assert isinstance(await container.get(LedgerClient), Web3LedgerClient)
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_certificate_links_follow_config(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MUSICCHAIN_LEDGER__EXPLORER_URL", "https://sepolia.etherscan.io")
        container = create_container()
        try:
            links = await container.get(CertificateLinks)
            assert links.explorer_url == "https://sepolia.etherscan.io"
            assert links.gateway_url == "https://ipfs.io"
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_view_handler_uses_action_confirmation(self):
        container = create_container(Config())
        confirmation = AsyncMock()
        try:
            async with container(context={PaymentConfirmation: confirmation}) as action:
                handler = await action.get(ViewCertificateHandler)
                assert handler.confirmation is confirmation
        finally:
            await container.close()
