"""DI provider for ledger infrastructure."""

from typing import AsyncIterable, NewType

from dishka import provide
from web3 import AsyncHTTPProvider, AsyncWeb3

from musicchain.config import Config
from musicchain.domain.ledger.port.client import LedgerClient
from musicchain.domain.ledger.port.signer import Signer
from musicchain.infrastructure.ledger.client import Web3LedgerClient
from musicchain.infrastructure.ledger.signer import NodeSigner
from musicchain.util.di.base import Provider
from musicchain.util.di.scope import Scope

# Reads and signing may go to different endpoints (node vs. wallet bridge)
ReadWeb3 = NewType("ReadWeb3", AsyncWeb3)
SignerWeb3 = NewType("SignerWeb3", AsyncWeb3)


class LedgerProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_read_web3(self, config: Config) -> AsyncIterable[ReadWeb3]:
        w3 = AsyncWeb3(AsyncHTTPProvider(config.ledger.rpc_url))
        yield ReadWeb3(w3)
        await w3.provider.disconnect()

    @provide(scope=Scope.APP)
    async def get_signer_web3(self, config: Config) -> AsyncIterable[SignerWeb3]:
        w3 = AsyncWeb3(AsyncHTTPProvider(config.signer.rpc_url))
        yield SignerWeb3(w3)
        await w3.provider.disconnect()

    @provide(scope=Scope.APP)
    def get_signer(self, w3: SignerWeb3, config: Config) -> Signer:
        return NodeSigner(w3=w3, account=config.signer.account)

    @provide(scope=Scope.APP)
    def get_ledger_client(self, w3: ReadWeb3, signer: Signer, config: Config) -> LedgerClient:
        return Web3LedgerClient(
            w3=w3,
            contract_address=config.ledger.contract_address,
            signer=signer,
            payment_gas_limit=config.ledger.payment_gas_limit,
            poll_latency=config.ledger.poll_latency,
            default_timeout=config.ledger.confirmation_timeout,
        )
