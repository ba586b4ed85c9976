import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by MUSICCHAIN_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load config from YAML file if specified."""
        config_file = os.environ.get("MUSICCHAIN_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class LedgerConfig(BaseModel):
    """Read endpoint and registry contract (nested in Config, uses env_nested_delimiter)."""

    rpc_url: str = "http://localhost:8545"
    contract_address: str = "0x5FbDB2315678afecb367f032d93F642f64180aa3"  # first Hardhat deployment
    confirmation_timeout: float = 120.0  # Seconds to wait for inclusion
    poll_latency: float = 1.0  # Seconds between receipt polls
    payment_gas_limit: int = 300_000  # Fixed gas for payForAccess
    explorer_url: str = "https://etherscan.io"


class SignerConfig(BaseModel):
    """Write path (nested in Config, uses env_nested_delimiter).

    The url field uses empty string as sentinel to indicate "same as ledger.rpc_url".
    """

    rpc_url: str = ""
    account: str | None = None  # None = first account exposed by the endpoint


class ContentStoreConfig(BaseModel):
    """IPFS daemon and public gateway (nested in Config, uses env_nested_delimiter)."""

    api_url: str = "http://localhost:5001"
    gateway_url: str = "https://ipfs.io"
    timeout: float = 60.0  # Uploads of large audio files


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from MUSICCHAIN_LOG_FILE env var."""
        return os.environ.get("MUSICCHAIN_LOG_FILE")


class Config(BaseSettings):
    ledger: LedgerConfig = LedgerConfig()
    signer: SignerConfig = SignerConfig()
    content_store: ContentStoreConfig = ContentStoreConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = {
        "env_prefix": "MUSICCHAIN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows MUSICCHAIN_LEDGER__RPC_URL override
    }

    @model_validator(mode="after")
    def derive_signer_url(self) -> Self:
        """Sign through the read endpoint unless a separate wallet endpoint is set."""
        if not self.signer.rpc_url:
            self.signer = SignerConfig(rpc_url=self.ledger.rpc_url, account=self.signer.account)
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - MUSICCHAIN_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup so every module logger
    picks up the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("web3").setLevel(logging.WARNING)  # Logs every RPC request at DEBUG
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
