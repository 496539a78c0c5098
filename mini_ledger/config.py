"""Configuration management for mini-ledger."""

from dataclasses import dataclass, field

from mini_ledger.exceptions import ConfigurationError
from mini_ledger.ids import IdGenerator


@dataclass
class IdConfig:
    """Identifier allocation configuration."""

    start_at: int = 0
    account_prefix: str = "ACC"
    transaction_prefix: str = "TX"


@dataclass
class DemoConfig:
    """Configuration for the console demo."""

    seed: int | None = None
    locale: str = "en_US"
    num_accounts: int = 3
    pretty: bool = True


@dataclass
class LedgerConfig:
    """Main configuration for mini-ledger."""

    ids: IdConfig = field(default_factory=IdConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
    default_currency: str = "EUR"
    log_level: str = "INFO"
    log_format: str = "standard"

    def create_id_generator(self) -> IdGenerator:
        """Build an IdGenerator starting at the configured value."""
        return IdGenerator(start_at=self.ids.start_at)

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        ids = IdConfig(
            start_at=_env_int("LEDGER_ID_START_AT", 0),
            account_prefix=os.getenv("LEDGER_ACCOUNT_PREFIX", "ACC"),
            transaction_prefix=os.getenv("LEDGER_TRANSACTION_PREFIX", "TX"),
        )

        demo = DemoConfig(
            seed=_env_int("DEMO_SEED", None),
            locale=os.getenv("DEMO_LOCALE", "en_US"),
            num_accounts=_env_int("DEMO_ACCOUNTS", 3),
            pretty=os.getenv("PRETTY_JSON", "true").lower() == "true",
        )

        return cls(
            ids=ids,
            demo=demo,
            default_currency=os.getenv("LEDGER_CURRENCY", "EUR"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _env_int(name: str, default: int | None) -> int | None:
    import os

    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
