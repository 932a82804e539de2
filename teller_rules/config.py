"""Configuration management for teller-rules."""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path

from teller_rules.exceptions import ConfigurationError


@dataclass
class RulesConfig:
    """Settings consumed by the teller service when invoking the engine."""

    currency: str = "LKR"
    money_quantum: Decimal = Decimal("0.01")


@dataclass
class SampleDataConfig:
    """Synthetic sample data configuration."""

    num_customers: int = 50
    locale: str = "en_US"
    output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class TellerConfig:
    """Main configuration for teller-rules."""

    rules: RulesConfig = field(default_factory=RulesConfig)
    sample_data: SampleDataConfig = field(default_factory=SampleDataConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "TellerConfig":
        """Create config from environment variables."""
        import os

        rules = RulesConfig(currency=os.getenv("TELLER_CURRENCY", "LKR"))

        sample_data = SampleDataConfig(
            num_customers=_int_env("SAMPLE_CUSTOMERS", "50"),
            locale=os.getenv("FAKER_LOCALE", "en_US"),
            output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"LOG_FORMAT must be 'standard' or 'json', got {log_format!r}")

        return cls(
            rules=rules,
            sample_data=sample_data,
            seed=_int_env("SEED", None),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )


def _int_env(name: str, default: str | None) -> int | None:
    import os

    raw = os.getenv(name, default)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
