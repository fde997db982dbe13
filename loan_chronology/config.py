"""Configuration management for loan-chronology."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loan_chronology.exceptions import ConfigurationError
from loan_chronology.models.enums import WeekMode

FULLY_PAID_POLICY_NAMES = ("never", "by_amount")


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class ChronologyConfig:
    """Rules used by the chronology engine.

    Attributes
    ----------
    default_week_duration : int
        Term assumed for loans without a stored week duration.
    principal_per_week : int
        Principal amount that extends the evaluation window by one week
        for open loans (``ceil(principal / principal_per_week)``).
    fully_paid_policy : str
        ``"never"`` keeps every open loan evaluated until its window ends;
        ``"by_amount"`` stops at "now" once payments cover the total due.
    date_format : str
        ``strftime`` pattern for ``date_formatted`` on events.
    """

    default_week_duration: int = 12
    principal_per_week: int = 100
    fully_paid_policy: str = "never"
    date_format: str = "%d/%m/%Y"

    def __post_init__(self) -> None:
        if self.default_week_duration <= 0:
            raise ConfigurationError(
                f"default_week_duration must be positive, got {self.default_week_duration}"
            )
        if self.principal_per_week <= 0:
            raise ConfigurationError(
                f"principal_per_week must be positive, got {self.principal_per_week}"
            )
        if self.fully_paid_policy not in FULLY_PAID_POLICY_NAMES:
            raise ConfigurationError(
                f"Unknown fully_paid_policy {self.fully_paid_policy!r}, "
                f"expected one of {FULLY_PAID_POLICY_NAMES}"
            )


@dataclass
class ListingConfig:
    """Collections listing configuration."""

    week_mode: WeekMode = WeekMode.CURRENT
    topic_prefix: str = "dev.collections"


@dataclass
class AppConfig:
    """Main configuration for loan-chronology."""

    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    chronology: ChronologyConfig = field(default_factory=ChronologyConfig)
    listing: ListingConfig = field(default_factory=ListingConfig)
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create config from environment variables."""
        import os

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        try:
            chronology = ChronologyConfig(
                default_week_duration=int(os.getenv("DEFAULT_WEEK_DURATION", "12")),
                principal_per_week=int(os.getenv("PRINCIPAL_PER_WEEK", "100")),
                fully_paid_policy=os.getenv("FULLY_PAID_POLICY", "never"),
                date_format=os.getenv("DATE_FORMAT", "%d/%m/%Y"),
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid chronology setting: {exc}") from exc

        week_mode_str = os.getenv("LISTING_WEEK_MODE", WeekMode.CURRENT.value)
        try:
            week_mode = WeekMode(week_mode_str.upper())
        except ValueError as exc:
            raise ConfigurationError(f"Unknown LISTING_WEEK_MODE {week_mode_str!r}") from exc

        listing = ListingConfig(
            week_mode=week_mode,
            topic_prefix=os.getenv("TOPIC_PREFIX", "dev.collections"),
        )

        return cls(
            kafka=kafka,
            output=output,
            chronology=chronology,
            listing=listing,
            seed=int(os.getenv("SEED")) if os.getenv("SEED") else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
