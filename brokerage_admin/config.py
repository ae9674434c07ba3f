"""Configuration management for brokerage-admin."""

import os
from dataclasses import dataclass, field
from typing import Any

from brokerage_admin.exceptions import ConfigurationError

STORE_BACKENDS = ("memory", "postgres")


@dataclass
class PostgresConfig:
    """PostgreSQL connection settings for the document store."""

    host: str = "localhost"
    port: int = 5432
    database: str = "brokerage"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class KafkaConfig:
    """Kafka producer settings for change events."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class StoreConfig:
    """Which document store backs the repositories."""

    backend: str = "memory"
    table: str = "documents"

    def __post_init__(self) -> None:
        if self.backend not in STORE_BACKENDS:
            raise ConfigurationError(
                f"Unknown store backend {self.backend!r}; expected one of {STORE_BACKENDS}"
            )


@dataclass
class ValuationConfig:
    """Display-time valuation animation settings."""

    tick_seconds: float = 2.0
    band: float = 0.05

    def __post_init__(self) -> None:
        if self.tick_seconds <= 0:
            raise ConfigurationError("tick_seconds must be positive")
        if not 0 <= self.band < 1:
            raise ConfigurationError("band must be within [0, 1)")


@dataclass
class AuthConfig:
    """Admin authorization settings."""

    role_claim: str = "role"
    admin_role: str = "admin"


@dataclass
class BrokerageConfig:
    """Main configuration for brokerage-admin."""

    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    valuation: ValuationConfig = field(default_factory=ValuationConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    default_limit: int = 20
    events_enabled: bool = False
    topic_prefix: str = "brokerage"
    log_level: str = "INFO"
    log_format: str = "standard"
    seed: int | None = None

    @classmethod
    def from_env(cls) -> "BrokerageConfig":
        """Create config from environment variables."""
        try:
            postgres = PostgresConfig(
                host=os.getenv("POSTGRES_HOST", "localhost"),
                port=int(os.getenv("POSTGRES_PORT", "5432")),
                database=os.getenv("POSTGRES_DB", "brokerage"),
                user=os.getenv("POSTGRES_USER", "postgres"),
                password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            )
            kafka = KafkaConfig(
                bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
                acks=os.getenv("KAFKA_ACKS", "all"),
            )
            valuation = ValuationConfig(
                tick_seconds=float(os.getenv("VALUATION_TICK_SECONDS", "2.0")),
                band=float(os.getenv("VALUATION_BAND", "0.05")),
            )
            default_limit = int(os.getenv("DEFAULT_LIMIT", "20"))
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

        return cls(
            postgres=postgres,
            kafka=kafka,
            store=StoreConfig(
                backend=os.getenv("STORE_BACKEND", "memory"),
                table=os.getenv("STORE_TABLE", "documents"),
            ),
            valuation=valuation,
            auth=AuthConfig(
                role_claim=os.getenv("ADMIN_ROLE_CLAIM", "role"),
                admin_role=os.getenv("ADMIN_ROLE", "admin"),
            ),
            default_limit=default_limit,
            events_enabled=os.getenv("EVENTS_ENABLED", "false").lower() == "true",
            topic_prefix=os.getenv("TOPIC_PREFIX", "brokerage"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            seed=seed,
        )
