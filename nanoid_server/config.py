from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nanoid_server.alphabets import DEFAULT_ALPHABET_NAME
from nanoid_server.nanoid import DEFAULT_ID_LEN

ENV_PREFIX = "NANOID_"

Strategy = Literal["batched", "iterative"]


class LoggingSettings(BaseModel):
    verbose: bool = Field(True, description="If logging to stdout by uvicorn and app")


class MetricsSettings(BaseModel):
    enabled: bool = Field(
        True,
        description="If enable metrics to port",
    )
    endpoint: str = Field("/metrics", description="Path exposing Prometheus metrics.")


class TraceSettings(BaseModel):
    enabled: bool = Field(True, description="Enable OpenTelemetry tracing")
    service_name: str = Field(
        "nanoid_server", description="Service Name used in trace provider."
    )
    endpoint: str = Field("", description="Grafana Tempo OTLP endpoint URL")
    username: str = Field("", description="Grafana Tempo basic auth username")
    password: str = Field("", description="Grafana Tempo basic auth password")
    sample_rate: float = Field(
        0.1, ge=0.0, le=1.0, description="Ratio of root spans sampled for export."
    )
    excluded_urls: list[str] = Field(
        default_factory=lambda: ["/health", "/metrics"],
        description="URLs not traced by the FastAPI instrumentation.",
    )


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False, env_prefix=ENV_PREFIX, env_nested_delimiter="__"
    )

    default_size: int = Field(
        DEFAULT_ID_LEN, gt=0, description="Id length used when a request omits it."
    )
    max_size: int = Field(
        256, gt=0, description="Largest id length a single request may ask for."
    )
    max_count: int = Field(
        1000, gt=0, description="Largest number of ids a single request may ask for."
    )
    default_alphabet: str = Field(
        DEFAULT_ALPHABET_NAME, description="Named alphabet used by default."
    )
    default_strategy: Strategy = Field(
        "batched", description="Generator strategy used by default."
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)
    tracing: TraceSettings = Field(default_factory=TraceSettings)


def get_settings() -> Settings:
    if not hasattr(get_settings, "_instance"):
        get_settings._instance = Settings()
    return get_settings._instance
