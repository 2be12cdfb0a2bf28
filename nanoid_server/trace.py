import base64
import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from nanoid_server.config import TraceSettings
from nanoid_server.utils import (
    ErrorAwareSampler,
    NanoidLoggingSpanProcessor,
    NanoidMetricsSpanProcessor,
)

SERVICE_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def setup_tracing(app: FastAPI, settings: TraceSettings) -> None:
    """Initialize OpenTelemetry tracing with optional Grafana Tempo export."""
    if not settings.enabled:
        return

    resource = Resource.create(
        attributes={
            "service.name": settings.service_name,
            "service.version": SERVICE_VERSION,
        }
    )

    # Set up tracer provider with error-aware sampler
    ratio_based_sampler = TraceIdRatioBased(settings.sample_rate)
    error_aware_sampler = ErrorAwareSampler(ratio_based_sampler)

    trace.set_tracer_provider(
        TracerProvider(
            resource=resource,
            sampler=ParentBased(
                root=error_aware_sampler,
                local_parent_not_sampled=error_aware_sampler,
            ),
        )
    )
    tracer_provider = trace.get_tracer_provider()

    # Configure OTLP exporter for Grafana Tempo if endpoint is provided
    if settings.endpoint:
        headers = {}

        if settings.username and settings.password:
            credentials = f"{settings.username}:{settings.password}"
            encoded_credentials = base64.b64encode(credentials.encode()).decode()
            headers["Authorization"] = f"Basic {encoded_credentials}"
        else:
            logger.warning("Tempo credentials not configured, exporting without auth")

        otlp_exporter = OTLPSpanExporter(endpoint=settings.endpoint, headers=headers)
        # Only sampled spans go to OTLP endpoint
        tracer_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    # Logging and metrics see ALL spans (sampled + unsampled)
    tracer_provider.add_span_processor(NanoidLoggingSpanProcessor())
    tracer_provider.add_span_processor(NanoidMetricsSpanProcessor())

    excluded_urls_str = (
        ",".join(settings.excluded_urls) if settings.excluded_urls else ""
    )
    FastAPIInstrumentor.instrument_app(
        app, tracer_provider=tracer_provider, excluded_urls=excluded_urls_str
    )
