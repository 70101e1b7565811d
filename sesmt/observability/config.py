"""
OpenTelemetry Configuration

Sets up distributed tracing and logging for the SESMT compliance engine.
"""

import os
import logging
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

SERVICE_NAME = 'sesmt-compliance'


def build_sampler(environment: str) -> TraceIdRatioBased:
    """Sampling ratio per deployment environment."""
    if environment == 'production':
        return TraceIdRatioBased(0.1)  # 10% sampling in production
    if environment == 'staging':
        return TraceIdRatioBased(0.5)
    return TraceIdRatioBased(1.0)


def setup_observability() -> bool:
    """
    Initialize OpenTelemetry tracing based on environment configuration.

    Returns:
        True if a tracer provider was installed
    """
    environment = os.getenv('ENVIRONMENT', 'development')
    otel_enabled = os.getenv('OTEL_ENABLED', 'true').lower() == 'true'
    service_version = os.getenv('SERVICE_VERSION', '1.0.0')

    setup_structured_logging(environment)

    if not otel_enabled:
        # Spans stay no-op without a tracer provider
        return False

    resource = Resource.create({
        "service.name": SERVICE_NAME,
        "service.version": service_version,
        "deployment.environment": environment
    })
    tracer_provider = TracerProvider(sampler=build_sampler(environment), resource=resource)

    if environment == 'development':
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    else:
        otlp_endpoint = os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT')
        if otlp_endpoint:
            tracer_provider.add_span_processor(
                BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint), max_export_batch_size=512)
            )
        else:
            logging.getLogger(__name__).warning(
                f"OTEL_EXPORTER_OTLP_ENDPOINT not set; spans will not be exported in {environment}"
            )

    trace.set_tracer_provider(tracer_provider)
    return True


def setup_structured_logging(environment: str):
    """Configure logging levels per environment."""
    log_level = {
        'production': logging.WARNING,
        'staging': logging.INFO,
        'development': logging.INFO
    }.get(environment, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s %(levelname)s %(name)s %(message)s',
        handlers=[logging.StreamHandler()]
    )

    if environment == 'production':
        logging.getLogger('pymongo').setLevel(logging.WARNING)

    elif environment == 'development':
        logging.getLogger('sesmt.domain').setLevel(logging.DEBUG)
        logging.getLogger('sesmt.services').setLevel(logging.DEBUG)
