"""OpenTelemetry bootstrap for the invoker and its demo service.

Spans and metrics are exported over OTLP only when OTEL_EXPORTER_OTLP_ENDPOINT
is set; without it the SDK providers are installed with no exporters.
"""

import os
from opentelemetry import trace, metrics
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_NAMESPACE
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.botocore import BotocoreInstrumentor

from invoker.logging_config import configure_logging


def _create_resource(service_name: str, namespace: str) -> Resource:
    attrs = {
        SERVICE_NAME: service_name,
        SERVICE_NAMESPACE: namespace,
        "service.version": os.getenv("SERVICE_VERSION", "0.1.0"),
        "deployment.environment": os.getenv("ENVIRONMENT", "dev"),
        "cloud.provider": "aws",
        "cloud.region": os.getenv("AWS_REGION", "us-west-2"),
    }
    return Resource.create(attrs)


def setup_telemetry(service_name: str, namespace: str = "inference", app=None):
    """Initialize OpenTelemetry; instruments ``app`` too when a FastAPI app is given."""
    resource = _create_resource(service_name, namespace)
    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")

    trace_provider = TracerProvider(resource=resource)
    metric_readers = []
    if otlp_endpoint:
        trace_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
        metric_readers.append(PeriodicExportingMetricReader(
            OTLPMetricExporter(endpoint=otlp_endpoint, insecure=True),
            export_interval_millis=30000
        ))
    trace.set_tracer_provider(trace_provider)
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=metric_readers))

    # Auto-instrument boto3/botocore (Bedrock calls)
    BotocoreInstrumentor().instrument()

    if app is not None:
        FastAPIInstrumentor.instrument_app(app)

    configure_logging(service_name, os.getenv("LOG_LEVEL", "INFO"))

    return trace.get_tracer(service_name), metrics.get_meter(service_name)
