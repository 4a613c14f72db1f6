import logging
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.exporter.cloud_trace import CloudTraceSpanExporter
from opentelemetry.instrumentation.requests import RequestsInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.propagators.cloud_trace_propagator import (
    CloudTraceFormatPropagator,
)
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.resourcedetector.gcp_resource_detector import (
    GoogleCloudResourceDetector,
)
from opentelemetry.sdk.resources import SERVICE_NAME, Resource, get_aggregated_resources
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator


logger = logging.getLogger(__name__)

TRACER_NAME = "proto-ms-app-client/main"

propagator_factories = {
    "tracecontext": TraceContextTextMapPropagator,  # W3C traceparent header
    "cloud_trace": CloudTraceFormatPropagator,  # X-Cloud-Trace-Context header
}


class TracingSetupError(Exception):
    pass


def build_exporter(project_id):
    try:
        return CloudTraceSpanExporter(project_id=project_id or None)
    except Exception as e:
        raise TracingSetupError(f"Error creating Cloud Trace exporter: {e}") from e


def build_resource(service_name):
    """
    Describes this process: service name and telemetry SDK attributes,
    plus the GCP platform attributes (project, zone, instance...) when running in GCP.
    """
    try:
        return get_aggregated_resources(
            [GoogleCloudResourceDetector()],
            initial_resource=Resource.create({SERVICE_NAME: service_name}),
        )
    except Exception as e:
        raise TracingSetupError(f"Error creating telemetry resource: {e}") from e


def build_propagator(name):
    factories = []
    for item in name.split(","):
        factory = propagator_factories.get(item.strip())
        if not factory:
            raise TracingSetupError(f"Unknown trace propagator '{item}'")
        factories.append(factory)
    if len(factories) == 1:
        return factories[0]()
    return CompositePropagator([factory() for factory in factories])


def build_tracer_provider(settings, exporter=None, resource=None):
    exporter = exporter or build_exporter(settings.project_id)
    resource = resource or build_resource(settings.service_name)
    tracer_provider = TracerProvider(resource=resource)
    # BatchSpanProcessor buffers spans and sends them in batches in a background thread
    tracer_provider.add_span_processor(BatchSpanProcessor(exporter))
    return tracer_provider


@contextmanager
def configured_tracing(settings, exporter=None, resource=None):
    """
    Sets up the process-wide tracer provider and propagator, and instruments requests.
    The provider is flushed and shut down when the block exits, whatever the reason.
    """
    propagator = build_propagator(settings.trace_propagator)
    tracer_provider = build_tracer_provider(settings, exporter=exporter, resource=resource)
    trace.set_tracer_provider(tracer_provider)
    set_global_textmap(propagator)
    RequestsInstrumentor().instrument(tracer_provider=tracer_provider)
    logger.info(
        f"Tracing configured for project '{settings.project_id}'",
        extra={"service_name": settings.service_name, "propagator": settings.trace_propagator},
    )
    try:
        yield tracer_provider
    finally:
        RequestsInstrumentor().uninstrument()
        tracer_provider.shutdown()
        logger.info("Tracer provider shut down.")
