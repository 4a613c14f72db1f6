import os

import pytest
from opentelemetry import propagate
from opentelemetry.instrumentation.requests import RequestsInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from sample_client.settings import Settings


@pytest.fixture
def clean_environ(mocker):
    """
    Start from an empty environment. Restored after the test.
    """
    return mocker.patch.dict(os.environ, {}, clear=True)


@pytest.fixture(autouse=True)
def tracecontext_propagator():
    # Keep tests isolated from propagators registered by other tests
    previous = propagate.get_global_textmap()
    propagate.set_global_textmap(TraceContextTextMapPropagator())
    yield
    propagate.set_global_textmap(previous)


@pytest.fixture
def settings(server_url):
    return Settings(
        project_id="p1",
        endpoint=server_url,
        app_name="sample",
        trace_environment="test",
    )


@pytest.fixture
def span_exporter():
    return InMemorySpanExporter()


@pytest.fixture
def test_resource():
    return Resource.create({SERVICE_NAME: "sample-client"})


@pytest.fixture
def tracer_provider(span_exporter, test_resource):
    provider = TracerProvider(resource=test_resource)
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    RequestsInstrumentor().instrument(tracer_provider=provider)
    yield provider
    RequestsInstrumentor().uninstrument()
    provider.shutdown()


@pytest.fixture
def tracer(tracer_provider):
    return tracer_provider.get_tracer("sample_client.tests")


@pytest.fixture
def server_url():
    return "http://testserver/ping"


@pytest.fixture
def mock_server(requests_mock, server_url):
    """
    requests-mock replaces the transport adapter only,
    so the instrumented Session.send still runs and injects the trace headers.
    """
    requests_mock.get(server_url, text="ok", status_code=200)
    return requests_mock
