from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

_OTEL_INITIALIZED = False


def init_otel(app=None, engine=None, service_name: str = "textshare", export: bool = True):
    """Initialize OpenTelemetry tracing with console exporter.

    Pass FastAPI app and SQLAlchemy engine to instrument automatically.
    The provider is installed once per process; later calls only instrument.
    """
    global _OTEL_INITIALIZED

    if not _OTEL_INITIALIZED:
        resource = Resource.create({"service.name": service_name})
        provider = TracerProvider(resource=resource)
        if export:
            provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        trace.set_tracer_provider(provider)
        _OTEL_INITIALIZED = True

    if app is not None:
        FastAPIInstrumentor.instrument_app(app)

    if engine is not None:
        SQLAlchemyInstrumentor().instrument(engine=engine)

    return trace.get_tracer(service_name)
