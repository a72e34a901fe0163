"""
Payment Intent Service - application entry point.

Wires the payment intent route, the Stripe client and the observability stack
into one FastAPI app. Every response body is JSON; errors use {"error": ...}.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import routes
from api.middleware import log_request
from api.routes import payment_intents
from core import dependencies
from core.metrics import add_metrics_auth_middleware, init_metrics
from core.settings import Settings
from core.tracing import init_tracer
from payments.stripe_service import StripeService

log = structlog.get_logger(__name__)

API_PREFIX = "/api/v1"
PAYMENT_INTENTS_PATH = f"{API_PREFIX}/payment-intents"


@asynccontextmanager
async def lifespan(app: FastAPI):
    dependencies.init_settings()
    settings = dependencies.get_settings()

    init_tracer(settings.OTEL_SERVICE_NAME, settings.OTEL_EXPORTER_OTLP_ENDPOINT)
    dependencies.init_payment_service(settings)
    log.info(
        "app.startup",
        app_name=settings.APP_NAME,
        environment=settings.ENVIRONMENT,
        stripe_api_version=settings.STRIPE_API_VERSION,
    )

    yield

    dependencies.clear_payment_service()
    dependencies.clear_settings()


app = FastAPI(
    title="Payment Intent Service",
    description="POST an amount, get back the client secret of a new Stripe PaymentIntent.",
    version="1.0.0",
    lifespan=lifespan,
)

FastAPIInstrumentor.instrument_app(app)
init_metrics(app)
add_metrics_auth_middleware(app)
app.middleware("http")(log_request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Routing errors (404, 405) get the same {"error": ...} body as the handler."""
    if exc.status_code == 405 and request.url.path == PAYMENT_INTENTS_PATH:
        return payment_intents.method_not_allowed(request)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.get("/")
async def root():
    return {
        "name": "Payment Intent Service",
        "version": app.version,
        "endpoints": {
            "payment_intents": f"POST {PAYMENT_INTENTS_PATH} {{amount}}",
            "health": "GET /healthz",
            "ready": "GET /readyz",
            "metrics": "GET /metrics",
            "docs": "GET /docs",
        },
    }


@app.get("/health")
@app.get("/healthz")
async def health_check(settings: Settings = Depends(dependencies.get_settings)):
    """Liveness: the process is up and configured."""
    return {
        "status": "ok",
        "app_name": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
    }


@app.get("/readyz")
def readiness_check(
    service: StripeService = Depends(dependencies.get_payment_service),
):
    """Readiness: Stripe accepts the configured credential."""
    if service.test_connection():
        return {"status": "ok"}
    return JSONResponse(status_code=503, content={"status": "unavailable"})


app.include_router(routes.router, prefix=API_PREFIX)


def main():
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
