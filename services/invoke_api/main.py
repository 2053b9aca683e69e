"""Invoke API - HTTP front for the Bedrock Mixtral invoker."""

import os
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse

from invoker.config import InvokerConfig
from invoker.health import HealthChecker
from invoker.invoker import InferenceInvoker
from invoker.models import PredictRequest, PredictResponse
from invoker.results import AccessDenied
from invoker.telemetry import setup_telemetry

SERVICE_NAME = "invoke-api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup resources."""
    app.state.invoker = InferenceInvoker(InvokerConfig.from_env(), tracer=tracer)
    app.state.health = HealthChecker(app.state.invoker.client)

    yield


app = FastAPI(
    title="Invoke API",
    description="Mixtral 8x7B Instruct on Amazon Bedrock",
    lifespan=lifespan
)

tracer, meter = setup_telemetry(SERVICE_NAME, "inference", app=app)

predict_counter = meter.create_counter("lab_service_requests_total")
predict_latency = meter.create_histogram("lab_llm_e2e_duration_ms")


def get_invoker(request: Request) -> InferenceInvoker:
    return request.app.state.invoker


# Health Endpoints
@app.get("/startup")
async def startup():
    """Startup probe - returns 200 once the model is reachable."""
    if await app.state.health.startup_check():
        return {"status": "started", "service": SERVICE_NAME}
    raise HTTPException(status_code=503, detail="Service starting")


@app.get("/health")
async def health():
    """Liveness probe - returns 200 if process is alive."""
    if await app.state.health.liveness_check():
        return {"status": "healthy", "service": SERVICE_NAME, "version": os.getenv("SERVICE_VERSION", "0.1.0")}
    raise HTTPException(status_code=500, detail="Service unhealthy")


@app.get("/ready")
async def ready():
    """Readiness probe - returns 200 if ready for traffic."""
    if await app.state.health.readiness_check():
        return {"status": "ready", "service": SERVICE_NAME}
    raise HTTPException(status_code=503, detail="Service not ready")


@app.post("/predict", response_model=PredictResponse)
async def predict(
    request: PredictRequest,
    invoker: InferenceInvoker = Depends(get_invoker),
    x_correlation_id: Optional[str] = Header(None, alias="X-Correlation-ID")
):
    """
    Run one inference through Bedrock.

    Headers:
        X-Correlation-ID: Request correlation ID (generated if not provided)

    Returns:
        PredictResponse with the model's completions
    """
    start_time = time.time()
    correlation_id = x_correlation_id or str(uuid.uuid4())
    model_id = invoker.config.model_id

    try:
        result = await invoker.invoke(request.prompt)
    except Exception as e:
        predict_counter.add(1, {"status": "error", "error_type": type(e).__name__})
        raise HTTPException(
            status_code=500,
            detail={
                "error": "prediction_failed",
                "message": str(e),
                "correlation_id": correlation_id
            }
        )

    if isinstance(result, AccessDenied):
        predict_counter.add(1, {"status": "access_denied"})
        raise HTTPException(
            status_code=403,
            detail={
                "error": "access_denied",
                "message": result.message,
                "model_id": result.model_id,
                "correlation_id": correlation_id
            }
        )

    latency_ms = (time.time() - start_time) * 1000
    predict_counter.add(1, {"status": "success"})
    predict_latency.record(latency_ms, {"model_id": model_id})

    return PredictResponse(
        completions=result.texts,
        model_id=model_id,
        latency_ms=latency_ms,
        correlation_id=correlation_id
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": str(exc),
            "service": SERVICE_NAME
        }
    )
