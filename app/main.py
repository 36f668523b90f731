"""
FastAPI Inference Service for Titanic Survival Prediction.

Endpoints:
  GET  /health   → Health check
  POST /predict  → Predict survival from passenger form values
  GET  /metrics  → Prometheus metrics
"""

import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from app.capability import has_accelerated_inference_device
from app.form import FAILURE_MESSAGE, submit_prediction
from app.predictor import PredictionService
from app.schemas import FormState, HealthResponse, PredictionResponse

# ── Structured JSON-like logging ─────────────────────────────────────────────
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
)
logger = logging.getLogger("titanic-api")

# ── Prometheus Metrics ────────────────────────────────────────────────────────
REQUEST_COUNT = Counter(
    "titanic_request_total",
    "Total number of requests",
    ["endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "titanic_request_latency_seconds",
    "Request latency in seconds",
    ["endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)
PREDICTION_LABELS = Counter(
    "titanic_prediction_label_total",
    "Count of predicted labels",
    ["label"],
)

# ── App lifespan (load model once) ───────────────────────────────────────────
service: PredictionService | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    global service
    logger.info("Loading model...")
    service = PredictionService.load()
    if service.loaded:
        logger.info("Model loaded successfully")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Titanic Survival Prediction API",
    description="Predicts whether a Titanic passenger would have survived.",
    version="1.0.0",
    lifespan=lifespan,
)


# ── Endpoints ─────────────────────────────────────────────────────────────────

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Health check endpoint, returns service, model and accelerator status."""
    start = time.time()
    REQUEST_COUNT.labels(endpoint="/health", status="200").inc()
    REQUEST_LATENCY.labels(endpoint="/health").observe(time.time() - start)
    return HealthResponse(
        status="ok",
        model_loaded=service is not None and service.loaded,
        accelerator_available=(
            service.accelerator_available() if service is not None
            else has_accelerated_inference_device()
        ),
    )


@app.post("/predict", response_model=PredictionResponse, tags=["Inference"])
async def predict(form: FormState):
    """
    Accept passenger form values and return the survival prediction.

    Slider values outside the form ranges are clamped before encoding.
    """
    start = time.time()

    if service is None or not service.loaded:
        REQUEST_COUNT.labels(endpoint="/predict", status="503").inc()
        raise HTTPException(status_code=503, detail=FAILURE_MESSAGE)

    result = await submit_prediction(service, form)

    if result.unavailable:
        REQUEST_COUNT.labels(endpoint="/predict", status="503").inc()
        raise HTTPException(status_code=503, detail=result.error)
    if result.is_error:
        REQUEST_COUNT.labels(endpoint="/predict", status="500").inc()
        raise HTTPException(status_code=500, detail=result.error)

    latency = time.time() - start
    REQUEST_COUNT.labels(endpoint="/predict", status="200").inc()
    REQUEST_LATENCY.labels(endpoint="/predict").observe(latency)
    PREDICTION_LABELS.labels(label=result.prediction).inc()

    logger.info(
        f"predict | label={result.prediction} "
        f"confidence={result.certainty:.4f} "
        f"latency={latency:.3f}s"
    )

    return PredictionResponse(
        label=result.prediction,
        survived=result.survived,
        confidence=result.certainty,
    )


@app.get("/metrics", tags=["System"], include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint."""
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
