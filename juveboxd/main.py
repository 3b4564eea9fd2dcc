import logging
from typing import List

from fastapi import FastAPI, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from prometheus_fastapi_instrumentator import Instrumentator

from juveboxd.config import Settings
from juveboxd.database import FileStorage
from juveboxd.errors import NotFound, PersistenceFull, ReviewError, StoreUnavailable, ValidationError
from juveboxd.mirror import Mirror
from juveboxd.schemas import Review, ReviewCreate, sort_newest_first
from juveboxd.store import LocalReviewStore, ReviewStore
from juveboxd.validation import validate_draft

if Settings.OTEL_EXPORTER_ENDPOINT:
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

    provider = TracerProvider(resource=Resource(attributes={SERVICE_NAME: "review-service"}))
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=Settings.OTEL_EXPORTER_ENDPOINT, insecure=True))
    )
    trace.set_tracer_provider(provider)

tracer = trace.get_tracer(__name__)

logging.basicConfig(level=Settings.LOG_LEVEL)
logger = logging.getLogger("review-service")

app = FastAPI(title="Review Service", version="0.1.0")
Instrumentator().instrument(app).expose(app)  # /metrics

_store: LocalReviewStore | None = None


def get_store() -> ReviewStore:
    global _store
    if _store is None:
        _store = LocalReviewStore(FileStorage(Settings.STORAGE_PATH), mirror=Mirror(Settings.MIRROR_URL))
    return _store


@app.on_event("shutdown")
async def shutdown():
    if _store is not None and _store.mirror is not None:
        await _store.mirror.aclose()


# Error bodies follow {"message": ...}

STATUS_BY_ERROR = [
    (ValidationError, 422),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (PersistenceFull, status.HTTP_507_INSUFFICIENT_STORAGE),
    (StoreUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
]


@app.exception_handler(ReviewError)
async def review_error_handler(request: Request, exc: ReviewError):
    code = next((c for cls, c in STATUS_BY_ERROR if isinstance(exc, cls)), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(status_code=422, content={"message": message})


# Endpoints
@app.get("/reviews", response_model=List[Review])
async def list_reviews(store: ReviewStore = Depends(get_store)):
    with tracer.start_as_current_span("list_reviews"):
        return sort_newest_first(await store.list())


@app.post("/reviews", response_model=Review, status_code=status.HTTP_201_CREATED)
async def create_review(data: ReviewCreate, store: ReviewStore = Depends(get_store)):
    with tracer.start_as_current_span("create_review"):
        draft = validate_draft(data.nickname, data.rating, data.comment)
        return await store.create(draft)


@app.get("/reviews/{review_id}", response_model=Review)
async def get_review(review_id: str, store: ReviewStore = Depends(get_store)):
    with tracer.start_as_current_span("get_review"):
        return await store.get_by_id(review_id)


@app.delete("/reviews/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(review_id: str, store: ReviewStore = Depends(get_store)):
    with tracer.start_as_current_span("delete_review"):
        await store.delete(review_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
