import time
import uuid
from typing import List, Optional
from fastapi import FastAPI, Request, Response, status
from loguru import logger
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from models import Product
from repository import StaticProductRepository
from schemas import ProductPayload, ProductResponse
from service import ProductNotFoundError, ProductService
from settings import Settings

SERVICE_NAME = "products-service"


def configure_logging(settings: Settings):
    # Config logging JSON (niveaux INFO, WARNING, ERROR)
    logger.remove()
    logger.add(
        sink=settings.log_file,
        format="{time:YYYY-MM-DDTHH:mm:ss.SSSZ} | {level} | {message} | {extra}",
        level=settings.log_level.upper(),
        serialize=True,
        rotation="1 day",
    )


# Prometheus metrics
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["service", "method", "endpoint"]
)
ERROR_COUNT = Counter(
    "http_errors_total",
    "Total HTTP errors",
    ["service", "endpoint", "error_type"]
)
UNMATCHED_ENDPOINT = "unmatched"


def endpoint_label(request: Request, status_code: int) -> str:
    """
    Gabarit de la route résolue (ex. /api/product/{product_id}) plutôt que le
    chemin brut, pour garder un nombre borné de séries Prometheus.
    """
    route = request.scope.get("route")
    if route is not None:
        return route.path
    if status_code == status.HTTP_404_NOT_FOUND:
        return UNMATCHED_ENDPOINT
    return request.url.path


def create_app(service: Optional[ProductService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Construit l'application: le service est passé explicitement aux handlers.
    La documentation interactive n'est exposée qu'en environnement development.
    """
    settings = settings or Settings()
    service = service or ProductService(repository=StaticProductRepository())

    docs_enabled = settings.is_development
    app = FastAPI(
        title="Products Service",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.product_service = service

    # Corrélation des logs (X-Trace-ID) et métriques par route
    @app.middleware("http")
    async def trace_and_measure(request: Request, call_next):
        trace_id = request.headers.get("X-Trace-ID") or str(uuid.uuid4())
        started = time.perf_counter()

        with logger.contextualize(trace_id=trace_id, service=SERVICE_NAME):
            logger.info(f"{request.method} {request.url.path}", extra={"query": str(request.url.query)})
            response = await call_next(request)
            latency = time.perf_counter() - started

            endpoint = endpoint_label(request, response.status_code)
            REQUEST_COUNT.labels(SERVICE_NAME, request.method, endpoint, response.status_code).inc()
            REQUEST_LATENCY.labels(SERVICE_NAME, request.method, endpoint).observe(latency)
            logger.info(
                f"{request.method} {endpoint} -> {response.status_code}",
                extra={"status": response.status_code, "latency": latency},
            )

        response.headers["X-Trace-ID"] = trace_id
        return response

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        """Endpoint /metrics compatible Prometheus"""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {"status": "healthy", "service": SERVICE_NAME}

    @app.get("/api/product", response_model=List[ProductResponse])
    async def get_products():
        logger.info("Fetching all products")
        return service.list_all()

    @app.get("/api/product/{product_id}", response_model=ProductResponse)
    async def get_product(product_id: int, request: Request):
        logger.info(f"Fetching product {product_id}")
        try:
            return service.get_by_id(product_id)
        except ProductNotFoundError:
            ERROR_COUNT.labels(SERVICE_NAME, endpoint_label(request, status.HTTP_404_NOT_FOUND), "not_found").inc()
            # 404 sans corps
            return Response(status_code=status.HTTP_404_NOT_FOUND)

    @app.post("/api/product", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
    async def create_product(payload: ProductPayload, response: Response):
        logger.info(f"Creating product: {payload.name}")
        product = Product(id=payload.id, name=payload.name, price=payload.price)
        service.add(product)
        response.headers["Location"] = str(app.url_path_for("get_product", product_id=product.id))
        return product

    return app


settings = Settings()
configure_logging(settings)
app = create_app(settings=settings)


if __name__ == "__main__":
    logger.info(f"Starting Products Service on port {settings.port}")
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
