import logging
import time
from pathlib import Path

from quart import Quart, jsonify, render_template, request
from sqlalchemy.exc import SQLAlchemyError

from .common.config import settings
from .common.database import engine, init_db
from .inventory.controller import bp as inventory_bp
from .inventory.errors import ProductNotFound

# Prometheus metrics
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST


log = logging.getLogger(__name__)

# Basic metrics with proper buckets for latency
REQUEST_COUNT = Counter("http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"])
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0, float("inf"))
)


def metrics_endpoint(path: str) -> str:
    """Collapse dynamic paths so metric labels stay bounded."""
    if path.startswith("/products/"):
        return "/products/<id>"
    if path.startswith("/static/"):
        return "/static/*"
    return path


def create_app() -> Quart:
    package_dir = Path(__file__).resolve().parent

    app = Quart(
        __name__,
        template_folder=str(package_dir / "templates"),
        static_folder=str(package_dir / "static"),
        static_url_path="/static",
    )
    app.secret_key = settings.SECRET_KEY

    # Blueprints
    app.register_blueprint(inventory_bp)

    @app.before_request
    async def before_request():
        request._start_time = time.time()
        log.info(f"[Instance {settings.INSTANCE_ID}] {request.method} {request.path}")

    @app.after_request
    async def after_request(response):
        try:
            if hasattr(request, "_start_time"):
                duration = time.time() - request._start_time
                endpoint = metrics_endpoint(request.path)

                REQUEST_LATENCY.labels(endpoint=endpoint).observe(duration)
                REQUEST_COUNT.labels(
                    method=request.method,
                    endpoint=endpoint,
                    status=str(response.status_code)
                ).inc()

            response.headers['X-Instance-ID'] = settings.INSTANCE_ID
        except Exception as e:
            log.error(f"Error recording metrics: {e}")
        return response

    @app.context_processor
    async def inject_currency():
        return {"currency_symbol": settings.CURRENCY_SYMBOL}

    @app.errorhandler(ProductNotFound)
    async def product_not_found(error: ProductNotFound):
        log.info("Product not found | id=%s", error.product_id)
        return await render_template("not_found.html", product_id=error.product_id), 404

    @app.errorhandler(SQLAlchemyError)
    async def store_failure(error: SQLAlchemyError):
        log.exception("Store failure on %s %s", request.method, request.path)
        return await render_template("error.html"), 500

    @app.errorhandler(500)
    async def internal_error(error):
        log.error("Unhandled error on %s %s: %s", request.method, request.path, error)
        return await render_template("error.html"), 500

    @app.get("/metrics")
    async def metrics():
        data = generate_latest()
        return app.response_class(data, mimetype=CONTENT_TYPE_LATEST)

    @app.get("/health")
    async def health():
        return jsonify({"status": "ok"})

    @app.before_serving
    async def startup():
        logging.basicConfig(level=settings.LOG_LEVEL)
        log.info("Initializing database...")
        await init_db()
        log.info("Database ready.")

    @app.after_serving
    async def shutdown():
        await engine.dispose()
        log.info("Shutdown complete.")

    return app
