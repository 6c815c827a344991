# Print shop monitoring: Prometheus metrics for HTTP traffic and order events

import logging
import time

from fastapi import FastAPI, Request, Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from .config import settings

logger = logging.getLogger(__name__)

# HTTP metrics
request_count = Counter('http_requests_total', 'Total HTTP requests', ['method', 'endpoint', 'status'])
request_duration = Histogram('http_request_duration_seconds', 'HTTP request duration', ['method', 'endpoint'])

# Domain metrics
orders_created = Counter('orders_created_total', 'Orders created from carts')
order_status_updates = Counter('order_status_updates_total', 'Order status changes', ['status'])
cart_additions = Counter('cart_additions_total', 'Add-to-cart calls', ['merged'])

def endpoint_label(request: Request) -> str:
    # Use the route template so ids don't explode label cardinality
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)

def setup_monitoring_middleware(app: FastAPI):
    """Add monitoring middleware to track metrics"""

    @app.middleware("http")
    async def monitor_requests(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        endpoint = endpoint_label(request)

        request_count.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code
        ).inc()

        request_duration.labels(
            method=request.method,
            endpoint=endpoint
        ).observe(process_time)

        return response

def setup_metrics_endpoint(app: FastAPI):
    """Expose Prometheus metrics"""

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        """Prometheus metrics endpoint"""
        if not settings.PROMETHEUS_ENABLED:
            return {"error": "Metrics disabled"}

        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
