"""FastAPI adapter – app factory, middleware, exception mapper, routers, deps."""
from tabex.adapters.fastapi.app import create_app
from tabex.adapters.fastapi.deps import client_identifier, rate_limit_dep
from tabex.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from tabex.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware, FastAPIMetricsMiddleware
from tabex.adapters.fastapi.routers import ExportRouter, HealthRouter, ImportRouter
from tabex.adapters.fastapi.schemas import ExportPayload

__all__ = [
    "ExportPayload",
    "ExportRouter",
    "FastAPICorrelationIdMiddleware",
    "FastAPIExceptionMapper",
    "FastAPIMetricsMiddleware",
    "HealthRouter",
    "ImportRouter",
    "client_identifier",
    "create_app",
    "rate_limit_dep",
]
