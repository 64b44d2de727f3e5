"""FastAPI adapter – application factory."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tabex import __version__
from tabex.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from tabex.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware, FastAPIMetricsMiddleware
from tabex.adapters.fastapi.routers import ExportRouter, HealthRouter, ImportRouter
from tabex.application.export import ExportService
from tabex.application.imports import ImportService
from tabex.application.rate_limit import LocalTokenBucketRateLimiter, Quota, RateLimiter
from tabex.config.settings import AppSettings, load_settings
from tabex.observability.logging import JsonLoggerFactory, get_logger
from tabex.observability.metrics import Metrics, PerformanceAggregator
from tabex.resilience.bulkhead import QueueLimiter
from tabex.resilience.timeouts import TimeoutPolicy

logger = get_logger(__name__)


def create_app(
    settings: AppSettings | None = None,
    *,
    metrics: Metrics | None = None,
    rate_limiter: RateLimiter | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """Build the HTTP application around one set of process-wide services.

    One bulkhead is shared by exports and imports so ``max_concurrent_jobs``
    bounds all generation work in the process.
    """
    settings = settings or load_settings()
    if configure_logging:
        JsonLoggerFactory.configure(settings.log_level)

    app = FastAPI(title="tabex", version=__version__)

    bulkhead = QueueLimiter(settings.max_concurrent_jobs, settings.max_queued_jobs)
    performance = PerformanceAggregator()
    app.state.settings = settings
    app.state.performance = performance
    app.state.bulkhead = bulkhead
    app.state.rate_limiter = rate_limiter or LocalTokenBucketRateLimiter()
    app.state.timeout_policy = TimeoutPolicy(settings.request_timeout_seconds)
    app.state.export_service = ExportService(settings, bulkhead=bulkhead)
    app.state.import_service = ImportService(settings, bulkhead=bulkhead)

    export_quota = Quota(
        key="export",
        limit=settings.export_rate_limit,
        window_seconds=settings.rate_limit_window_seconds,
        message="Too many export requests, please try again later",
    )
    import_quota = Quota(
        key="import",
        limit=settings.import_rate_limit,
        window_seconds=settings.rate_limit_window_seconds,
        message="Too many import requests, please try again later",
    )

    FastAPIExceptionMapper(development=settings.is_development).register(app)

    # last added runs first
    app.add_middleware(FastAPIMetricsMiddleware, aggregator=performance, metrics=metrics)
    app.add_middleware(FastAPICorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Correlation-ID"],
    )

    app.include_router(ExportRouter(export_quota))
    app.include_router(ImportRouter(import_quota))
    app.include_router(HealthRouter())

    logger.info("app.created", environment=settings.environment, version=__version__)
    return app


__all__ = ["create_app"]
