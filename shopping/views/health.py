"""
Health check endpoints for monitoring and load balancer integration.

Provides:
- Basic liveness check
- Readiness check (database reachable)
- Comprehensive health check (database, cache, disk)
- Sharing metrics
"""

import logging
import os
import shutil
import time
from typing import Any

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_GET

from ..models import ListShare, ShoppingItem, ShoppingList

logger = logging.getLogger(__name__)


@require_GET
@never_cache
def health_check(request: HttpRequest) -> JsonResponse:
    """
    Comprehensive health check endpoint.

    Returns:
        200 OK if all checks pass
        503 Service Unavailable if any check fails

    Response format:
        {
            "status": "healthy" | "unhealthy",
            "timestamp": "2025-01-02T10:30:00Z",
            "checks": {
                "database": {"status": "ok", "latency_ms": 5.2},
                "cache": {"status": "ok"},
                "disk": {"status": "ok", "free_gb": 50.3, "usage_percent": 45.2}
            },
            "version": "1.0.0"
        }
    """
    checks = {
        'database': check_database(),
        'cache': check_cache(),
        'disk': check_disk_space(),
    }
    # A degraded cache does not make the service unhealthy
    all_healthy = all(check['status'] in ('ok', 'degraded', 'warning') for check in checks.values())

    response_data = {
        'status': 'healthy' if all_healthy else 'unhealthy',
        'timestamp': timezone.now().isoformat(),
        'checks': checks,
        'version': getattr(settings, 'VERSION', '1.0.0'),
    }

    return JsonResponse(response_data, status=200 if all_healthy else 503)


@require_GET
@never_cache
def liveness_check(request: HttpRequest) -> JsonResponse:
    """
    Simple liveness check for container orchestration.
    Only verifies the application is running.
    """
    return JsonResponse({
        'status': 'alive',
        'timestamp': timezone.now().isoformat(),
    })


@require_GET
@never_cache
def readiness_check(request: HttpRequest) -> JsonResponse:
    """
    Readiness check for load balancers.

    Returns:
        200 OK if ready to serve traffic
        503 Service Unavailable if the database is unreachable
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError as e:
        logger.warning(f"Readiness check failed: {str(e)}")
        return JsonResponse({
            'status': 'not_ready',
            'timestamp': timezone.now().isoformat(),
            'reason': 'database_unavailable',
        }, status=503)

    return JsonResponse({
        'status': 'ready',
        'timestamp': timezone.now().isoformat(),
    })


def check_database() -> dict[str, Any]:
    """Check database connectivity and measure latency."""
    start_time = time.time()

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as e:
        logger.error(f"Database health check failed: {str(e)}")
        return {'status': 'error', 'error': str(e)}

    latency_ms = (time.time() - start_time) * 1000
    if latency_ms > 100:
        logger.warning(f"Database latency is high: {latency_ms:.2f}ms")

    return {
        'status': 'ok',
        'latency_ms': round(latency_ms, 2),
    }


def check_cache() -> dict[str, Any]:
    """Check cache connectivity with a set/get round trip."""
    test_key = 'health_check_test'
    try:
        cache.set(test_key, 'ok', timeout=10)
        retrieved_value = cache.get(test_key)
        cache.delete(test_key)
    except Exception as e:
        # Cache is optional, so log as warning not error
        logger.warning(f"Cache health check failed: {str(e)}")
        return {
            'status': 'degraded',
            'error': str(e),
            'note': 'Cache is optional, application continues without it',
        }

    if retrieved_value != 'ok':
        return {'status': 'degraded', 'error': 'Cache set/get mismatch'}

    return {'status': 'ok'}


def check_disk_space(threshold_percent: int = 90) -> dict[str, Any]:
    """Check available disk space where the application runs."""
    try:
        stat = shutil.disk_usage(getattr(settings, 'BASE_DIR', os.getcwd()))
    except OSError as e:
        logger.error(f"Disk space check failed: {str(e)}")
        return {'status': 'error', 'error': str(e)}

    free_gb = stat.free / (1024 ** 3)
    usage_percent = (stat.used / stat.total) * 100

    status = 'ok'
    if usage_percent >= threshold_percent:
        status = 'warning'
        logger.warning(f"Disk usage is high: {usage_percent:.1f}%")

    return {
        'status': status,
        'free_gb': round(free_gb, 2),
        'usage_percent': round(usage_percent, 1),
    }


@require_GET
@never_cache
def metrics(request: HttpRequest) -> JsonResponse:
    """
    Basic counters for monitoring systems.

    Returns:
        {
            "active_users": 150,
            "total_lists": 320,
            "total_items": 5432,
            "pending_shares": 12,
            "active_shares": 87,
            "timestamp": "..."
        }
    """
    User = get_user_model()

    return JsonResponse({
        'active_users': User.objects.filter(is_active=True).count(),
        'total_lists': ShoppingList.objects.count(),
        'total_items': ShoppingItem.objects.count(),
        'pending_shares': ListShare.objects.pending().count(),
        'active_shares': ListShare.objects.active().count(),
        'timestamp': timezone.now().isoformat(),
    })
