"""
Gunicorn configuration for the shopping list API.

Every setting can be overridden through the environment so the same file
works for local runs, containers and systemd deployments.

Environment Variables:
    GUNICORN_BIND - Bind address (default: 0.0.0.0:8000)
    GUNICORN_WORKERS - Number of worker processes (default: CPU * 2 + 1)
    GUNICORN_WORKER_CLASS - Worker class (default: sync)
    GUNICORN_THREADS - Threads per worker for gthread (default: 1)
    GUNICORN_TIMEOUT - Worker timeout in seconds (default: 30)
    GUNICORN_GRACEFUL_TIMEOUT - Graceful shutdown timeout (default: 30)
    GUNICORN_KEEPALIVE - Keep-alive timeout (default: 5)
    GUNICORN_MAX_REQUESTS - Max requests per worker before restart (default: 1000)
    GUNICORN_MAX_REQUESTS_JITTER - Random jitter for max_requests (default: 50)
    GUNICORN_LOG_LEVEL - Logging level (default: info)
    GUNICORN_ACCESS_LOG - Access log file (default: -)
    GUNICORN_ERROR_LOG - Error log file (default: -)
"""

import multiprocessing
import os


def get_env_int(key: str, default: int) -> int:
    """Get integer from environment variable with fallback."""
    try:
        return int(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def get_env_str(key: str, default: str | None) -> str | None:
    """Get string from environment variable with fallback."""
    return os.getenv(key, default)


def get_env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ('true', '1', 'yes')


# =============================================================================
# Application
# =============================================================================

wsgi_app = 'shoppinglist.wsgi:application'
proc_name = get_env_str('GUNICORN_PROC_NAME', 'shoppinglist')

# =============================================================================
# Server Socket
# =============================================================================

# TCP (0.0.0.0:8000) or Unix socket (unix:/run/shoppinglist/shoppinglist.sock)
bind = get_env_str('GUNICORN_BIND', '0.0.0.0:8000')
backlog = get_env_int('GUNICORN_BACKLOG', 2048)

# =============================================================================
# Workers
# =============================================================================

# Requests are short, independent DB transactions; sync workers scale by count
workers = get_env_int('GUNICORN_WORKERS', multiprocessing.cpu_count() * 2 + 1)
worker_class = get_env_str('GUNICORN_WORKER_CLASS', 'sync')
threads = get_env_int('GUNICORN_THREADS', 1)

timeout = get_env_int('GUNICORN_TIMEOUT', 30)
graceful_timeout = get_env_int('GUNICORN_GRACEFUL_TIMEOUT', 30)
keepalive = get_env_int('GUNICORN_KEEPALIVE', 5)

# Recycle workers periodically; jitter keeps them from restarting together
max_requests = get_env_int('GUNICORN_MAX_REQUESTS', 1000)
max_requests_jitter = get_env_int('GUNICORN_MAX_REQUESTS_JITTER', 50)

preload_app = get_env_bool('GUNICORN_PRELOAD_APP', False)

# =============================================================================
# Logging
# =============================================================================

accesslog = get_env_str('GUNICORN_ACCESS_LOG', '-')
errorlog = get_env_str('GUNICORN_ERROR_LOG', '-')
loglevel = get_env_str('GUNICORN_LOG_LEVEL', 'info')

# =============================================================================
# Security
# =============================================================================

limit_request_line = get_env_int('GUNICORN_LIMIT_REQUEST_LINE', 4094)
limit_request_field_size = get_env_int('GUNICORN_LIMIT_REQUEST_FIELD_SIZE', 8190)
limit_request_fields = get_env_int('GUNICORN_LIMIT_REQUEST_FIELDS', 100)

# Honour X-Forwarded-* only from the local reverse proxy
forwarded_allow_ips = get_env_str('GUNICORN_FORWARDED_ALLOW_IPS', '127.0.0.1')

# =============================================================================
# Server Hooks
# =============================================================================

def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting shopping list API with Gunicorn")
    server.log.info(f"Workers: {workers}, Bind: {bind}")
    server.log.info(f"Worker class: {worker_class}, Timeout: {timeout}s")


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Shopping list API is ready to accept connections")


def worker_abort(worker):
    """Called when a worker receives the SIGABRT signal."""
    worker.log.warning(f"Worker {worker.pid} aborted (timeout?)")


def on_exit(server):
    """Called just before exiting Gunicorn."""
    server.log.info("Shutting down shopping list API")
