"""
Dataset API Gunicorn Configuration

Uvicorn workers under Gunicorn. The dataset endpoint is read-only and
re-reads the file per request, so workers need no shared state.
"""

import multiprocessing
import os

# Server socket
bind = os.getenv("BIND", "0.0.0.0:8000")
backlog = 2048

# Worker processes
workers = int(os.getenv("WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"
max_requests = 10000
max_requests_jitter = 1000
timeout = 60
keepalive = 5
graceful_timeout = 30

# Process naming
proc_name = "sales-insights-api"

# Logging (application logs go through structlog on stderr)
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
accesslog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)s %(D)s'


def when_ready(server):
    """Called when server is ready to receive connections."""
    server.log.info("Sales insights API ready on %s", bind)
