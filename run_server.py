#!/usr/bin/env python
"""
Dataset API Server Entry Point

Usage:
    Development:  python run_server.py --dev
    Production:   python run_server.py

    Or with Gunicorn:
    gunicorn src.main:app -c gunicorn.conf.py
"""

import argparse
import subprocess
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from src.config import get_settings


def run_dev_server(port: int):
    """Run development server with auto-reload."""
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="127.0.0.1",
        port=port,
        reload=True,
        reload_dirs=["src"],
        log_level="debug",
    )


def run_prod_server(port: int):
    """Run production server with Uvicorn directly."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.api_host,
        port=port,
        workers=settings.api_workers,
        log_level=settings.monitoring.log_level.lower(),
        proxy_headers=True,
        forwarded_allow_ips="*",
        server_header=False,
    )


def run_gunicorn():
    """Run with Gunicorn."""
    subprocess.run(["gunicorn", "src.main:app", "-c", "gunicorn.conf.py"], check=False)


if __name__ == "__main__":
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Sales Insights Dataset API Server")
    parser.add_argument("--dev", action="store_true", help="Run in development mode with auto-reload")
    parser.add_argument("--gunicorn", action="store_true", help="Run with Gunicorn")
    parser.add_argument(
        "--port",
        type=int,
        default=settings.api_port,
        help=f"Port to run on (default: {settings.api_port})",
    )
    args = parser.parse_args()

    if args.dev:
        print(f"Starting development server on port {args.port}...")
        run_dev_server(args.port)
    elif args.gunicorn:
        print("Starting production server with Gunicorn...")
        run_gunicorn()
    else:
        print(f"Starting production server with Uvicorn on port {args.port}...")
        run_prod_server(args.port)
