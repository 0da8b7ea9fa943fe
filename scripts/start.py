"""Production startup script for the Website Benchmark API.

Reads host and port from the environment (falling back to settings) and
replaces the current process with uvicorn.
"""

import os
import signal
import sys

from api.config import get_settings


def build_uvicorn_args() -> list[str]:
    """Build the uvicorn command line from environment and settings."""
    settings = get_settings()
    host = os.getenv("API_HOST", settings.api_host)
    port = os.getenv("PORT", str(settings.api_port))
    workers = os.getenv("API_WORKERS", "1")

    return [
        "uvicorn",
        "api.main:app",
        "--host",
        host,
        "--port",
        port,
        "--workers",
        workers,
        "--proxy-headers",
        "--forwarded-allow-ips",
        "*",
    ]


def start_api() -> None:
    """Start the FastAPI application with uvicorn."""
    args = build_uvicorn_args()
    print(f"Starting API server on {args[3]}:{args[5]} with {args[7]} worker(s)...")

    # Use exec to replace the current process
    os.execvp("uvicorn", args)


def signal_handler(signum: int, _frame: object) -> None:
    """Handle shutdown signals gracefully."""
    print(f"Received signal {signum}, shutting down...")
    sys.exit(0)


def main() -> None:
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    settings = get_settings()
    if not settings.relay_urls:
        print("No relay URLs configured (RELAY_URLS); refusing to start.")
        sys.exit(1)

    start_api()


if __name__ == "__main__":
    main()
