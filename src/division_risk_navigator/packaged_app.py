from __future__ import annotations

import argparse
import logging
import os
import socket
import sys
import threading
import time
import urllib.request
import webbrowser
from pathlib import Path

import uvicorn

from division_risk_navigator import get_runtime_version

logger = logging.getLogger(__name__)

HOST = "127.0.0.1"
PREFERRED_PORT = 58231
PORT_SEARCH_SPAN = 50
READY_TIMEOUT_SECONDS = 30.0

# src/division_risk_navigator/packaged_app.py -> the checkout that holds app/.
PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _port_is_free(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((HOST, port))
        except OSError:
            return False
    return True


def pick_port(preferred: int = PREFERRED_PORT) -> int:
    """First free port at or just above ``preferred``; any free port otherwise."""
    for port in range(preferred, preferred + 1 + PORT_SEARCH_SPAN):
        if _port_is_free(port):
            return port
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((HOST, 0))
        return int(sock.getsockname()[1])


def _wait_until_healthy(health_url: str, timeout_seconds: float = READY_TIMEOUT_SECONDS) -> bool:
    deadline = time.monotonic() + timeout_seconds
    while time.monotonic() < deadline:
        try:
            with urllib.request.urlopen(health_url, timeout=2) as response:
                return response.status == 200
        except OSError:
            time.sleep(0.35)
    return False


def _open_docs_when_ready(base_url: str) -> threading.Thread:
    def _worker() -> None:
        if not _wait_until_healthy(f"{base_url}/healthz"):
            logger.warning("No answer from %s/healthz yet, opening the docs anyway", base_url)
        webbrowser.open(f"{base_url}/docs")

    thread = threading.Thread(target=_worker, name="dnr-open-docs", daemon=True)
    thread.start()
    return thread


def _check_divisions_file() -> Path | None:
    configured = os.getenv("DIVISIONS_FILE", "").strip()
    if not configured:
        return None
    path = Path(configured).expanduser().resolve()
    if not path.is_file():
        raise RuntimeError(f"DIVISIONS_FILE does not point to a file: {path}")
    os.environ["DIVISIONS_FILE"] = str(path)
    return path


def load_app():
    """Import the FastAPI app from the checkout the library was installed from.

    Only ``src/`` is installed, so the repository root goes on ``sys.path``
    before ``app.main`` is imported.
    """
    if not (PROJECT_ROOT / "app" / "main.py").is_file():
        raise RuntimeError(f"No FastAPI app under {PROJECT_ROOT}; install with `pip install -e .` from a checkout.")
    root = str(PROJECT_ROOT)
    if root not in sys.path:
        sys.path.insert(0, root)
    from app.main import app

    return app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dnr-app", description="Serve the division risk API on localhost.")
    parser.add_argument("--port", type=int, default=None, help=f"Port to listen on (default: first free from {PREFERRED_PORT}).")
    parser.add_argument("--no-browser", action="store_true", help="Do not open the API docs in a browser.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        divisions_file = _check_divisions_file()
        fastapi_app = load_app()
    except RuntimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    port = args.port or pick_port()
    base_url = f"http://{HOST}:{port}"
    print(f"Division Risk Navigator {get_runtime_version()}", flush=True)
    print(f"Divisions: {divisions_file or 'built-in fixture'}", flush=True)
    print(f"API docs: {base_url}/docs", flush=True)

    if not args.no_browser:
        _open_docs_when_ready(base_url)
    uvicorn.run(fastapi_app, host=HOST, port=port, log_level="warning", access_log=False)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
