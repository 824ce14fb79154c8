#!/usr/bin/env python3
"""
PAE inventory service management CLI.

Usage:
    python manage.py start       Start the API server in the background
    python manage.py stop        Graceful shutdown
    python manage.py restart     Stop + start
    python manage.py dev         Run the API server in the foreground with reload
    python manage.py status      Check if server is running
    python manage.py snapshot    Reconstruct stock from a JSON movement log file
"""

import argparse
import json
import os
import platform
import signal
import socket
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".pae_inventory.pid"
APP_PATH = "pae_inventory.api.main:app"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

IS_WINDOWS = platform.system() == "Windows"


def _is_pid_alive(pid: int) -> bool:
    """Check if a process with the given PID is running."""
    if IS_WINDOWS:
        try:
            result = subprocess.run(
                ["tasklist", "/FI", f"PID eq {pid}", "/NH"],
                capture_output=True,
                text=True,
            )
        except OSError:
            return False
        return str(pid) in result.stdout

    try:
        os.kill(pid, 0)
    except OSError:
        return False
    return True


def _read_pid() -> int | None:
    """PID from the PID file, or None when missing or stale."""
    try:
        pid = int(PID_FILE.read_text().strip())
    except (OSError, ValueError):
        return None
    if _is_pid_alive(pid):
        return pid
    PID_FILE.unlink(missing_ok=True)
    return None


def _terminate(pid: int, timeout: float = 3.0) -> bool:
    """Ask a process to exit and wait for it. Returns True once it is gone."""
    try:
        if IS_WINDOWS:
            subprocess.run(["taskkill", "/PID", str(pid), "/T", "/F"], capture_output=True)
        else:
            os.kill(pid, signal.SIGTERM)
    except OSError:
        return not _is_pid_alive(pid)

    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if not _is_pid_alive(pid):
            return True
        time.sleep(0.1)
    return False


def _is_port_free(host: str, port: int) -> bool:
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind((host if host != DEFAULT_HOST else "127.0.0.1", port))
    except OSError:
        return False
    return True


def _uvicorn_cmd(args: argparse.Namespace, reload: bool = False) -> list[str]:
    cmd = [
        sys.executable, "-m", "uvicorn",
        APP_PATH,
        "--host", args.host,
        "--port", str(args.port),
    ]
    if reload:
        cmd.append("--reload")
    elif getattr(args, "workers", 1) > 1:
        cmd += ["--workers", str(args.workers)]
    return cmd


def cmd_start(args: argparse.Namespace) -> None:
    """Start the API server in the background."""
    existing_pid = _read_pid()
    if existing_pid is not None:
        print(f"Server already running (PID {existing_pid}). Use 'restart' or 'stop' first.")
        sys.exit(1)

    if not _is_port_free(args.host, args.port):
        print(f"Error: Port {args.port} is in use by another process.")
        sys.exit(1)

    print(f"Starting server on {args.host}:{args.port}...")
    popen_kwargs: dict = {"cwd": str(ROOT_DIR)}
    if IS_WINDOWS:
        popen_kwargs["creationflags"] = subprocess.CREATE_NEW_PROCESS_GROUP
    proc = subprocess.Popen(_uvicorn_cmd(args), **popen_kwargs)

    PID_FILE.write_text(str(proc.pid))
    print(f"Server started (PID {proc.pid}).")
    print(f"  Health:   http://{args.host}:{args.port}/health")
    print(f"  PID file: {PID_FILE}")


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop the running server."""
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
        return

    print(f"Stopping server (PID {pid})...")
    stopped = _terminate(pid)
    PID_FILE.unlink(missing_ok=True)
    print("Server stopped." if stopped else "Warning: Server may still be running.")


def cmd_restart(args: argparse.Namespace) -> None:
    """Stop then start the server."""
    cmd_stop(args)
    cmd_start(args)


def cmd_dev(args: argparse.Namespace) -> None:
    """Run the API server in the foreground with auto-reload."""
    print(f"Starting server on {args.host}:{args.port} (reload mode)...")
    try:
        subprocess.run(_uvicorn_cmd(args, reload=True), cwd=str(ROOT_DIR))
    except KeyboardInterrupt:
        print("\nDev server stopped.")


def cmd_status(args: argparse.Namespace) -> None:
    """Check if the server is running."""
    pid = _read_pid()
    if pid is not None:
        print(f"Server is running (PID {pid}).")
    elif not _is_port_free(DEFAULT_HOST, args.port):
        print(f"No PID file, but port {args.port} is in use.")
    else:
        print(f"Server is not running (port {args.port} is free).")


def cmd_snapshot(args: argparse.Namespace) -> None:
    """Print the stock reconstructed from a JSON array of movements."""
    from pydantic import TypeAdapter
    from pydantic import ValidationError as PydanticValidationError

    from pae_inventory.core.entities import InventoryMovement
    from pae_inventory.core.services import reconstruct_stock

    try:
        raw = json.loads(Path(args.file).read_text(encoding="utf-8"))
        movements = TypeAdapter(list[InventoryMovement]).validate_python(raw)
    except (OSError, ValueError, PydanticValidationError) as e:
        print(f"Error: Could not read movements from {args.file}: {e}")
        sys.exit(1)

    product_id = args.product_id or (movements[0].product_id if movements else "")
    institution_id = args.institution_id
    if institution_id is None:
        institution_id = movements[0].institution_id if movements else 0

    snapshot = reconstruct_stock(
        [m for m in movements if m.product_id == product_id],
        product_id,
        institution_id,
        args.location,
    )
    print(snapshot.model_dump_json(indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="PAE inventory service management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_server_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--host", default=DEFAULT_HOST, help=f"Bind host (default: {DEFAULT_HOST})")
        p.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Bind port (default: {DEFAULT_PORT})")

    # start
    p_start = sub.add_parser("start", help="Start the server")
    add_server_args(p_start)
    p_start.add_argument("--workers", type=int, default=1, help="Number of uvicorn workers")
    p_start.set_defaults(func=cmd_start)

    # stop
    p_stop = sub.add_parser("stop", help="Stop the server")
    p_stop.set_defaults(func=cmd_stop)

    # restart
    p_restart = sub.add_parser("restart", help="Restart the server")
    add_server_args(p_restart)
    p_restart.add_argument("--workers", type=int, default=1, help="Number of uvicorn workers")
    p_restart.set_defaults(func=cmd_restart)

    # dev
    p_dev = sub.add_parser("dev", help="Run the server with auto-reload")
    add_server_args(p_dev)
    p_dev.set_defaults(func=cmd_dev)

    # status
    p_status = sub.add_parser("status", help="Check if server is running")
    p_status.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Port to check (default: {DEFAULT_PORT})")
    p_status.set_defaults(func=cmd_status)

    # snapshot
    p_snapshot = sub.add_parser("snapshot", help="Reconstruct stock from a movement log file")
    p_snapshot.add_argument("file", help="JSON file holding an array of movements")
    p_snapshot.add_argument("--product-id", help="Product to reconstruct (default: first movement's)")
    p_snapshot.add_argument("--institution-id", type=int, help="Institution id for the snapshot")
    p_snapshot.add_argument("--location", help='Storage location filter ("unspecified" for none)')
    p_snapshot.set_defaults(func=cmd_snapshot)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
