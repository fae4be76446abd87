#!/usr/bin/env python3
"""
Roster — Local Management Tool

Single entry point for running and maintaining the Roster service.
Usage: python manage.py <command> [options]
"""

import asyncio
import json
import logging
import os
import subprocess
import sys
import time
import urllib.request
from datetime import datetime
from typing import List, Optional

BACKEND_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "backend")


# ═══════════════════════════════════════════════════════════
#  Logging Setup
# ═══════════════════════════════════════════════════════════

class ColorFormatter(logging.Formatter):
    """Console formatter with ANSI colors and level symbols."""

    COLORS = {
        "INFO": "\033[96m",        # Cyan
        "SUCCESS": "\033[92m",     # Green
        "WARNING": "\033[93m",     # Yellow
        "ERROR": "\033[91m",       # Red
        "CRITICAL": "\033[91m\033[1m",  # Bold Red
        "DEBUG": "\033[94m",       # Blue
        "HEADER": "\033[95m",      # Magenta
        "BOLD": "\033[1m",
        "RESET": "\033[0m",
    }

    SYMBOLS = {
        "INFO": "→",
        "SUCCESS": "✓",
        "WARNING": "⚠",
        "ERROR": "✗",
        "CRITICAL": "☠",
        "DEBUG": "•",
        "STEP": "▶",
    }

    MARKERS = ("SUCCESS", "WARNING", "ERROR", "STEP")

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.platform != "win32" and sys.stderr.isatty()

    def _colorize(self, text: str, color_name: str) -> str:
        if not self.use_colors:
            return text
        color = self.COLORS.get(color_name, "")
        return f"{color}{text}{self.COLORS['RESET']}" if color else text

    def format(self, record: logging.LogRecord) -> str:
        msg = str(record.msg)

        symbol, color = self.SYMBOLS.get(record.levelname, ""), record.levelname
        for marker in self.MARKERS:
            if f"[{marker}]" in msg:
                msg = msg.replace(f"[{marker}] ", "").replace(f"[{marker}]", "")
                symbol = self.SYMBOLS[marker]
                color = "INFO" if marker == "STEP" else marker
                break

        if symbol and not msg.startswith(("===", " ")):
            msg = f"{symbol} {msg}"

        if msg.startswith("==="):
            msg = self._colorize(msg, "HEADER")
        else:
            msg = self._colorize(msg, color)

        record.msg = msg
        return super().format(record)


# --- Bootstrap logger --------------------------------------------------------
_log_dir = "logs"
os.makedirs(_log_dir, exist_ok=True)
_log_file = os.path.join(_log_dir, f"manage-{datetime.now():%Y%m%d}.log")

_file_handler = logging.FileHandler(_log_file, encoding="utf-8")
_file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))

_console_handler = logging.StreamHandler()
_console_handler.setFormatter(ColorFormatter())

logging.basicConfig(level=logging.INFO, handlers=[_file_handler, _console_handler])
logger = logging.getLogger("manage")


# ═══════════════════════════════════════════════════════════
#  Roster Manager
# ═══════════════════════════════════════════════════════════

class RosterManager:
    """Runs the API, migrations, seed data and exports for local use."""

    def __init__(self, host: str = "localhost", port: Optional[int] = None):
        self.port = port or int(os.environ.get("PORT", "5000"))
        self.base_url = f"http://{host}:{self.port}"

    # ─── Helpers ──────────────────────────────────────────
    def _run(self, cmd: List[str], check: bool = True) -> subprocess.CompletedProcess:
        logger.info(f"[STEP] Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, check=check, text=True, capture_output=True, cwd=BACKEND_DIR)
            if result.stdout:
                for line in result.stdout.strip().splitlines():
                    if line.strip():
                        logger.info(f"  {line.strip()}")
            if result.stderr:
                for line in result.stderr.strip().splitlines():
                    if line.strip():
                        logger.warning(f"  {line.strip()}")
            return result
        except subprocess.CalledProcessError as exc:
            logger.error(f"Command failed (exit {exc.returncode})")
            if exc.stderr:
                logger.error(f"  {exc.stderr.strip()}")
            raise

    def _probe_http(self, url: str, timeout: int = 30) -> bool:
        """Poll an HTTP endpoint until it responds or times out."""
        logger.info(f"[STEP] Probing {url}…")
        deadline = time.time() + timeout
        while True:
            try:
                urllib.request.urlopen(url, timeout=5)
                logger.info("[SUCCESS] API is reachable!")
                return True
            except OSError:
                pass
            if time.time() > deadline:
                logger.warning(f"[WARNING] Health-check timed out after {timeout}s")
                return False
            time.sleep(2)

    # ─── Core Commands ────────────────────────────────────
    def serve(self, reload: bool = False) -> None:
        """Run the API in the foreground (Ctrl-C to stop)."""
        logger.info("\n=== Starting Roster API ===")
        cmd = [
            sys.executable, "-m", "uvicorn", "roster.main:app",
            "--host", "0.0.0.0", "--port", str(self.port),
        ]
        if reload:
            cmd.append("--reload")
        self.urls()
        try:
            subprocess.run(cmd, cwd=BACKEND_DIR)
        except KeyboardInterrupt:
            logger.info("\n[SUCCESS] Server stopped")

    # ─── Database ─────────────────────────────────────────
    def init_db(self) -> None:
        """Apply Alembic migrations."""
        logger.info("\n=== Database Initialisation ===")
        logger.info("[STEP] Running Alembic migrations…")
        self._run([sys.executable, "-m", "alembic", "upgrade", "head"])
        logger.info("[SUCCESS] Database migrations applied!")

    def seed(self) -> None:
        """Insert the demo account and sample employees."""
        logger.info("\n=== Seeding Database ===")
        logger.info("[STEP] Inserting development seed data…")
        self._run([sys.executable, "-m", "scripts.seed_demo"])
        logger.info("[SUCCESS] Seed data inserted!")

    # ─── Health ───────────────────────────────────────────
    def health(self, wait: int = 0) -> None:
        """Quick smoke-test of a running API, optionally waiting for it to come up."""
        logger.info("\n=== Health Check ===")
        if wait and not self._probe_http(f"{self.base_url}/health", timeout=wait):
            return
        try:
            resp = urllib.request.urlopen(f"{self.base_url}/health", timeout=10)
            data = json.loads(resp.read().decode())
            logger.info(f"[SUCCESS] API: status={data.get('status')} env={data.get('env')}")
        except OSError as exc:
            logger.error(f"[ERROR] API health check failed: {exc}")

    # ─── Export ───────────────────────────────────────────
    def export(
        self,
        email: str,
        password: str,
        fmt: str = "csv",
        output: Optional[str] = None,
        search: str = "",
        department: str = "all",
        sort: Optional[str] = None,
        direction: str = "asc",
    ) -> None:
        """Log in, apply the view filters and write the filtered list to a file."""
        sys.path.insert(0, BACKEND_DIR)
        from roster.client.api import RosterClient
        from roster.client.dashboard import Dashboard
        from roster.core.errors import RosterError

        output = output or f"employees.{fmt}"
        logger.info("\n=== Export Employees ===")

        async def _export() -> Optional[bytes]:
            async with RosterClient(self.base_url) as api:
                await api.login(email, password)
                dashboard = Dashboard(api)
                await dashboard.load()
                dashboard.search(search)
                dashboard.filter_department(department)
                if sort:
                    dashboard.set_sort(sort, direction)
                logger.info(f"  {dashboard.view.summary}")
                return dashboard.export(fmt, output)

        try:
            data = asyncio.run(_export())
        except RosterError as exc:
            logger.error(f"[ERROR] Export failed: {exc.message}")
            raise
        if data is None:
            raise RuntimeError("export produced no file")
        logger.info(f"[SUCCESS] Wrote {len(data)} bytes to {output}")

    # ─── URLs ─────────────────────────────────────────────
    def urls(self) -> None:
        """Print access URLs."""
        logger.info("\n=== Access URLs ===")
        logger.info(f"🔧  API:             {self.base_url}/api")
        logger.info(f"📖  Swagger Docs:    {self.base_url}/docs")
        logger.info(f"❤️   Health Check:    {self.base_url}/health")


# ═══════════════════════════════════════════════════════════
#  CLI
# ═══════════════════════════════════════════════════════════

C = ColorFormatter.COLORS

USAGE = f"""
{C['HEADER']}Roster — Local Management{C['RESET']}
{'═' * 50}

{C['BOLD']}Usage:{C['RESET']} python manage.py <command> [options]

{C['BOLD']}Commands:{C['RESET']}
    {C['INFO']}serve{C['RESET']}           Run the API (--reload for auto-reload)
    {C['INFO']}init-db{C['RESET']}         Run Alembic migrations
    {C['INFO']}seed{C['RESET']}            Insert the demo account and employees
    {C['INFO']}health{C['RESET']}          Smoke-test a running API
    {C['INFO']}export{C['RESET']}          Export the filtered employee list to a file
    {C['INFO']}urls{C['RESET']}            Show access URLs

{C['BOLD']}Options:{C['RESET']}
    --port=N            API port (default $PORT or 5000)
    --wait=N            Seconds 'health' waits for the API to come up
    --email=, --password=   Credentials for 'export'
    --format=csv|xlsx   Export format (default csv)
    --output=PATH       Export file (default employees.<format>)
    --search=TEXT       Search filter for 'export'
    --department=NAME   Department filter for 'export'
    --sort=FIELD        Sort column (name, firstName, lastName, email, department, salary)
    --direction=asc|desc  Sort direction for --sort (default asc)

{C['BOLD']}Examples:{C['RESET']}
    python manage.py init-db && python manage.py seed
    python manage.py serve --reload
    python manage.py export --email=demo@example.com --password=demo123 --format=xlsx
    python manage.py export --email=demo@example.com --password=demo123 --sort=salary --direction=desc
"""


def _option(opts: List[str], name: str, default: Optional[str] = None) -> Optional[str]:
    prefix = f"--{name}="
    for o in opts:
        if o.startswith(prefix):
            return o[len(prefix):]
    return default


def main() -> None:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(USAGE)
        sys.exit(0)

    command = sys.argv[1]
    opts = sys.argv[2:]
    port = _option(opts, "port")

    mgr = RosterManager(port=int(port) if port else None)

    try:
        if command == "serve":
            mgr.serve(reload="--reload" in opts)
        elif command == "init-db":
            mgr.init_db()
        elif command == "seed":
            mgr.seed()
        elif command == "health":
            wait = _option(opts, "wait")
            mgr.health(wait=int(wait) if wait else 0)
        elif command == "export":
            email, password = _option(opts, "email"), _option(opts, "password")
            if not email or not password:
                logger.error("export needs --email= and --password=")
                sys.exit(1)
            mgr.export(
                email,
                password,
                fmt=_option(opts, "format", "csv"),
                output=_option(opts, "output"),
                search=_option(opts, "search", ""),
                department=_option(opts, "department", "all"),
                sort=_option(opts, "sort"),
                direction=_option(opts, "direction", "asc"),
            )
        elif command == "urls":
            mgr.urls()
        else:
            logger.error(f"Unknown command: {command}")
            print(USAGE)
            sys.exit(1)
    except Exception as exc:
        logger.error(f"Operation failed: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
