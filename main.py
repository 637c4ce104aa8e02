"""Launch the Statement Insights dashboard."""
from __future__ import annotations
import os
import sys
import subprocess
from pathlib import Path
from typing import List

# --- Ensure project root is in path ---
ROOT_DIR = Path(__file__).resolve().parent
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from core.config import config
from core.logger import get_logger

log = get_logger("main")

UI_PATH = ROOT_DIR / "ui" / "app.py"


def verify_environment() -> None:
    """Log the effective settings and warn about missing analyzer configuration."""
    log.info(f"Starting Statement Insights in '{config.environment}' mode")
    if not os.getenv("BACKEND_URL"):
        log.warning(f"BACKEND_URL not set, using analyzer at {config.backend_url}")
    log.info(
        f"Dashboard settings: top_merchants={config.top_merchants} "
        f"deep_dive_top_merchants={config.deep_dive_top_merchants} currency={config.currency}"
    )


def streamlit_command(port: int | str | None = None) -> List[str]:
    """Command line that serves ``ui/app.py`` headless on ``port``."""
    port = port or os.getenv("PORT") or config.app_port
    return [
        sys.executable, "-m", "streamlit", "run", str(UI_PATH),
        "--server.port", str(port),
        "--server.headless", "true",
    ]


def main() -> None:
    verify_environment()
    if not UI_PATH.exists():
        log.error(f"UI app not found at {UI_PATH}")
        sys.exit(1)

    cmd = streamlit_command()
    log.info(f"Launching Streamlit app: {' '.join(cmd[3:])}")
    try:
        subprocess.run(cmd, check=True, cwd=str(ROOT_DIR))
    except KeyboardInterrupt:
        log.info("Statement Insights stopped by user.")
    except subprocess.CalledProcessError as e:
        log.error(f"Streamlit failed to start: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
