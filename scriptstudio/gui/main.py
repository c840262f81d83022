from __future__ import annotations

import os
import sys

from dotenv import load_dotenv
from streamlit.web import cli as stcli

THIS_DIR = os.path.dirname(__file__)
PACKAGE_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
PROJECT_ROOT = os.path.abspath(os.path.join(PACKAGE_DIR, ".."))

from scriptstudio.config import load_config  # noqa: E402


def main() -> None:
    # Load environment from project root .env before starting the server
    load_dotenv(os.path.join(PROJECT_ROOT, ".env"))
    cfg = load_config()
    sys.argv = [
        "streamlit",
        "run",
        os.path.join(PACKAGE_DIR, "app.py"),
        f"--server.maxUploadSize={cfg.max_upload_mb}",
        *sys.argv[1:],
    ]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()
