"""Root conftest: export .env.test before booktalk_service.config builds Settings."""
from __future__ import annotations

import os
from pathlib import Path

_ENV_FILE = Path(__file__).resolve().parent / ".env.test"

for raw in _ENV_FILE.read_text().splitlines() if _ENV_FILE.exists() else []:
    raw = raw.strip()
    if raw and not raw.startswith("#"):
        name, _, value = raw.partition("=")
        os.environ.setdefault(name.strip(), value.strip())
