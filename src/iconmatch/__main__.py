"""Run the matching service: python -m iconmatch

Before uvicorn starts, the configured default language and its tables are
checked. An unknown language or a busy port aborts; missing tables only warn,
since the service starts with empty tables and can be reloaded later.
"""

from __future__ import annotations

import socket
import sys

import uvicorn

from .config import settings
from .normalizer import PROFILES
from .store import MappingStore


def _port_in_use(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind((host, port))
            return False
        except OSError:
            return True


def preflight(store: MappingStore | None = None) -> tuple[list[str], list[str]]:
    """Return (errors, warnings) for the configured server and tables."""
    store = store or MappingStore()
    language = settings.default_language.lower()
    errors: list[str] = []
    warnings: list[str] = []

    if language not in PROFILES:
        errors.append(
            f"default language {settings.default_language!r} is not supported "
            f"(expected one of: {', '.join(PROFILES)})"
        )
    else:
        for label, path in (
            ("synonym table", store.synonyms_path(language)),
            ("icon mapping", store.icon_mapping_path(language)),
        ):
            if not path.is_file():
                warnings.append(f"{label} for {language} not found at {path}")

    if _port_in_use(settings.host, settings.port):
        errors.append(f"port {settings.port} is already in use. Stop the existing server first.")

    return errors, warnings


def main() -> None:
    errors, warnings = preflight()
    for message in warnings:
        print(f"WARNING: {message}", file=sys.stderr)
    if errors:
        for message in errors:
            print(f"ERROR: {message}", file=sys.stderr)
        sys.exit(1)

    uvicorn.run("iconmatch.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
