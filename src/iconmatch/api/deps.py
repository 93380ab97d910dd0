"""Shared request dependencies: the mapping store and language checks."""

from __future__ import annotations

from fastapi import HTTPException

from ..config import settings
from ..normalizer import PROFILES
from ..store import MappingStore, TableSnapshot


def get_store() -> MappingStore:
    from ..main import app_state

    store = app_state.get("store")
    if store is None:
        raise HTTPException(503, "Mapping store not initialized")
    return store


def check_language(language: str | None) -> str:
    language = (language or settings.default_language).lower()
    if language not in PROFILES:
        raise HTTPException(
            400, f"Unsupported language {language!r} (expected one of: {', '.join(PROFILES)})",
        )
    return language


def get_snapshot(language: str | None) -> TableSnapshot:
    return get_store().snapshot(check_language(language))
