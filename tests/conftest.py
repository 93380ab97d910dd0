"""Test fixtures: synthetic synonym/icon tables and on-disk copies."""

import json

import pytest

from iconmatch.store import MappingStore

ENGLISH_SYNONYMS = {
    "dog": ["puppy", "doggy", "hound"],
    "moon": ["lunar", "goodnight moon"],
    "lion": ["lions", "king of the jungle"],
    "cake": ["cupcake", "birthday cake"],
    "bird": [],
}

ENGLISH_ICONS = {
    "dog": "yoto:#dog01",
    "moon": "yoto:#moon02",
    "lion": "yoto:#lion03",
    "cake": "",
}

HEBREW_SYNONYMS = {
    "ציפור": ["ציפור", "ציפורים"],
    "דב": ["דובי"],
    "ירח": ["לבנה"],
}

HEBREW_ICONS = {
    "ציפור": "yoto:#bird01",
    "דב": "yoto:#bear01",
}


def write_tables(tmp_path, language, synonyms, icons):
    syn_dir = tmp_path / "synonyms"
    icon_dir = tmp_path / "data"
    syn_dir.mkdir(exist_ok=True)
    icon_dir.mkdir(exist_ok=True)
    if synonyms is not None:
        (syn_dir / f"{language}.json").write_text(
            json.dumps(synonyms, ensure_ascii=False), encoding="utf-8",
        )
    if icons is not None:
        (icon_dir / f"icon_ids_{language}.json").write_text(
            json.dumps(icons, ensure_ascii=False), encoding="utf-8",
        )
    return syn_dir, icon_dir


@pytest.fixture()
def english_synonyms() -> dict:
    return {k: list(v) for k, v in ENGLISH_SYNONYMS.items()}


@pytest.fixture()
def english_icons() -> dict:
    return dict(ENGLISH_ICONS)


@pytest.fixture()
def store(tmp_path) -> MappingStore:
    write_tables(tmp_path, "english", ENGLISH_SYNONYMS, ENGLISH_ICONS)
    syn_dir, icon_dir = write_tables(tmp_path, "hebrew", HEBREW_SYNONYMS, HEBREW_ICONS)
    return MappingStore(syn_dir, icon_dir)


@pytest.fixture()
def tables(tmp_path):
    """Write (language, synonyms, icons) into tmp_path; returns the two dirs."""

    def _write(language, synonyms, icons):
        return write_tables(tmp_path, language, synonyms, icons)

    return _write
