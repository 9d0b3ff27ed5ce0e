"""Shared fixtures for core unit tests"""

from pathlib import Path

import pytest

from roampub.config import Settings
from roampub.core.index import index_document
from roampub.core.parse import parse_text
from roampub.core.plan import build_plan
from roampub.core.split import split_document


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="export_text")
def export_text_fixture(settings):
    """Run both passes over a single in-memory document and return its DocumentExport."""
    def _export(text: str, name: str = "doc.org", **overrides):
        s = settings.model_copy(update=overrides) if overrides else settings
        parsed = parse_text(text, Path(name), s)
        plan = build_plan(index_document(parsed, s), s)
        return split_document(parsed, plan, s)
    return _export
