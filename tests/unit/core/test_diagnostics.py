"""Unit tests for diagnostics.py"""

import logging
from pathlib import Path

from roampub.core.diagnostics import Diagnostics, emit


def test_collects_in_order():
    diags = Diagnostics(Path("doc.org"))
    diags.warn("first", "Section")
    diags.error("second")
    assert len(diags) == 2
    assert [d.message for d in diags] == ["first", "second"]
    assert [d.message for d in diags.warnings] == ["first"]


def test_str_includes_context():
    diags = Diagnostics(Path("doc.org"))
    diags.warn("something", "Section")
    diags.warn("other")
    with_context, without = diags
    assert str(with_context) == "doc.org [Section]: something"
    assert str(without) == "doc.org: other"


def test_emit_logs_at_recorded_level(caplog):
    diags = Diagnostics(Path("doc.org"))
    diags.warn("careful")
    diags.error("broken")
    with caplog.at_level(logging.WARNING, logger="roampub"):
        emit(diags, logging.getLogger("roampub.test"))
    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.WARNING, "doc.org: careful"),
        (logging.ERROR, "doc.org: broken"),
    ]
