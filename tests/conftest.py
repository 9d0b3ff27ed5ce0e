"""Root test configuration: logging isolation and a small org corpus"""

import logging
from pathlib import Path

import pytest


NOTES_ORG = """\
:PROPERTIES:
:ID:       F1
:END:
#+title: Notes
#+filetags: :export:

* Sub :export:
:PROPERTIES:
:ID:       H1
:END:
"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    """setup_logging() binds a handler to the stream current at call time; drop it after each test."""
    yield
    logger = logging.getLogger("roampub")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture(name="write_org")
def write_org_fixture(tmp_path):
    """Write an org file under tmp_path/notes and return its path."""
    def _write(name: str, text: str) -> Path:
        path = tmp_path / "notes" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture(name="notes_dir")
def notes_dir_fixture(write_org, tmp_path):
    """Corpus holding the single-file notes/sub example."""
    write_org("notes.org", NOTES_ORG)
    return tmp_path / "notes"
