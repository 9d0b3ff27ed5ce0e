"""Per-document diagnostics collected during export and merged by the caller"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional


@dataclass(frozen=True)
class Diagnostic:
    level:   int                # logging level
    path:    Path
    context: Optional[str]      # enclosing section or file name
    message: str

    def __str__(self) -> str:
        where = f"{self.path} [{self.context}]" if self.context else str(self.path)
        return f"{where}: {self.message}"


@dataclass
class Diagnostics:
    """Collects warnings and errors for one document instead of logging them in place."""
    path:    Path
    records: list[Diagnostic] = field(default_factory=list)

    def warn(self, message: str, context: Optional[str] = None) -> None:
        self.records.append(Diagnostic(logging.WARNING, self.path, context, message))

    def error(self, message: str, context: Optional[str] = None) -> None:
        self.records.append(Diagnostic(logging.ERROR, self.path, context, message))

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.records if d.level == logging.WARNING]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


def emit(diagnostics: Iterable[Diagnostic], logger: logging.Logger) -> None:
    """Log each diagnostic at its recorded level."""
    for d in diagnostics:
        logger.log(d.level, str(d))
