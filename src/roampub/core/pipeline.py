"""Pipeline orchestration: discovery, id pass, planning, split/render pass, writing"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from roampub.config import Settings
from roampub.core.diagnostics import Diagnostic, emit
from roampub.core.errors import ExportError
from roampub.core.export import write_record
from roampub.core.index import index_file, merge_index
from roampub.core.models import CorpusNode, DocumentExport, ExportRecord
from roampub.core.parse import discover_files, parse_file
from roampub.core.plan import ExportPlan, build_plan
from roampub.core.split import split_document


logger = logging.getLogger(__name__)


@dataclass
class ExportReport:
    """Outcome of a full export run."""
    written:     list[Path] = field(default_factory=list)
    skipped:     list[ExportRecord] = field(default_factory=list)
    failed:      dict[Path, str] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def index_files(files: list[Path], settings: Settings) -> dict[str, CorpusNode]:
    """Pass 1 over every file in parallel; merged only once all documents are done."""
    started = time.perf_counter()
    with ThreadPoolExecutor(max_workers=settings.workers) as pool:
        per_document = list(pool.map(lambda p: index_file(p, settings), files))
    index = merge_index(per_document)
    logger.info(f"id pass finished in {time.perf_counter() - started:.2f}s: {len(index)} ids in {len(files)} files")
    return index


def run_index(source: Path, settings: Settings) -> dict[str, CorpusNode]:
    """Discover source files under source and run Pass 1 only."""
    return index_files(discover_files(source, settings.source_extension), settings)


def export_document(path: Path, plan: ExportPlan, settings: Settings) -> DocumentExport:
    """Pass 2 for a single document."""
    return split_document(parse_file(path, settings), plan, settings)


def run_export(
    source: Path,
    output_dir: Path,
    settings: Settings,
    dry_run: bool = False,
    on_write: Optional[Callable[[Path], None]] = None,
    ) -> ExportReport:
    """Run both passes and write every exported record.

    Pass 1 errors (duplicate/invalid ids, unreadable files) propagate before
    anything is rendered. Pass 2 errors are recorded per document unless
    settings.fail_fast is set. Results are consumed in sorted document order,
    so writes and on_write calls are deterministic.
    """
    files = discover_files(source, settings.source_extension)
    plan = build_plan(index_files(files, settings).values(), settings)

    if not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)

    started = time.perf_counter()
    report = ExportReport()
    with ThreadPoolExecutor(max_workers=settings.workers) as pool:
        futures = [(p, pool.submit(export_document, p, plan, settings)) for p in files]
        for path, future in futures:
            try:
                result = future.result()
            except Exception as e:
                if settings.fail_fast:
                    raise ExportError(f"Failed to export {path}: {e}") from e
                logger.error(f"Failed to export {path}: {e}")
                report.failed[path] = str(e)
                continue

            emit(result.diagnostics, logger)
            report.diagnostics.extend(result.diagnostics)
            for record in result.records:
                written = write_record(record, output_dir, dry_run)
                if written is None:
                    report.skipped.append(record)
                    continue
                report.written.append(written)
                if on_write:
                    on_write(written)

    logger.info(f"wrote {len(report.written)} files in {time.perf_counter() - started:.2f}s")
    return report
