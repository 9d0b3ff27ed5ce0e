"""Writer: persist finalized export records under the output root"""

import logging
from pathlib import Path
from typing import Optional

from roampub.core.models import ExportRecord, NodeKind


logger = logging.getLogger(__name__)


def write_record(record: ExportRecord, output_dir: Path, dry_run: bool = False) -> Optional[Path]:
    """Write one record to output_dir/<filename>.

    Returns the target path (also in dry-run mode, where nothing is written),
    or None when the record has no resolved filename and was skipped.
    """
    if record.filename is None:
        what = "file" if record.kind is NodeKind.file else "headline"
        logger.warning(f"{what} {record.title} in {record.source} is tagged for export but has no id; skipped")
        return None

    path = output_dir / record.filename
    if dry_run:
        logger.info(f"dry run: would write {path}")
        return path
    path.write_text(record.content, encoding='utf-8')
    logger.debug(f"wrote {path} ({len(record.content)} chars)")
    return path
