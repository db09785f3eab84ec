"""CSV export of query results."""

import os
import time
import logging
import tempfile
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from app.core.config import EXPORT_DIR

logger = logging.getLogger(__name__)


class ExportFileError(Exception):
    """Raised when the export file cannot be created."""
    pass


class CsvExportWriter:
    """Writes result sets to CSV files in the export directory.

    Each export gets its own file on disk; the download is offered as
    ``report_<unix-seconds>.csv``.
    """

    def __init__(self, export_dir: str = EXPORT_DIR):
        self.export_dir = export_dir

    @staticmethod
    def file_name(timestamp: Optional[int] = None) -> str:
        return f"report_{int(time.time()) if timestamp is None else timestamp}.csv"

    def write(
        self, columns: List[str], rows: List[Dict[str, Any]], file_name: Optional[str] = None
    ) -> Tuple[str, str]:
        """
        Write rows to a new CSV file and return ``(path, download_name)``.

        The header follows ``columns`` (the driver's result order) and every row
        uses the same order. An empty result produces an empty file.
        """
        file_name = file_name or self.file_name()
        stem, _ = os.path.splitext(file_name)

        try:
            fd, path = tempfile.mkstemp(prefix=f"{stem}_", suffix=".csv", dir=self.export_dir)
            with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
                if rows:
                    df = pd.DataFrame([[row.get(c) for c in columns] for row in rows], columns=columns, dtype=object)
                    df.to_csv(f, index=False, lineterminator="\n")
        except OSError as e:
            logger.error(f"Failed to create export file {file_name} in {self.export_dir}: {e}")
            raise ExportFileError("Failed to create file") from e

        logger.info(f"Exported {len(rows)} rows to {path}")
        return path, file_name
