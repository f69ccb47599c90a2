# exporters/csv_exporter.py
"""
CSV export sink.
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import pandas as pd

from extractors.base_extractor import to_text
from logger import SheetConstants

from .headers import rows_for_header, unique_fields

logger = logging.getLogger(__name__)


class CsvExporter:
    """
    Writes one CSV per grade, MASTER.csv and an optional combined copy.
    The header is the union of all row keys in first-seen order.
    """

    def __init__(self, output_directory: str = "output", combined_path: str = ""):
        self.output_directory = Path(output_directory)
        self.combined_path = Path(combined_path) if combined_path else None

    def to_frame(self, rows: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
        header = unique_fields(rows)
        values = [
            [to_text(value) for value in row] for row in rows_for_header(rows, header)
        ]
        return pd.DataFrame(values, columns=header, dtype=object)

    def write(self, path: Path, rows: Sequence[Mapping[str, Any]]) -> Optional[Path]:
        frame = self.to_frame(rows)
        if frame.columns.empty:
            logger.info("Nothing to write for %s", path.name)
            return None
        path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(path, index=False, encoding="utf-8")
        logger.info("Wrote %s (%d rows)", path, len(frame))
        return path

    def write_grade(
        self, grade_id: str, rows: Sequence[Mapping[str, Any]]
    ) -> Optional[Path]:
        name = f"{SheetConstants.GRADE_TAB_PREFIX}{grade_id}.csv"
        return self.write(self.output_directory / name, rows)

    def write_master(self, rows: Sequence[Mapping[str, Any]]) -> Optional[Path]:
        return self.write(
            self.output_directory / f"{SheetConstants.MASTER_TAB}.csv", rows
        )

    def write_combined(self, rows: Sequence[Mapping[str, Any]]) -> Optional[Path]:
        """
        Extra copy at the configured path, if any
        """
        if self.combined_path is None:
            return None
        return self.write(self.combined_path, rows)

