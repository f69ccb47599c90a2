# extractors/extractor_grade.py
"""
Helpers for grade (partition) payloads and record arrays.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from .base_extractor import BaseDataExtractor

logger = logging.getLogger(__name__)


@dataclass
class Grade:
    """
    A partition selected for fetching
    """

    grade_id: str
    season_id: str = ""


class GradeExtractor(BaseDataExtractor):
    """
    Extracts grade ids and record arrays from upstream payloads.
    """

    def extract_array(self, payload: Any) -> Optional[List[Any]]:
        """
        Locate the record array in a payload.

        A bare list is returned as is; otherwise the preferred keys are
        probed in order, then the first list-valued key.

        Returns:
            The list, or None when the payload holds no array
        """
        if isinstance(payload, list):
            return payload
        if not isinstance(payload, dict):
            return None

        for key in self.config.ARRAY_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value

        for key, value in payload.items():
            if isinstance(value, list):
                logger.debug("Using first list-valued key %r as record array", key)
                return value
        return None

    def grade_id(self, grade: Any) -> str:
        return self.extract(grade, self.config.GRADE_ID)

    def season_id(self, grade: Any) -> str:
        return self.extract(grade, self.config.SEASON_ID)

    def select(
        self, grades: Iterable[Any], only_ids: Iterable[str] = ()
    ) -> List[Grade]:
        """
        Keep grades with a recognizable id, optionally filtered.

        Args:
            grades: raw grade entities
            only_ids: grade ids to keep; empty keeps all

        Returns:
            Selected grades, first occurrence of each id, upstream order
        """
        wanted = {str(grade_id).strip() for grade_id in only_ids if str(grade_id).strip()}
        selected: List[Grade] = []
        seen = set()

        for raw in grades:
            grade_id = self.grade_id(raw)
            if not grade_id:
                logger.warning("Skipping grade without recognizable id")
                continue
            if wanted and grade_id not in wanted:
                continue
            if grade_id in seen:
                continue
            seen.add(grade_id)
            selected.append(
                Grade(
                    grade_id=grade_id,
                    season_id=self.season_id(raw),
                )
            )
        return selected
