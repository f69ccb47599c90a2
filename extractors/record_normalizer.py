# extractors/record_normalizer.py
"""
Record normalizer: turns one nested upstream match entity into a flat
output row plus the hash projection used by the diff engine.
"""

import logging
from typing import Any, Dict

from logger import SnapshotColumns
from reconciliation.models import Record

from .base_extractor import BaseDataExtractor, to_text

logger = logging.getLogger(__name__)


class RecordNormalizer(BaseDataExtractor):
    """
    Flattens match entities and resolves their logical fields.
    """

    def flatten(self, entity: Any) -> Dict[str, Any]:
        """
        One level deep: scalars stay as they are, composites are
        serialized as compact JSON, None becomes "".
        """
        if not isinstance(entity, dict):
            return {"value": to_text(entity)}

        flat: Dict[str, Any] = {}
        for key, value in entity.items():
            if value is None:
                flat[str(key)] = ""
            elif isinstance(value, (dict, list, tuple)):
                flat[str(key)] = to_text(value)
            else:
                flat[str(key)] = value
        return flat

    def identity(self, entity: Any) -> str:
        return self.extract(entity, self.config.MATCH_ID)

    def hash_projection(self, entity: Any, partition_key: str = "") -> Dict[str, str]:
        """
        Project the entity onto the hash-field list.

        Args:
            entity: original nested entity
            partition_key: grade the entity was fetched under, used when the
                entity carries no grade id of its own

        Returns:
            logical field name -> text value, "" when no candidate matched
        """
        projection = {
            name: self.extract(entity, rule)
            for name, rule in self.config.rule_table().items()
        }
        if not projection.get("grade_id"):
            projection["grade_id"] = to_text(partition_key)
        return projection

    def normalize(
        self, entity: Any, partition_key: str = "", season_id: str = ""
    ) -> Record:
        fields = self.flatten(entity)
        fields[SnapshotColumns.GRADE] = to_text(partition_key)
        fields[SnapshotColumns.SEASON] = to_text(season_id)

        identity = self.identity(entity)
        if not identity:
            logger.debug("No identity found for entity in grade %s", partition_key)

        return Record(
            identity=identity,
            partition=to_text(partition_key),
            fields=fields,
            hash_source=self.hash_projection(entity, partition_key),
        )
