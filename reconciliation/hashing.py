# reconciliation/hashing.py
"""
Content hashing over the designated hash fields.
"""

import hashlib
import json
from typing import Any, Mapping

from extractors.base_extractor import to_text


def canonical_string(values: Mapping[str, Any]) -> str:
    """
    Sorted, compact JSON of a field -> text mapping. Independent of the
    order in which fields were extracted.
    """
    normalized = {str(key): to_text(value) for key, value in values.items()}
    return json.dumps(
        normalized, sort_keys=True, ensure_ascii=True, separators=(",", ":")
    )


def content_hash(values: Mapping[str, Any]) -> str:
    """
    SHA-256 hex digest of the canonical string
    """
    return hashlib.sha256(canonical_string(values).encode("utf-8")).hexdigest()
