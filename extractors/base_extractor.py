# extractors/base_extractor.py
"""
Base data extraction utilities with common extraction methods.
Resolves candidate paths against nested upstream entities and coerces
values to text.
"""

import json
import re
from typing import Any, List, Optional, Tuple, Union

from .extraction_config import ExtractionConfig, ExtractionRule

_PATH_TOKEN = re.compile(r"([^.\[\]]+)|\[(\d+)\]")

_MISSING = object()


def to_text(value: Any) -> str:
    """
    Coerce any value to a string. Never raises.

    None becomes "", booleans "true"/"false", composites canonical JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(
                value,
                sort_keys=True,
                ensure_ascii=False,
                separators=(",", ":"),
                default=str,
            )
        except (TypeError, ValueError):
            return ""
    try:
        return str(value)
    except Exception:
        return ""


def parse_path(path: str) -> List[Union[str, int]]:
    """
    Split ``a.b[0].c`` into ``["a", "b", 0, "c"]``.
    """
    tokens: List[Union[str, int]] = []
    for key, index in _PATH_TOKEN.findall(path):
        tokens.append(int(index) if index else key)
    return tokens


class BaseDataExtractor:
    """
    Base class providing common extraction methods.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()

    def resolve_path(self, entity: Any, path: str) -> Any:
        """
        Follow a dotted/indexed path into nested dicts and lists.

        Returns:
            The value found, or None when any step is missing
        """
        current = entity
        for token in parse_path(path):
            if isinstance(token, int):
                if isinstance(current, (list, tuple)) and -len(current) <= token < len(
                    current
                ):
                    current = current[token]
                    continue
                return None
            if isinstance(current, dict):
                current = current.get(token, _MISSING)
                if current is _MISSING:
                    return None
                continue
            return None
        return current

    def first_non_empty(
        self, entity: Any, candidates: Tuple[str, ...]
    ) -> Tuple[str, Optional[str]]:
        """
        First candidate path with a non-empty value.

        Returns:
            (value as stripped text, winning path) or ("", None)
        """
        for path in candidates:
            value = self.resolve_path(entity, path)
            text = to_text(value).strip()
            if text:
                return text, path
        return "", None

    def extract(self, entity: Any, rule: ExtractionRule) -> str:
        """
        Resolve one logical field through its rule.
        """
        value, _ = self.first_non_empty(entity, rule.candidates)
        return value
