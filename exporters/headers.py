# exporters/headers.py
from typing import Any, Iterable, List, Mapping, Sequence


def unique_fields(rows: Iterable[Mapping[str, Any]]) -> List[str]:
    """
    Union of all keys across rows, in first-seen order
    """
    seen = {}
    for row in rows:
        for key in row.keys():
            if key not in seen:
                seen[key] = None
    return list(seen)


def rows_for_header(
    rows: Iterable[Mapping[str, Any]], header: Sequence[str]
) -> List[List[Any]]:
    """
    Project rows onto the header; missing fields become ""
    """
    return [[row.get(name, "") for name in header] for row in rows]
