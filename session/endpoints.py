# session/endpoints.py
"""
URL helpers for the ResultsVault API and the match centre referrer pages.
"""

from typing import Iterable, List, Tuple
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from exceptions import ConfigurationError
from logger import ScrapingConstants


def _split(url: str) -> Tuple[object, List[Tuple[str, str]]]:
    parsed = urlparse(url)
    return parsed, parse_qsl(parsed.query, keep_blank_values=True)


def _join(parsed, params: List[Tuple[str, str]]) -> str:
    return urlunparse(parsed._replace(query=urlencode(params)))


def _has(params: List[Tuple[str, str]], key: str) -> bool:
    return any(name == key for name, _ in params)


def _get(params: List[Tuple[str, str]], key: str) -> str:
    for name, value in params:
        if name == key:
            return value
    return ""


def _delete(params: List[Tuple[str, str]], key: str) -> List[Tuple[str, str]]:
    return [(name, value) for name, value in params if name != key]


def _set(params: List[Tuple[str, str]], key: str, value: str) -> List[Tuple[str, str]]:
    """
    Replace the first occurrence in place (dropping repeats) or append
    """
    result: List[Tuple[str, str]] = []
    replaced = False
    for name, current in params:
        if name != key:
            result.append((name, current))
        elif not replaced:
            result.append((name, value))
            replaced = True
    if not replaced:
        result.append((key, value))
    return result


def normalize_rv_endpoint(name: str, url: str, season_id: str = "") -> str:
    """
    Validate a configured API endpoint and normalize its season parameter.

    Args:
        name: environment variable name, used in error messages
        url: configured endpoint
        season_id: configured season; forced onto the url when set

    Raises:
        ConfigurationError: when the url is missing or not on the API host
    """
    if not url:
        raise ConfigurationError(f"{name} is missing")

    parsed, params = _split(url)
    host = (parsed.hostname or "").lower()
    if not host.endswith(ScrapingConstants.RV_HOST):
        raise ConfigurationError(
            f"{name} must point to {ScrapingConstants.RV_HOST} (got {host or url!r})"
        )

    legacy = ScrapingConstants.LEGACY_SEASON_PARAM
    season = ScrapingConstants.SEASON_PARAM
    if _has(params, legacy) and not _has(params, season):
        value = _get(params, legacy)
        params = _delete(params, legacy)
        if value:
            params = _set(params, season, value)

    if season_id:
        params = _set(params, season, str(season_id))

    return _join(parsed, params)


def build_match_url(base_url: str, grade_id: str, season_id: str = "") -> str:
    """
    Matches url for one grade. Existing grade/season parameters are replaced,
    the query defaults are added when absent.
    """
    parsed, params = _split(base_url)

    for key in (
        ScrapingConstants.GRADE_PARAM,
        ScrapingConstants.LEGACY_SEASON_PARAM,
        ScrapingConstants.SEASON_PARAM,
    ):
        params = _delete(params, key)

    if season_id:
        params.append((ScrapingConstants.SEASON_PARAM, str(season_id)))
    params.append((ScrapingConstants.GRADE_PARAM, str(grade_id)))

    for key, value in ScrapingConstants.MATCH_QUERY_DEFAULTS.items():
        if not _has(params, key):
            params.append((key, value))

    return _join(parsed, params)


def pick_referrer(candidates: Iterable[str]) -> str:
    """
    First candidate on the match centre host, else the default matches page
    """
    for candidate in candidates:
        if not candidate:
            continue
        host = (urlparse(candidate).hostname or "").lower()
        if host.endswith(ScrapingConstants.MATCHCENTRE_HOST):
            return candidate
    return ScrapingConstants.DEFAULT_REFERRER
