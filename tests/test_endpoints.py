"""ResultsVault URL helpers."""

from urllib.parse import parse_qs, urlparse

import pytest

from exceptions import ConfigurationError
from session import build_match_url, normalize_rv_endpoint, pick_referrer

GRADES = "https://api.resultsvault.co.uk/rv/134453/grades/?apiid=1002&seasonId=19"
MATCHES = (
    "https://api.resultsvault.co.uk/rv/134453/matches/"
    "?apiid=1002&gradeid=1&seasonid=2&maxrecs=50"
)


def query(url):
    return parse_qs(urlparse(url).query)


def test_legacy_season_parameter_is_renamed():
    url = normalize_rv_endpoint("GRADES", GRADES)
    assert url == "https://api.resultsvault.co.uk/rv/134453/grades/?apiid=1002&seasonid=19"


def test_configured_season_is_forced():
    url = normalize_rv_endpoint("GRADES", GRADES, season_id="20")
    assert query(url)["seasonid"] == ["20"]
    assert "seasonId" not in query(url)


def test_existing_lowercase_season_kept_without_configured_season():
    url = normalize_rv_endpoint("M", MATCHES)
    assert query(url)["seasonid"] == ["2"]


@pytest.mark.parametrize("url", ["", "https://example.com/rv/1/grades/"])
def test_rejects_missing_or_foreign_endpoint(url):
    with pytest.raises(ConfigurationError):
        normalize_rv_endpoint("GRADES_JSON_API_ENDPOINT", url)


def test_match_url_replaces_grade_and_season():
    url = build_match_url(MATCHES, "11", "19")
    params = query(url)

    assert params["gradeid"] == ["11"]
    assert params["seasonid"] == ["19"]
    assert params["apiid"] == ["1002"]


def test_match_url_adds_missing_defaults_only():
    params = query(build_match_url(MATCHES, "11", "19"))

    assert params["maxrecs"] == ["50"]
    assert params["action"] == ["ors"]
    assert params["strmflg"] == ["1"]


def test_match_url_without_season():
    params = query(build_match_url(MATCHES, "11"))
    assert "seasonid" not in params
    assert params["gradeid"] == ["11"]


def test_pick_referrer_prefers_match_centre():
    candidates = ["https://example.com/", "https://matchcentre.kncb.nl/seasons/"]
    assert pick_referrer(candidates) == "https://matchcentre.kncb.nl/seasons/"


def test_pick_referrer_default():
    assert pick_referrer(["", "https://example.com/"]) == (
        "https://matchcentre.kncb.nl/matches/"
    )
