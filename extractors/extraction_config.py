# extractors/extraction_config.py
"""
Schema-compatibility contract for upstream payloads.

The ResultsVault API does not use stable key names across endpoints and
versions. Every logical field is resolved through an ordered list of
candidate paths into the original (nested) entity; the first candidate
with a non-empty value wins.

Path syntax: dotted keys with optional list indexes, e.g. ``homeTeam.name``
or ``teams[0].name``.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class ExtractionRule:
    """
    Ordered candidate paths for one logical field
    """

    logical_name: str
    candidates: Tuple[str, ...]


class ExtractionConfig:
    """
    Configuration class for payload extraction settings.
    """

    # Keys probed, in order, for the record array of a payload
    ARRAY_KEYS: Tuple[str, ...] = ("matches", "data", "items", "rows")

    MATCH_ID = ExtractionRule(
        "match_id",
        (
            "matchId",
            "matchID",
            "matchid",
            "match_id",
            "MatchId",
            "id",
            "Id",
            "ID",
            "match.id",
            "fixtureId",
            "fixture.id",
        ),
    )

    GRADE_ID = ExtractionRule(
        "grade_id",
        (
            "gradeId",
            "gradeID",
            "gradeid",
            "grade_id",
            "id",
            "Id",
            "ID",
            "grade.id",
            "grade.gradeId",
            "GradeId",
        ),
    )

    # Grade id as carried on a match record (never the match's own "id")
    MATCH_GRADE_ID = ExtractionRule(
        "grade_id",
        ("gradeId", "gradeID", "gradeid", "grade_id", "grade.id", "GradeId"),
    )

    SEASON_ID = ExtractionRule("season_id", ("seasonid", "seasonId", "season.id"))

    # Fields that define "meaningful change" of a match
    HASH_RULES: Tuple[ExtractionRule, ...] = (
        ExtractionRule("match_date", ("matchDate", "date", "match_date", "startDate")),
        ExtractionRule(
            "home_name",
            ("homeTeam.name", "home", "homeTeamName", "home_name", "teams[0].name"),
        ),
        ExtractionRule(
            "away_name",
            ("awayTeam.name", "away", "awayTeamName", "away_name", "teams[1].name"),
        ),
        ExtractionRule("venue_name", ("venue.name", "venueName", "ground.name")),
        ExtractionRule("status", ("status", "matchStatus", "statusText")),
        ExtractionRule(
            "score_text", ("score.fullTime", "scoreText", "score_text", "result")
        ),
        ExtractionRule("home_score", ("score.home", "homeScore", "home_score")),
        ExtractionRule("away_score", ("score.away", "awayScore", "away_score")),
        ExtractionRule(
            "result_text", ("resultText", "result_text", "matchResult", "resultDesc")
        ),
    )

    @classmethod
    def hash_field_names(cls) -> Tuple[str, ...]:
        """
        Logical names that feed the content hash
        """
        return (cls.MATCH_ID.logical_name, cls.MATCH_GRADE_ID.logical_name) + tuple(
            rule.logical_name for rule in cls.HASH_RULES
        )

    @classmethod
    def rule_table(cls) -> Dict[str, ExtractionRule]:
        table = {cls.MATCH_ID.logical_name: cls.MATCH_ID}
        table[cls.MATCH_GRADE_ID.logical_name] = cls.MATCH_GRADE_ID
        for rule in cls.HASH_RULES:
            table[rule.logical_name] = rule
        return table
