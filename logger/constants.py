# logger/constants.py
"""
Constants for sheet layout, bookkeeping columns and upstream defaults
"""


class SheetConstants:
    """
    Tab names and fixed bookkeeping headers
    """

    MASTER_TAB = "MASTER"
    RUNS_TAB = "RUNS"
    LOG_TAB = "LOG"
    CHANGES_TAB = "CHANGES"
    SNAPSHOT_TAB = "SNAPSHOT"
    GRADE_TAB_PREFIX = "Grade_"

    RUNS_HEADER = [
        "run_id",
        "start_time",
        "end_time",
        "script",
        "version",
        "grade_count",
        "match_count",
        "errors",
        "note",
    ]
    LOG_HEADER = [
        "run_id",
        "timestamp",
        "script",
        "function",
        "action",
        "table",
        "level",
        "message",
        "detail",
    ]
    CHANGES_HEADER = [
        "run_id",
        "timestamp",
        "match_id",
        "change_type",
        "field",
        "old_hash",
        "new_hash",
        "grade_id",
    ]

    BOOKKEEPING_HEADERS = {
        RUNS_TAB: RUNS_HEADER,
        LOG_TAB: LOG_HEADER,
        CHANGES_TAB: CHANGES_HEADER,
    }

    # Widest range used when clearing a tab
    CLEAR_RANGE = "A:ZZ"


class SnapshotColumns:
    """
    Bookkeeping columns carried by every snapshot row
    """

    HASH = "_hash"
    LAST_CHANGED_AT = "_last_changed_at"
    LAST_CHANGE_TYPE = "_last_change_type"
    ACTIVE = "_active"

    GRADE = "_grade"
    SEASON = "_season"

    IDENTITY = "match_id"
    WHOLE_RECORD_FIELD = "*"

    ALL = [HASH, LAST_CHANGED_AT, LAST_CHANGE_TYPE, ACTIVE]


class ScrapingConstants:
    """
    ResultsVault and match centre defaults
    """

    RV_HOST = "api.resultsvault.co.uk"
    MATCHCENTRE_HOST = "matchcentre.kncb.nl"
    DEFAULT_REFERRER = "https://matchcentre.kncb.nl/matches/"

    SEASON_PARAM = "seasonid"
    LEGACY_SEASON_PARAM = "seasonId"
    GRADE_PARAM = "gradeid"
    MATCH_QUERY_DEFAULTS = {"action": "ors", "maxrecs": "1000", "strmflg": "1"}

    ACCEPT_HEADER = "application/json, text/plain;q=0.8, */*;q=0.5"
    DIRECT_USER_AGENT = "Mozilla/5.0 KNCB-Matchcentre"

    # Characters of a failed response body kept for diagnostics
    HEAD_LENGTH = 220


class LoggingConstants:
    """
    Logging operation constants
    """

    FILE_FORMAT = (
        "%(asctime)s | %(levelname)-8s | %(name)-20s | "
        "%(funcName)-15s:%(lineno)-4d | %(message)s"
    )
    FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
    NOISY_LOGGERS = ["urllib3", "selenium", "googleapiclient", "google.auth"]

    LEVEL_INFO = "INFO"
    LEVEL_WARNING = "WARNING"
    LEVEL_ERROR = "ERROR"
