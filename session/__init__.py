from .browser_session import BrowserSession
from .direct_session import DirectSession
from .endpoints import build_match_url, normalize_rv_endpoint, pick_referrer
from .fetch_client import ResultsVaultClient
from .raw_response import RawResponse
from .retry import additive_jitter, with_retry

__all__ = [
    "BrowserSession",
    "DirectSession",
    "build_match_url",
    "normalize_rv_endpoint",
    "pick_referrer",
    "ResultsVaultClient",
    "RawResponse",
    "additive_jitter",
    "with_retry",
]
