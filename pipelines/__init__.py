# pipelines/__init__.py
"""
Pipeline module initialization.
Exports the match sync orchestrator and its convenience entry points.
"""

from .match_sync_orchestrator import MatchSyncOrchestrator, new_run_id
from .run_match_sync import check_store, ensure_headers, inspect_endpoint, sync_matches

__all__ = [
    "MatchSyncOrchestrator",
    "new_run_id",
    "check_store",
    "ensure_headers",
    "inspect_endpoint",
    "sync_matches",
]
