# pipelines/run_match_sync.py
"""
Main match sync API interface.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from configurations import PipelineConfig, get_config
from database import RunLedger, TabularStore, create_tabular_store
from session import DirectSession, ResultsVaultClient

from .match_sync_orchestrator import MatchSyncOrchestrator

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 1000


def sync_matches(
    environment: str = "development",
    env_file: Optional[str] = ".env",
    config: Optional[PipelineConfig] = None,
    **components,
):
    """
    Run one complete match sync.

    Args:
        environment: Configuration environment to use
        env_file: .env file loaded before reading the environment
        config: Ready configuration (skips environment loading)
        **components: Collaborators passed to MatchSyncOrchestrator

    Returns:
        RunSummary of the run
    """
    config = config or get_config(environment, env_file)
    return MatchSyncOrchestrator(config, **components).run()


def ensure_headers(
    config: PipelineConfig, store: Optional[TabularStore] = None
) -> List[str]:
    """
    Install the RUNS, LOG and CHANGES headers.

    Returns:
        Tables whose header was written
    """
    store = store or create_tabular_store(config)
    written = RunLedger(store).ensure_headers()
    logger.info("Headers written to: %s", ", ".join(written) or "none")
    return written


def check_store(
    config: PipelineConfig, store: Optional[TabularStore] = None
) -> Dict[str, Any]:
    """
    Verify the configured store is reachable.

    Raises:
        TabularStoreError: when it is not
    """
    store = store or create_tabular_store(config)
    store.ping()
    return {
        "store": store.describe(),
        "atomic_replace": store.atomic_replace,
        "tables": store.list_tables(),
    }


def inspect_endpoint(
    url: str,
    config: Optional[PipelineConfig] = None,
    session=None,
    preview_length: int = PREVIEW_LENGTH,
) -> Dict[str, Any]:
    """
    Fetch a JSON endpoint without a browser and describe its shape.

    Returns:
        top-level keys (or the list length) and a pretty-printed preview
    """
    config = config or PipelineConfig()
    client = ResultsVaultClient(config.retry, config.resultsvault.api_headers())
    session = session or DirectSession()
    payload = client.fetch_json(url, session, label="inspect")

    if isinstance(payload, dict):
        shape: Any = list(payload.keys())
    else:
        shape = f"list[{len(payload)}]"
    preview = json.dumps(payload, indent=2, ensure_ascii=False)[:preview_length]
    return {"keys": shape, "preview": preview}
