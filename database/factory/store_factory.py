# database/factory/store_factory.py
"""
Store factory using the pipeline configuration.
"""

import logging

from configurations import PipelineConfig

from ..core.database_manager import DatabaseManager
from ..sheets_store import GoogleSheetsStore
from ..sql_store import SqlTabularStore
from ..tabular_store import TabularStore

logger = logging.getLogger(__name__)


class StoreFactory:
    """
    Picks the tabular store backend: Google Sheets when a spreadsheet is
    configured and not disabled, the SQL store otherwise.
    """

    @staticmethod
    def create_tabular_store(config: PipelineConfig) -> TabularStore:
        if config.sheets.enabled:
            logger.info("Using Google Sheets store %s", config.sheets.spreadsheet_id)
            return GoogleSheetsStore(config.sheets)

        logger.info(
            "Using SQL store (%s)", config.database.get_connection_info()["database_type"]
        )
        return SqlTabularStore(
            DatabaseManager(config.database.database_url, echo=config.database.echo)
        )


def create_tabular_store(config: PipelineConfig) -> TabularStore:
    """
    Convenience function to create the configured tabular store.
    """
    return StoreFactory.create_tabular_store(config)
