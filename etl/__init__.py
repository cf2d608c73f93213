"""ETL package - data sync from the parliament APIs to the database."""

from etl.helpers import RunReport, SyncStats
from etl.sync import STAGES, run_stages, sync_all

__all__ = [
    "STAGES",
    "RunReport",
    "SyncStats",
    "run_stages",
    "sync_all",
]
