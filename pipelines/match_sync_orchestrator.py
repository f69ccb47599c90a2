# pipelines/match_sync_orchestrator.py
"""
Match sync orchestrator.

grade discovery -> per-grade fetch -> normalize -> export -> snapshot diff
-> RUNS/LOG bookkeeping -> summary notification.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from configurations import PipelineConfig
from database import RunLedger, SnapshotStore, TabularStore, create_tabular_store
from exceptions import (
    FetchError,
    PayloadShapeError,
    SessionError,
    TabularStoreError,
)
from exporters import CsvExporter, TabExporter
from extractors import Grade, GradeExtractor, RecordNormalizer
from logger import RunLogger, SnapshotColumns
from notifications import TelegramNotifier
from reconciliation import (
    ChangeType,
    ReconciliationResult,
    Record,
    RunSummary,
    SnapshotDiffEngine,
)
from session import (
    BrowserSession,
    ResultsVaultClient,
    build_match_url,
    normalize_rv_endpoint,
    pick_referrer,
)

logger = logging.getLogger(__name__)


def new_run_id(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y%m%dT%H%M%S.%fZ")


class MatchSyncOrchestrator:
    """
    Runs one complete sync. Collaborators can be injected; anything not
    given is built from the configuration.
    """

    def __init__(
        self,
        config: PipelineConfig,
        session=None,
        client: Optional[ResultsVaultClient] = None,
        store: Optional[TabularStore] = None,
        notifier: Optional[TelegramNotifier] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        rv = config.resultsvault

        self._owns_session = session is None
        self.session = session or BrowserSession(
            referrer_url=pick_referrer(rv.referrer_candidates),
            navigation_timeout=rv.navigation_timeout,
        )
        self.client = client or ResultsVaultClient(config.retry, rv.api_headers())
        self._store = store
        self.notifier = notifier or TelegramNotifier(config.telegram)
        self.sleep = sleep

        self.grade_extractor = GradeExtractor()
        self.normalizer = RecordNormalizer()
        self.diff_engine = SnapshotDiffEngine()
        self.csv_exporter = (
            CsvExporter(config.output_directory, config.csv_output)
            if config.write_csv
            else None
        )

    @property
    def store(self) -> TabularStore:
        if self._store is None:
            self._store = create_tabular_store(self.config)
        return self._store

    # ***> Run <***

    def run(self) -> RunSummary:
        """
        Execute one sync run.

        Returns:
            RunSummary of the run (also written as a RUNS row)

        Raises:
            Exception: any fatal error, after it was logged and notified
        """
        started = datetime.now(timezone.utc)
        run_id = new_run_id(started)
        summary = RunSummary(
            run_id=run_id,
            start_time=started.isoformat(),
            script=self.config.script_name,
            version=self.config.version,
        )
        run_log = RunLogger(run_id, self.config.script_name, logger)
        run_log.info("run", "start", f"Run {run_id} started", detail=self.config.environment)

        try:
            self._execute(summary, run_log)
            summary.status = "ok" if summary.errors == 0 else "partial"
        except Exception as error:
            summary.status = "failed"
            summary.note = str(error)
            run_log.error("run", "fatal", str(error), detail=type(error).__name__)
            self.notifier.notify(f"Fatal error: {error}")
            raise
        finally:
            summary.end_time = datetime.now(timezone.utc).isoformat()
            self._write_ledger(summary, run_log)
            if self._owns_session:
                self.session.close()

        self.notifier.notify(self._summary_message(summary))
        return summary

    def _execute(self, summary: RunSummary, run_log: RunLogger) -> None:
        rv = self.config.resultsvault
        grades_url = normalize_rv_endpoint(
            "GRADES_JSON_API_ENDPOINT", rv.grades_endpoint, rv.season_id
        )
        matches_base = normalize_rv_endpoint(
            "MATCH_JSON_API_ENDPOINT", rv.matches_endpoint, rv.season_id
        )
        if self.csv_exporter is not None:
            self.config.ensure_output_directory()

        self.session.warm_up()

        grades = self._discover_grades(grades_url, run_log)
        summary.grade_count = len(grades)

        records: List[Record] = []
        fetched: List[str] = []
        failed: List[str] = []
        single_grade_rows: List[Dict] = []

        for grade in grades:
            grade_records = self._process_grade(grade, matches_base, summary, run_log)
            if grade_records is None:
                failed.append(grade.grade_id)
            else:
                fetched.append(grade.grade_id)
                records.extend(grade_records)
                if len(grades) == 1:
                    single_grade_rows = [record.fields for record in grade_records]
                self._pace(len(fetched), run_log)

        summary.match_count = len(records)
        master_rows = [record.fields for record in records]
        if master_rows:
            self._export_master(
                master_rows, single_grade_rows, len(grades), summary, run_log
            )

        if self.config.enable_diff:
            result = self._reconcile(records, failed, summary.run_id, run_log)
            summary.changes = result.counts
            if result.skipped:
                summary.note = f"{result.skipped} records without match id skipped"

    # ***> Grades <***

    def _discover_grades(self, grades_url: str, run_log: RunLogger) -> List[Grade]:
        payload = self.client.fetch_json(grades_url, self.session, label="grades")
        raw = self.grade_extractor.extract_array(payload)
        if raw is None:
            raise PayloadShapeError("No grade array found in grades response")

        only_ids = self.config.resultsvault.grade_ids
        grades = self.grade_extractor.select(raw, only_ids)
        note = f" (filtered from {len(raw)})" if only_ids else ""
        run_log.info(
            "discover_grades", "select", f"{len(grades)} grades to process{note}"
        )
        if self.config.verbose >= 1 and grades:
            logger.info("Grade ids: %s", ", ".join(g.grade_id for g in grades[:50]))
        return grades

    def _process_grade(
        self,
        grade: Grade,
        matches_base: str,
        summary: RunSummary,
        run_log: RunLogger,
    ) -> Optional[List[Record]]:
        """
        Fetch, normalize and export one grade.

        Returns:
            The grade's records, or None when the grade was skipped
        """
        season_id = grade.season_id or self.config.resultsvault.season_id
        url = build_match_url(matches_base, grade.grade_id, season_id)
        table = f"Grade_{grade.grade_id}"

        try:
            payload = self.client.fetch_json(
                url, self.session, label=f"grade {grade.grade_id}"
            )
            entities = self.grade_extractor.extract_array(payload)
            if entities is None:
                raise PayloadShapeError(
                    f"No array found for grade {grade.grade_id}; skipped"
                )
        except (FetchError, PayloadShapeError) as error:
            message = (
                error.describe() if isinstance(error, FetchError) else str(error)
            )
            summary.errors += 1
            run_log.error("process_grade", "fetch", message, table=table, detail=url)
            self.notifier.notify(f"Error for grade {grade.grade_id}: {message}")
            return None

        grade_records = [
            self.normalizer.normalize(entity, grade.grade_id, season_id)
            for entity in entities
        ]
        run_log.info(
            "process_grade", "fetch", f"{len(grade_records)} matches", table=table
        )

        rows = [record.fields for record in grade_records]
        if rows:
            self._export_grade(grade.grade_id, rows, summary, run_log)
        return grade_records

    def _pace(self, processed: int, run_log: RunLogger) -> None:
        rv = self.config.resultsvault
        if rv.refresh_referrer_every > 0 and processed % rv.refresh_referrer_every == 0:
            try:
                self.session.refresh()
            except SessionError as error:
                run_log.warning("pace", "refresh", str(error))
            self.sleep(rv.slowdown)
        self.sleep(rv.slowdown)

    # ***> Exports <***

    def _export_grade(
        self, grade_id: str, rows: List[Dict], summary: RunSummary, run_log: RunLogger
    ) -> None:
        table = f"Grade_{grade_id}"
        if self.csv_exporter is not None:
            try:
                self.csv_exporter.write_grade(grade_id, rows)
            except OSError as error:
                run_log.warning("export_grade", "csv", str(error), table=table)
        try:
            TabExporter(self.store).write_grade(grade_id, rows)
        except TabularStoreError as error:
            summary.errors += 1
            run_log.error("export_grade", "write", str(error), table=table)

    def _export_master(
        self,
        master_rows: List[Dict],
        single_grade_rows: List[Dict],
        grade_count: int,
        summary: RunSummary,
        run_log: RunLogger,
    ) -> None:
        if self.csv_exporter is not None:
            try:
                self.csv_exporter.write_master(master_rows)
                self.csv_exporter.write_combined(
                    single_grade_rows if grade_count == 1 else master_rows
                )
            except OSError as error:
                run_log.warning("export_master", "csv", str(error), table="MASTER")
        try:
            TabExporter(self.store).write_master(master_rows)
        except TabularStoreError as error:
            summary.errors += 1
            run_log.error("export_master", "write", str(error), table="MASTER")
            return
        run_log.info(
            "export_master", "write", f"{len(master_rows)} rows", table="MASTER"
        )

    # ***> Diff <***

    def _reconcile(
        self,
        records: List[Record],
        failed: List[str],
        run_id: str,
        run_log: RunLogger,
    ) -> ReconciliationResult:
        """
        Diff against the stored snapshot. Rows of failed grades, and of grades
        excluded by the GRADE_IDS filter, are left as they are; every other
        unseen active row is soft-deleted.
        """
        snapshot_store = SnapshotStore(
            self.store,
            table=self.config.snapshot_table,
            load_failure_policy=self.config.load_failure_policy,
        )
        previous = snapshot_store.load()
        protected = set(failed)
        only_ids = {
            str(grade_id).strip()
            for grade_id in self.config.resultsvault.grade_ids
            if str(grade_id).strip()
        }
        if only_ids:
            stored = {
                str(row.get(SnapshotColumns.GRADE, "")) for row in previous.values()
            }
            protected |= stored - only_ids
        result = self.diff_engine.reconcile(
            records, previous, run_id, protected=protected
        )
        snapshot_store.persist(result.snapshot_rows())
        snapshot_store.append_changes(result.events)
        run_log.info(
            "reconcile",
            "diff",
            result.summary_text(),
            table=self.config.snapshot_table,
            detail=f"skipped={result.skipped}",
        )
        return result

    # ***> Bookkeeping <***

    def _write_ledger(self, summary: RunSummary, run_log: RunLogger) -> None:
        """
        RUNS and LOG rows; failures here are logged only
        """
        try:
            ledger = RunLedger(self.store)
            ledger.append_run(summary)
            ledger.append_log(run_log.entries)
        except TabularStoreError as error:
            logger.error("Could not write run bookkeeping: %s", error)

    def _summary_message(self, summary: RunSummary) -> str:
        lines = [
            f"{summary.script} {summary.run_id}: {summary.status}",
            f"grades={summary.grade_count} matches={summary.match_count} "
            f"errors={summary.errors}",
        ]
        if summary.changes is not None:
            lines.append(
                ", ".join(
                    f"{change_type.value}={summary.changes.get(change_type, 0)}"
                    for change_type in ChangeType
                )
            )
        return "\n".join(lines)
