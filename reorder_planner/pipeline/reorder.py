"""
ReorderStage: turn an inventory workbook and a budget into order files.

Reorder flow
------------
  1. Validate inputs: the workbook path must exist, as given or under
     ``config.data.input_dir`` (InputMissingError), and
     the budget must be finite and >= 0 (InvalidBudgetError).  Nothing is
     read until both pass.
  2. Read the first sheet (ParseFailureError on unreadable workbooks).
  3. Zero rows → EmptyInputError.
  4. ``process()``: score every record, stable-sort by score descending,
     greedy-allocate against the budget.
  5. Write ``recommended_reorders_{date}.csv`` and ``backlog_{date}.csv``
     (``ISBN,Quantity`` lines) into ``config.data.output_dir``.

``process()`` is the in-memory core and can be called directly with records
from any source.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional
from uuid import uuid4

from reorder_planner.allocation.allocator import allocate, validate_budget
from reorder_planner.allocation.ranker import rank_records
from reorder_planner.config import AppConfig
from reorder_planner.errors import EmptyInputError, InputMissingError, ReorderPlannerError
from reorder_planner.ingestion.spreadsheet import read_first_sheet
from reorder_planner.models.meta import RunMetadata
from reorder_planner.models.report import AllocationResult
from reorder_planner.reporting.assembler import to_export_rows
from reorder_planner.reporting.export import export_filename, write_export_csv
from reorder_planner.scoring.fields import InventoryRecord
from reorder_planner.utils.logging import RunLogAdapter, run_logger
from reorder_planner.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


def process(
    records: Iterable[InventoryRecord],
    budget:  Any,
    now:     Optional[datetime] = None,
) -> AllocationResult:
    """Score, rank and allocate ``records`` under ``budget``.

    Args:
        records: Inventory records (header → value mappings); any iterable,
                 consumed once.
        budget:  Maximum total unit cost of the reorder partition.
        now:     Reference time for recency scoring. Defaults to current UTC.

    Returns:
        AllocationResult for this run.

    Raises:
        InvalidBudgetError: If ``budget`` is not a finite, non-negative number.
            Checked before the records are looked at.
        EmptyInputError: If ``records`` is empty.
    """
    limit = validate_budget(budget)
    records = list(records)
    if not records:
        raise EmptyInputError()
    ranked = rank_records(records, now=now)
    return allocate(ranked, limit)


def resolve_input_path(input_path: Path | str, input_dir: Path | str) -> Path:
    """Return ``input_path``, or ``input_dir / input_path`` when only that exists.

    Absolute paths and paths that exist as given are returned unchanged.
    """
    path = Path(input_path)
    if path.is_file() or path.is_absolute():
        return path
    candidate = Path(input_dir) / path
    return candidate if candidate.is_file() else path


@dataclass(frozen=True)
class ReorderRun:
    """Outcome of one ``ReorderStage.run()``.

    Attributes:
        run:         Run metadata (slug, timings, status).
        result:      Budget partition.
        reorder_csv: Path of the written recommended-reorders file.
        backlog_csv: Path of the written backlog file.
        input_rows:  Number of records read from the workbook.
        run_date:    Date used in the export filenames.
    """

    run:         RunMetadata
    result:      AllocationResult
    reorder_csv: Path
    backlog_csv: Path
    input_rows:  int
    run_date:    date


class ReorderStage:
    """Read a workbook, allocate the budget, write the two order files.

    Attributes:
        stage_name: Identifier recorded in ``RunMetadata.pipeline_stage``.
        config:     Application configuration for this run.
    """

    stage_name = "reorder"

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run(
        self,
        input_path: Path | str | None,
        budget:     Any,
        output_dir: Path | str | None = None,
        run_date:   date | None = None,
        now:        Optional[datetime] = None,
    ) -> ReorderRun:
        """Execute one reorder run.

        Args:
            input_path: Path to the ``.xlsx`` workbook.  A relative path that
                does not exist as given is looked up under
                ``config.data.input_dir``.
            budget:     Reorder budget (finite, >= 0).
            output_dir: Export directory. Defaults to ``config.data.output_dir``.
            run_date:   Date for export filenames. Defaults to today (UTC).
            now:        Reference time for recency scoring.

        Returns:
            ReorderRun with the result and written file paths.

        Raises:
            InputMissingError, InvalidBudgetError, ParseFailureError,
            EmptyInputError: Re-raised after the run is marked failed.
        """
        run = RunMetadata(
            run_slug=str(uuid4()),
            pipeline_stage=self.stage_name,
            config_snapshot=self.config.model_dump(),
            started_at=utcnow(),
        )
        log = run_logger(logger, run.run_slug, self.stage_name)
        log.info("Stage starting")
        log.debug("Config snapshot: %s", json.dumps(run.config_snapshot, default=str))

        try:
            outcome = self._execute(
                run,
                log,
                input_path=input_path,
                budget=budget,
                output_dir=output_dir,
                run_date=run_date,
                now=now,
            )
        except ReorderPlannerError as exc:
            run.status = "failed"
            run.error_message = str(exc)
            run.finished_at = utcnow()
            log.warning("Stage rejected input: %s", exc)
            raise
        except Exception as exc:
            run.status = "failed"
            run.error_message = str(exc)
            run.finished_at = utcnow()
            log.error("Stage FAILED: %s", exc)
            raise

        run.status = "success"
        run.rows_processed = outcome.input_rows
        run.finished_at = utcnow()
        log.info("Stage completed | rows=%d", outcome.input_rows)
        return outcome

    def _execute(
        self,
        run:        RunMetadata,
        log:        RunLogAdapter,
        input_path: Path | str | None,
        budget:     Any,
        output_dir: Path | str | None,
        run_date:   date | None,
        now:        Optional[datetime],
    ) -> ReorderRun:
        if input_path is None:
            raise InputMissingError()
        path = resolve_input_path(input_path, self.config.data.input_dir)
        if not path.is_file():
            raise InputMissingError(input_path)
        run.source_file = str(path)

        run.budget = validate_budget(budget)

        records = read_first_sheet(path)
        if not records:
            raise EmptyInputError(path.name)

        result = process(records, run.budget, now=now)

        planning = self.config.planning
        target_dir = Path(output_dir) if output_dir else Path(self.config.data.output_dir)
        if run_date is None:
            run_date = utcnow().date()

        reorder_csv = write_export_csv(
            to_export_rows(result.reorders, quantity=planning.export_quantity),
            target_dir / export_filename(planning.reorder_filename_prefix, run_date),
        )
        backlog_csv = write_export_csv(
            to_export_rows(result.backlog, quantity=planning.export_quantity),
            target_dir / export_filename(planning.backlog_filename_prefix, run_date),
        )

        log.info(
            "%s: %d reorder line(s) (%.2f of %.2f), %d backlog line(s) (%.2f)",
            path.name, result.lines_to_reorder, result.total_cost, run.budget,
            result.backlog_lines, result.backlog_cost,
        )
        log.info("Order files written: %s, %s", reorder_csv, backlog_csv)

        return ReorderRun(
            run=run,
            result=result,
            reorder_csv=reorder_csv,
            backlog_csv=backlog_csv,
            input_rows=len(records),
            run_date=run_date,
        )
