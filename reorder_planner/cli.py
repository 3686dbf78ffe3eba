"""
Reorder Planner CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (reorder run, score breakdown, config check).
  5. Report result to stdout.

Install and run::

    pip install -e .
    reorder-planner --help
    reorder-planner validate-config
    reorder-planner plan --file data/input/sales.xlsx --budget 250
    reorder-planner score --file data/input/sales.xlsx --top 20
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="reorder-planner",
    help="Budget-constrained reorder lists from inventory/sales spreadsheets.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from reorder_planner.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from reorder_planner.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("plan")
def plan(
    file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Path to the inventory/sales .xlsx workbook (first sheet is read). "
        "Relative names are also looked up under data.input_dir.",
    ),
    budget: Optional[float] = typer.Option(
        None,
        "--budget",
        "-b",
        help="Reorder budget (total unit cost). Defaults to planning.default_budget.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for the order CSV files. Defaults to data.output_dir.",
    ),
    show_table: bool = typer.Option(
        True,
        "--show-table/--no-show-table",
        help="Print the reorder/backlog table after the summary.",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        help="Max table rows to print (all rows if omitted).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score a workbook, split it under the budget, and write order files.

    \b
    Writes two headerless CSVs (ISBN,Quantity) named with today's date:
      recommended_reorders_YYYY-MM-DD.csv : lines admitted under the budget
      backlog_YYYY-MM-DD.csv              : lines that did not fit
    """
    from reorder_planner.errors import ReorderPlannerError
    from reorder_planner.pipeline.reorder import ReorderStage
    from reorder_planner.reporting.assembler import summarize
    from reorder_planner.reporting.formatters import format_report_table, format_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    target_budget = config.planning.default_budget if budget is None else budget

    try:
        outcome = ReorderStage(config).run(
            input_path=file,
            budget=target_budget,
            output_dir=output_dir,
        )
    except ReorderPlannerError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_summary(summarize(outcome.result), budget=outcome.run.budget))
    if show_table:
        typer.echo(format_report_table(outcome.result, limit=limit))

    typer.echo("")
    typer.echo(f"  Recommended reorders: {outcome.reorder_csv}")
    typer.echo(f"  Backlog:              {outcome.backlog_csv}")
    typer.echo("")
    typer.echo("[OK] Reorder run complete.")


@app.command("score")
def score(
    file: str = typer.Option(
        ...,
        "--file",
        "-f",
        help="Path to the inventory/sales .xlsx workbook.",
    ),
    top: int = typer.Option(
        10,
        "--top",
        "-n",
        help="Number of top-ranked records to break down.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print the per-term score breakdown for the highest-ranked records.

    No budget is applied and no files are written.
    """
    from reorder_planner.allocation.ranker import rank_records
    from reorder_planner.errors import EmptyInputError, InputMissingError, ReorderPlannerError
    from reorder_planner.ingestion.spreadsheet import read_first_sheet
    from reorder_planner.pipeline.reorder import resolve_input_path
    from reorder_planner.reporting.formatters import format_score_breakdown

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    path = resolve_input_path(file, config.data.input_dir)
    try:
        if not path.is_file():
            raise InputMissingError(file)
        records = read_first_sheet(path)
        if not records:
            raise EmptyInputError(path.name)
    except ReorderPlannerError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    ranked = rank_records(records)
    typer.echo(f"Scored {len(ranked)} record(s) from {path.name}.")
    typer.echo(format_score_breakdown(ranked, top=top))


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Input dir:        {config.data.input_dir}")
    typer.echo(f"  Output dir:       {config.data.output_dir}")
    typer.echo(f"  Default budget:   {config.planning.default_budget:.2f}")
    typer.echo(f"  Export quantity:  {config.planning.export_quantity}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
