"""
Logging setup for the Reorder Planner.

``configure_logging(config)`` runs once at CLI entry.  Library modules only
ever call ``logging.getLogger(__name__)``.

Stage code logs through ``run_logger(logger, run_slug, stage)``, which tags
each record with the run's ``run_slug`` and ``stage``.  Text output appends
the tags to the message::

    2026-02-24T15:00:00Z [INFO] reorder_planner.pipeline.reorder: Stage starting | run_slug=... stage=reorder

JSON output (``json_format = true`` in config/default.toml [logging]) carries
them as top-level keys::

    {"ts": "...", "level": "INFO", "logger": "...", "msg": "Stage starting",
     "run_slug": "...", "stage": "reorder"}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, MutableMapping

if TYPE_CHECKING:
    from reorder_planner.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Record attributes set by RunLogAdapter, in output order.
RUN_FIELDS: tuple[str, ...] = ("run_slug", "stage")


class RunLogAdapter(logging.LoggerAdapter):
    """Logger adapter that stamps every record with the run's tags.

    Call-site ``extra=`` values are merged over the adapter's own.
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def run_logger(logger: logging.Logger, run_slug: str, stage: str) -> RunLogAdapter:
    """Wrap ``logger`` so its records carry ``run_slug`` and ``stage``."""
    return RunLogAdapter(logger, {"run_slug": run_slug, "stage": stage})


def _run_tags(record: logging.LogRecord) -> dict[str, Any]:
    return {key: getattr(record, key) for key in RUN_FIELDS if hasattr(record, key)}


class _TextFormatter(logging.Formatter):
    """``LOG_FORMAT`` plus a trailing ``| run_slug=... stage=...`` when tagged."""

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        tags = _run_tags(record)
        if not tags:
            return line
        return line + " | " + " ".join(f"{k}={v}" for k, v in tags.items())


class _JsonFormatter(logging.Formatter):
    """One JSON object per line: ``ts``, ``level``, ``logger``, ``msg``, run tags."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(_run_tags(record))
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: "LoggingConfig", debug: bool = False) -> None:
    """Configure the root logger from a ``LoggingConfig`` instance.

    Args:
        config: Logging section of ``AppConfig``.
        debug:  ``AppConfig.debug``; forces DEBUG level when set.
    """
    level = logging.DEBUG if debug else getattr(logging, config.level, logging.INFO)

    formatter: logging.Formatter = (
        _JsonFormatter()
        if config.json_format
        else _TextFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.getLogger("openpyxl").setLevel(logging.WARNING)
