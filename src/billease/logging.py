"""Logging setup and tabular export helpers.

:func:`configure_logging` installs the rotating file log used by the command
line tools. :class:`ExcelLogger` writes rows (for example validation issues)
to a spreadsheet with :mod:`openpyxl`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Protocol, Sequence

LOGGER_NAME = "billease"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(log_file: Path | None = None, *, level: int = logging.INFO) -> logging.Logger:
    """Attach a rotating file handler to the ``billease`` logger once.

    Without ``log_file`` the records go to ``stderr`` instead.
    """

    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler: logging.Handler
        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                log_file,
                maxBytes=1_000_000,
                backupCount=5,
                encoding="utf-8",
            )
        else:
            handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(level)
    logging.captureWarnings(True)
    return logger


class RowLike(Protocol):
    """Protocol for rows serialisable to a sheet."""

    def as_cells(self) -> Iterable[str]:
        """Return the ordered cell values."""


@dataclass(slots=True)
class ExcelLoggerConfig:
    """Configuration used by :class:`ExcelLogger`."""

    columns: Sequence[str]
    filename: str = "billease-log.xlsx"
    title: str = "Log"


class ExcelLogger:
    """Write rows to an Excel workbook using :mod:`openpyxl`.

    Each call to :meth:`write_rows` creates a new workbook with the header
    from :class:`ExcelLoggerConfig` followed by the rows received.
    """

    def __init__(self, config: ExcelLoggerConfig) -> None:
        self.config = config

    def write_rows(self, rows: Iterable[RowLike | Iterable[str]]) -> Path:
        """Persist ``rows`` to the configured file and return its path."""

        from openpyxl import Workbook

        destination = Path(self.config.filename)
        destination.parent.mkdir(parents=True, exist_ok=True)

        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = self.config.title

        if self.config.columns:
            worksheet.append(list(self.config.columns))

        for row in rows:
            if hasattr(row, "as_cells"):
                cells = list(row.as_cells())  # type: ignore[union-attr]
            else:
                cells = list(row)  # type: ignore[arg-type]
            worksheet.append(cells)

        workbook.save(destination)
        return destination


__all__ = ["LOGGER_NAME", "configure_logging", "RowLike", "ExcelLoggerConfig", "ExcelLogger"]
