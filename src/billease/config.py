"""Runtime settings resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Mapping

from .invoices import DEFAULT_CGST, DEFAULT_SGST
from .utils import parse_decimal

HOME_ENV_VARIABLE = "BILLEASE_HOME"
STORE_ENV_VARIABLE = "BILLEASE_STORE"
LOG_FILE_ENV_VARIABLE = "BILLEASE_LOG_FILE"
CGST_ENV_VARIABLE = "BILLEASE_DEFAULT_CGST"
SGST_ENV_VARIABLE = "BILLEASE_DEFAULT_SGST"

DEFAULT_HOME = Path("~/.billease")
STORE_FILENAME = "invoices.json"
LOG_FILENAME = "billease.log"


@dataclass(frozen=True)
class Settings:
    """Locations and defaults used by the store, the session and the CLI."""

    home: Path
    store_path: Path
    log_file: Path
    default_cgst: Decimal = DEFAULT_CGST
    default_sgst: Decimal = DEFAULT_SGST


def _path_from(environ: Mapping[str, str], name: str, fallback: Path) -> Path:
    raw_value = environ.get(name)
    if raw_value:
        return Path(raw_value).expanduser()
    return fallback


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``environ`` (``os.environ`` by default)."""

    env = os.environ if environ is None else environ

    home = _path_from(env, HOME_ENV_VARIABLE, DEFAULT_HOME.expanduser())
    return Settings(
        home=home,
        store_path=_path_from(env, STORE_ENV_VARIABLE, home / STORE_FILENAME),
        log_file=_path_from(env, LOG_FILE_ENV_VARIABLE, home / "logs" / LOG_FILENAME),
        default_cgst=parse_decimal(env.get(CGST_ENV_VARIABLE), default=DEFAULT_CGST),
        default_sgst=parse_decimal(env.get(SGST_ENV_VARIABLE), default=DEFAULT_SGST),
    )


__all__ = ["Settings", "load_settings"]
