"""Persistent, id-keyed collection of saved invoices.

The whole collection lives in one JSON document::

    {"version": 2, "invoices": [{...}, ...]}

Older builds wrote a bare list of records (version 1); it is still read and
is upgraded on the next write. Writes go through a temporary file and
``os.replace`` so a failed write never leaves a half-written document.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterator

from .invoices import Invoice, InvoiceFormatError, invoice_from_dict, invoice_to_dict

LOGGER = logging.getLogger("billease.store")

CURRENT_VERSION = 2
LEGACY_VERSION = 1
CORRUPT_SUFFIX = ".corrupt"


class StoreError(Exception):
    """Base error for invoice store failures."""


class StoreWriteError(StoreError):
    """The collection could not be written; nothing was committed."""


class StoreFormatError(StoreError):
    """The stored document does not have a recognised shape."""


class InvoiceStore:
    """Authoritative in-memory copy of the saved invoices, flushed on mutation.

    Parameters
    ----------
    path:
        JSON file holding the collection. It is created on the first write.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._invoices: list[Invoice] = self._read()

    def __len__(self) -> int:
        return len(self._invoices)

    def __contains__(self, invoice_id: object) -> bool:
        return self._index_of(invoice_id) is not None

    def __iter__(self) -> Iterator[Invoice]:
        return iter(self.list())

    def list(self) -> list[Invoice]:
        """Return copies of the saved invoices in storage order."""

        return [invoice.copy() for invoice in self._invoices]

    def load(self, invoice_id: str) -> Invoice | None:
        """Return a copy of the invoice with ``invoice_id`` or ``None``."""

        index = self._index_of(invoice_id)
        if index is None:
            return None
        return self._invoices[index].copy()

    def save(self, invoice: Invoice) -> None:
        """Insert ``invoice`` or replace the entry with the same id in place."""

        if not isinstance(invoice.id, str) or not invoice.id:
            raise ValueError("Cannot save an invoice without an id")

        updated = list(self._invoices)
        index = self._index_of(invoice.id)
        if index is None:
            updated.append(invoice.copy())
            LOGGER.info("Invoice %s added", invoice.id)
        else:
            updated[index] = invoice.copy()
            LOGGER.info("Invoice %s updated", invoice.id)
        self._commit(updated)

    def delete(self, invoice_id: str) -> bool:
        """Remove the invoice with ``invoice_id``; unknown ids are ignored.

        Returns ``True`` when an entry was removed.
        """

        index = self._index_of(invoice_id)
        if index is None:
            LOGGER.debug("Delete ignored, invoice %s not found", invoice_id)
            return False

        updated = list(self._invoices)
        del updated[index]
        self._commit(updated)
        LOGGER.info("Invoice %s deleted", invoice_id)
        return True

    def reload(self) -> None:
        """Discard the in-memory copy and read the file again."""

        self._invoices = self._read()

    def _index_of(self, invoice_id: object) -> int | None:
        for index, invoice in enumerate(self._invoices):
            if invoice.id == invoice_id:
                return index
        return None

    def _commit(self, invoices: list[Invoice]) -> None:
        self._write(invoices)
        self._invoices = invoices

    def _write(self, invoices: list[Invoice]) -> None:
        document = {
            "version": CURRENT_VERSION,
            "invoices": [invoice_to_dict(invoice) for invoice in invoices],
        }

        temp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                json.dump(document, handle, indent=2, ensure_ascii=False)
                handle.write("\n")
            os.replace(temp_name, self.path)
        except OSError as exc:
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)
            LOGGER.error("Could not write %s: %s", self.path, exc)
            raise StoreWriteError(f"Could not save invoices to {self.path}: {exc}") from exc

    def _read(self) -> list[Invoice]:
        if not self.path.exists():
            return []

        try:
            with self.path.open("r", encoding="utf-8") as handle:
                document = json.load(handle, parse_float=Decimal)
            invoices = decode_document(document)
        except (
            OSError,
            ValueError,
            RecursionError,
            StoreFormatError,
            InvoiceFormatError,
        ) as exc:
            LOGGER.warning("Stored invoices in %s are unreadable (%s); starting empty", self.path, exc)
            self._set_aside()
            return []

        LOGGER.debug("Loaded %d invoices from %s", len(invoices), self.path)
        return invoices

    def _set_aside(self) -> None:
        backup = self.path.with_name(self.path.name + CORRUPT_SUFFIX)
        try:
            shutil.copy2(self.path, backup)
        except OSError as exc:
            LOGGER.warning("Could not keep a copy of %s: %s", self.path, exc)
        else:
            LOGGER.info("Unreadable store copied to %s", backup)


def decode_document(document: Any) -> list[Invoice]:
    """Turn a parsed JSON document of any known version into invoices.

    Records sharing an id keep the first position and the first content.
    """

    if isinstance(document, list):
        version = LEGACY_VERSION
        records = document
    elif isinstance(document, dict):
        version = document.get("version", LEGACY_VERSION)
        records = document.get("invoices", [])
    else:
        raise StoreFormatError(f"Unexpected top-level {type(document).__name__}")

    if not isinstance(records, list):
        raise StoreFormatError("'invoices' must be a list")
    if isinstance(version, int) and version > CURRENT_VERSION:
        LOGGER.warning("Store version %s is newer than %s; reading anyway", version, CURRENT_VERSION)

    invoices: list[Invoice] = []
    seen: set[str] = set()
    for record in records:
        invoice = invoice_from_dict(record)
        if invoice.id in seen:
            LOGGER.warning("Duplicate invoice id %s ignored", invoice.id)
            continue
        seen.add(invoice.id)
        invoices.append(invoice)
    return invoices


__all__ = [
    "CURRENT_VERSION",
    "InvoiceStore",
    "StoreError",
    "StoreFormatError",
    "StoreWriteError",
    "decode_document",
]
