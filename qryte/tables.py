"""Dine-in table status board."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from qryte.data import seed_tables
from qryte.errors import InvalidTableStatus, UnknownTable
from qryte.models import Table, TableStatus

logger = logging.getLogger(__name__)


def _coerce_status(status: TableStatus | str) -> TableStatus:
    if isinstance(status, TableStatus):
        return status
    try:
        return TableStatus(status)
    except ValueError as exc:
        raise InvalidTableStatus(f"unknown table status {status!r}") from exc


class TableBoard:
    """Tables keyed by their printed number."""

    def __init__(self, tables: Iterable[Table] = ()) -> None:
        self._tables: dict[int, Table] = {}
        for table in tables:
            if table.number in self._tables:
                raise ValueError(f"duplicate table number {table.number}")
            self._tables[table.number] = table

    def get(self, number: int) -> Table:
        table = self._tables.get(number)
        if table is None:
            raise UnknownTable(number)
        return table

    def __contains__(self, number: object) -> bool:
        return number in self._tables

    def list_tables(self) -> list[Table]:
        return sorted(self._tables.values(), key=lambda t: t.number)

    def available_tables(self) -> list[Table]:
        return [t for t in self.list_tables() if t.status is TableStatus.AVAILABLE]

    def set_status(self, number: int, status: TableStatus | str) -> Table:
        table = replace(self.get(number), status=_coerce_status(status))
        self._tables[number] = table
        logger.info("table_status number=%s status=%s", number, table.status.value)
        return table

    def occupy(self, number: int) -> Table:
        return self.set_status(number, TableStatus.OCCUPIED)

    def release(self, number: int) -> Table:
        return self.set_status(number, TableStatus.NEEDS_CLEANING)

    def mark_clean(self, number: int) -> Table:
        return self.set_status(number, TableStatus.AVAILABLE)


def default_table_board() -> TableBoard:
    return TableBoard(seed_tables())
