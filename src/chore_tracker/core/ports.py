# src/chore_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The views depend on a Protocol instead of a concrete store client.
This keeps the hosted backend swappable (PostgREST vs in-memory demo) and makes testing easier.
"""

from typing import Any, Mapping, Protocol

Row = dict[str, Any]
# One record as the store returns it: column name -> JSON value.


class RecordStore(Protocol):
    """
    Generic record store: the only boundary the application talks to.

    Implementations raise store.errors.StoreError for any network/auth/validation failure.
    """

    def select(
            self,
            table: str,
            *,
            filters: Mapping[str, Any] | None = None,
            order_by: str | None = None,
            ascending: bool = True,
    ) -> list[Row]: ...

    def insert(self, table: str, row: Mapping[str, Any]) -> Row: ...

    def update(self, table: str, row_id: str, fields: Mapping[str, Any]) -> list[Row]: ...

    def delete(self, table: str, row_id: str) -> None: ...

    def close(self) -> None: ...
