"""Owner-scoped table store backing the repositories.

Rows are plain dicts keyed by integer id inside named tables. Every read hands
out deep copies, so domain objects built from rows never alias stored state;
changes only land through ``insert``/``update``/``delete``.

``transaction()`` is the unit-of-work scope the engine wraps around every
read-then-write sequence:
  * a re-entrant lock serialises concurrent callers (so two merges for the same
    key cannot both observe "no match");
  * if the block raises, the tables are restored to their state on entry of
    the outermost scope;
  * when a file path is configured, the tables are flushed to JSON once, on
    successful exit of the outermost scope; a failed flush also rolls back.
"""
from __future__ import annotations

import copy
import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

TABLES = ("ingredients", "recipes", "meal_plans", "meal_plan_entries", "grocery_items", "grocery_lists")


class Storage:
    def __init__(self, path: Optional[str | Path] = None):
        self._path = Path(path) if path is not None else None
        self._lock = threading.RLock()
        self._depth = 0
        self._tables: Dict[str, Dict[int, Dict[str, Any]]] = {t: {} for t in TABLES}
        self._next_id: Dict[str, int] = {t: 1 for t in TABLES}
        if self._path is not None:
            self._load()

    # --- Unit of work -----------------------------------------------------
    @contextmanager
    def transaction(self) -> Iterator["Storage"]:
        with self._lock:
            outermost = self._depth == 0
            snapshot = copy.deepcopy((self._tables, self._next_id)) if outermost else None
            self._depth += 1
            try:
                yield self
                if outermost:
                    self._flush()
            except BaseException:
                # also reached when the flush itself fails
                if outermost:
                    self._tables, self._next_id = snapshot
                    logger.debug("Transaction rolled back")
                raise
            finally:
                self._depth -= 1

    # --- Row access -------------------------------------------------------
    def next_id(self, table: str) -> int:
        with self._lock:
            value = self._next_id[table]
            self._next_id[table] = value + 1
            return value

    def insert(self, table: str, row: Dict[str, Any]) -> int:
        with self.transaction():
            row = copy.deepcopy(row)
            if row.get("id") is None:
                row["id"] = self.next_id(table)
            else:
                self._next_id[table] = max(self._next_id[table], row["id"] + 1)
            self._tables[table][row["id"]] = row
            return row["id"]

    def update(self, table: str, row: Dict[str, Any]) -> None:
        with self.transaction():
            if row.get("id") not in self._tables[table]:
                raise KeyError(f"{table} row {row.get('id')} does not exist")
            self._tables[table][row["id"]] = copy.deepcopy(row)

    def get(self, table: str, row_id) -> Optional[Dict[str, Any]]:
        with self._lock:
            row = self._tables[table].get(row_id)
            return copy.deepcopy(row) if row is not None else None

    def delete(self, table: str, row_id) -> bool:
        with self.transaction():
            return self._tables[table].pop(row_id, None) is not None

    def rows(self, table: str) -> List[Dict[str, Any]]:
        """All rows of a table in stored (ascending id) order."""
        with self._lock:
            return [copy.deepcopy(self._tables[table][k]) for k in sorted(self._tables[table])]

    # --- JSON persistence -------------------------------------------------
    def _load(self):
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f) or {}
        except FileNotFoundError:
            logger.info(f"Store file not found: {self._path}. Starting empty.")
            return
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in store file {self._path}: {e}")
            return
        for table in TABLES:
            for row in data.get("tables", {}).get(table, []):
                self._tables[table][row["id"]] = row
            stored_next = data.get("next_id", {}).get(table, 1)
            highest = max(self._tables[table], default=0)
            self._next_id[table] = max(stored_next, highest + 1)

    def _flush(self):
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "tables": {t: [self._tables[t][k] for k in sorted(self._tables[t])] for t in TABLES},
            "next_id": dict(self._next_id),
        }
        with open(self._path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)


__all__ = ["Storage", "TABLES"]
