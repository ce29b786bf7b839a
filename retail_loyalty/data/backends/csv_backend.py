from __future__ import annotations

import json
import threading
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

import pandas as pd
from pydantic import BaseModel

from ...config import get_config
from ...logging import get_logger
from ..errors import DataAccessError, DuplicateRecordError, RecordNotFoundError
from ..interface import DataAccess
from ..models import (
    BillingFilters, WorkOrderFilters, BillingRecord, PrivilegeCard, WorkOrderRecord
)

_TABLES: Dict[str, Type[BaseModel]] = {
    "privilege_cards": PrivilegeCard,
    "billing": BillingRecord,
    "work_orders": WorkOrderRecord,
}

# Nested values are stored as JSON text
_JSON_COLUMNS: Dict[str, tuple[str, ...]] = {
    "work_orders": ("product_entries", "patient_details"),
}


class CsvDataAccess(DataAccess):
    """
    CSV-backed implementation.
    - One CSV per table under `data_dir` (`privilege_cards.csv`, `billing.csv`, `work_orders.csv`).
    - Every call re-reads the file, so several app sessions see each other's writes.
    - A missing file reads as an empty table; the directory is created on first write.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            config = get_config()
            data_dir = config.data_dir

        self.data_dir = Path(data_dir)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            # Look up the directory tree for pyproject.toml
            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            self.data_dir = (repo_root or current) / self.data_dir

        self.logger = get_logger(__name__)
        self._lock = threading.RLock()

    # ---------- table helpers ----------

    def _path(self, table: str) -> Path:
        return self.data_dir / f"{table}.csv"

    def _read_table(self, table: str) -> pd.DataFrame:
        path = self._path(table)
        columns = list(_TABLES[table].model_fields)
        if not path.exists():
            return pd.DataFrame(columns=columns)
        try:
            # Everything as text: card numbers keep leading zeros, models do the typing
            return pd.read_csv(path, dtype=str, keep_default_na=False)
        except (OSError, ValueError) as e:
            raise DataAccessError(
                f"Error reading {path}: {e}\n"
                f"Please check that the CSV file is valid and readable."
            ) from e

    def _write_table(self, table: str, df: pd.DataFrame) -> None:
        path = self._path(table)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        columns = list(_TABLES[table].model_fields)
        df.reindex(columns=columns).to_csv(path, index=False)
        self.logger.debug(f"Wrote {len(df)} rows to {path}")

    def _to_row(self, table: str, record: BaseModel) -> Dict[str, Any]:
        row = record.model_dump(mode="json")
        for col in _JSON_COLUMNS.get(table, ()):
            row[col] = "" if row[col] is None else json.dumps(row[col])
        return {k: ("" if v is None else v) for k, v in row.items()}

    def _from_row(self, table: str, row: Dict[str, Any]) -> BaseModel:
        # Empty cells fall back to the model defaults
        data = {k: v for k, v in row.items() if v != "" and not pd.isna(v)}
        for col in _JSON_COLUMNS.get(table, ()):
            if col in data:
                data[col] = json.loads(data[col])
        return _TABLES[table].model_validate(data)

    def _append(self, table: str, record: BaseModel) -> None:
        df = self._read_table(table)
        new = pd.DataFrame([self._to_row(table, record)])
        out = new if df.empty else pd.concat([df, new], ignore_index=True)
        self._write_table(table, out)

    @staticmethod
    def _filtered(df: pd.DataFrame, start_ts, end_ts, column: str, values) -> pd.DataFrame:
        if df.empty:
            return df
        ts = pd.to_datetime(df["created_at"], errors="coerce")
        mask = pd.Series(True, index=df.index)
        if start_ts is not None:
            mask &= ts >= pd.to_datetime(start_ts)
        if end_ts is not None:
            mask &= ts <= pd.to_datetime(end_ts)
        if values is not None:
            wanted = values if isinstance(values, list) else [values]
            mask &= df[column].isin([str(v) for v in wanted])
        return df.loc[mask].assign(_ts=ts[mask]).sort_values("_ts", kind="stable").drop(columns="_ts")

    # ---------- privilege cards ----------

    def get_privilege_card(self, pc_number: str) -> Optional[PrivilegeCard]:
        df = self._read_table("privilege_cards")
        match = df[df["pc_number"] == str(pc_number)]
        if match.empty:
            return None
        return self._from_row("privilege_cards", match.iloc[0].to_dict())

    def find_privilege_card_by_customer(self, customer_id: str) -> Optional[PrivilegeCard]:
        df = self._read_table("privilege_cards")
        match = df[df["customer_id"] == str(customer_id)]
        if match.empty:
            return None
        return self._from_row("privilege_cards", match.iloc[0].to_dict())

    def create_privilege_card(self, card: PrivilegeCard) -> PrivilegeCard:
        with self._lock:
            if self.get_privilege_card(card.pc_number) is not None:
                raise DuplicateRecordError(f"Privilege card {card.pc_number} already exists")
            self._append("privilege_cards", card)
        self.logger.info(f"Privilege card {card.pc_number} created for customer {card.customer_id}")
        return card

    def update_loyalty_points(self, pc_number: str, points: Decimal) -> PrivilegeCard:
        with self._lock:
            df = self._read_table("privilege_cards")
            mask = df["pc_number"] == str(pc_number)
            if not mask.any():
                raise RecordNotFoundError(f"Privilege card {pc_number} not found")
            df.loc[mask, "loyalty_points"] = str(points)
            self._write_table("privilege_cards", df)
            card = self._from_row("privilege_cards", df.loc[mask].iloc[0].to_dict())
        self.logger.info(f"Privilege card {pc_number} balance set to {points}")
        return card

    # ---------- billing ----------

    def create_billing_record(self, record: BillingRecord) -> BillingRecord:
        with self._lock:
            self._append("billing", record)
        return record

    def list_billing_records(self, filters: Optional[BillingFilters] = None) -> List[BillingRecord]:
        filters = filters or BillingFilters()
        df = self._filtered(
            self._read_table("billing"), filters.start_ts, filters.end_ts, "customer_id", filters.customer_id
        )
        return [self._from_row("billing", row) for row in df.to_dict(orient="records")]

    # ---------- work orders ----------

    def create_work_order(self, order: WorkOrderRecord) -> WorkOrderRecord:
        with self._lock:
            df = self._read_table("work_orders")
            if (df["work_order_id"] == order.work_order_id).any():
                raise DuplicateRecordError(f"Work order {order.work_order_id} already exists")
            self._append("work_orders", order)
        self.logger.info(f"Work order {order.work_order_id} saved (total={order.total_amount})")
        return order

    def count_work_orders(self) -> int:
        return int(len(self._read_table("work_orders")))

    def list_work_orders(self, filters: Optional[WorkOrderFilters] = None) -> List[WorkOrderRecord]:
        filters = filters or WorkOrderFilters()
        df = self._filtered(
            self._read_table("work_orders"), filters.start_ts, filters.end_ts, "employee", filters.employee
        )
        return [self._from_row("work_orders", row) for row in df.to_dict(orient="records")]
