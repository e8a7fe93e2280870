"""
Snapshot Store — "confirm before regenerating".

A snapshot is the (price, flow spec) pair captured when the operator uses a
price or generates a quote. Exactly one snapshot is kept per key; capturing
overwrites it. diff() reports what moved between two snapshots so the caller
can show it before persisting anything.

Storage is any key-value medium with get(key) / set(key, dict).
"""

import logging
import math
from datetime import datetime
from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from .line_items import EngineState, ProductFamily
from .models import EstimateSnapshot

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"

# Compared fields, in display order
FLOW_LABELS = {
    "capacity": "Capacity (m3/h)",
    "head": "Head (mlc)",
    "power": "Power (kW)",
    "description": "Description",
}


class FlowSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    capacity: Optional[float] = None  # m3/h
    head: Optional[float] = None      # metres liquid column
    power: Optional[float] = None     # kW
    description: Optional[str] = None


class Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    price_per_unit: float
    currency: str = "NOK"
    flow_spec: FlowSpec = FlowSpec()
    family: Optional[ProductFamily] = None
    catalog_version: str = ""
    captured_at: Optional[datetime] = None


class ChangedField(BaseModel):
    label: str
    from_value: str
    to_value: str

    def __str__(self) -> str:
        return f"{self.label}: {self.from_value} → {self.to_value}"


class SnapshotDiff(BaseModel):
    has_previous: bool = False
    price_delta: float = 0.0
    changed_fields: list[ChangedField] = []

    @property
    def has_changes(self) -> bool:
        return bool(self.changed_fields) or self.price_delta != 0


def normalize_value(value) -> str:
    """String form used for comparison. 10, 10.0 and '10 ' all compare equal."""
    if value is None:
        return PLACEHOLDER
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return str(value)
    text = str(value).strip()
    if not text:
        return PLACEHOLDER
    try:
        number = float(text)
    except ValueError:
        return text
    if math.isfinite(number) and number.is_integer():
        return str(int(number))
    return text


def build_snapshot(state: EngineState, resolved_price: float, currency: str,
                   flow_spec: Optional[FlowSpec] = None) -> Snapshot:
    return Snapshot(
        price_per_unit=resolved_price,
        currency=currency,
        flow_spec=flow_spec or FlowSpec(),
        family=state.family,
        catalog_version=state.catalog_version,
    )


def diff(previous: Optional[Snapshot], current: Snapshot) -> SnapshotDiff:
    """What changed from previous to current. No previous snapshot → nothing to compare."""
    if previous is None:
        return SnapshotDiff(has_previous=False)

    changed = []
    price_delta = current.price_per_unit - previous.price_per_unit
    if previous.currency != current.currency:
        # Prices in different currencies don't subtract; the currency row carries the change
        price_delta = 0.0
        changed.append(ChangedField(
            label="Currency", from_value=previous.currency, to_value=current.currency,
        ))
    for name, label in FLOW_LABELS.items():
        before = normalize_value(getattr(previous.flow_spec, name))
        after = normalize_value(getattr(current.flow_spec, name))
        if before != after:
            changed.append(ChangedField(label=label, from_value=before, to_value=after))

    return SnapshotDiff(
        has_previous=True,
        price_delta=price_delta,
        changed_fields=changed,
    )


# --- Storage ---

class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[dict]: ...

    def set(self, key: str, value: dict) -> None: ...


class InMemorySnapshotStorage:
    def __init__(self):
        self._slots: dict[str, dict] = {}

    def get(self, key: str) -> Optional[dict]:
        return self._slots.get(key)

    def set(self, key: str, value: dict) -> None:
        self._slots[key] = value


class SqlSnapshotStorage:
    """One row per key in estimate_snapshots. Commits on every set."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[dict]:
        row = self.db.query(EstimateSnapshot).filter(EstimateSnapshot.key == key).first()
        return row.snapshot_json if row else None

    def set(self, key: str, value: dict) -> None:
        row = self.db.query(EstimateSnapshot).filter(EstimateSnapshot.key == key).first()
        if row is None:
            row = EstimateSnapshot(key=key, snapshot_json=value)
            self.db.add(row)
        else:
            row.snapshot_json = value
            row.captured_at = datetime.utcnow()
        self.db.commit()


class SnapshotStore:
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def capture(self, key: str, state: EngineState, resolved_price: float, currency: str,
                flow_spec: Optional[FlowSpec] = None) -> Snapshot:
        """Build a snapshot and overwrite the slot for key."""
        snapshot = build_snapshot(state, resolved_price, currency, flow_spec)
        snapshot = snapshot.model_copy(update={"captured_at": datetime.utcnow()})
        self.storage.set(key, snapshot.model_dump(mode="json"))
        logger.info("Snapshot captured for %s: %s %s", key, currency, resolved_price)
        return snapshot

    def last(self, key: str) -> Optional[Snapshot]:
        data = self.storage.get(key)
        if data is None:
            return None
        return Snapshot.model_validate(data)

    def compare(self, key: str, candidate: Snapshot) -> SnapshotDiff:
        """Diff a candidate against the stored slot without writing it."""
        return diff(self.last(key), candidate)

    build_snapshot = staticmethod(build_snapshot)
    diff = staticmethod(diff)
