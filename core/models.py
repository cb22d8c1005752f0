"""
Data records for ShiftCalc application.
Job rate configuration and the result of a shift earnings calculation.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from core.constants import (
    DEFAULT_BASE_RATE,
    DEFAULT_OVERTIME_RATE,
    DEFAULT_SHABBAT_RATE,
    DEFAULT_TRANSPORT_COST,
    DEFAULT_OVERTIME_AFTER,
    DEFAULT_NIGHT_SHIFT_BONUS,
)


@dataclass(frozen=True)
class Job:
    """Rate configuration of a single job (מקום עבודה)."""

    name: str = ""
    base_rate: float = DEFAULT_BASE_RATE
    overtime_rate: float = DEFAULT_OVERTIME_RATE
    shabbat_rate: float = DEFAULT_SHABBAT_RATE
    transport_cost: float = DEFAULT_TRANSPORT_COST
    auto_transport: bool = True
    overtime_after: float = DEFAULT_OVERTIME_AFTER
    night_shift_bonus: float = DEFAULT_NIGHT_SHIFT_BONUS
    location: str = ""
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> Job:
        """Build a Job from a database row (RealDictCursor) or a JSON payload."""
        return cls(
            id=row.get("id"),
            name=row.get("name") or "",
            base_rate=float(row["base_rate"]),
            overtime_rate=float(row.get("overtime_rate", DEFAULT_OVERTIME_RATE)),
            shabbat_rate=float(row.get("shabbat_rate", DEFAULT_SHABBAT_RATE)),
            transport_cost=float(row.get("transport_cost", DEFAULT_TRANSPORT_COST)),
            auto_transport=bool(row.get("auto_transport", True)),
            overtime_after=float(row.get("overtime_after", DEFAULT_OVERTIME_AFTER)),
            night_shift_bonus=float(row.get("night_shift_bonus", DEFAULT_NIGHT_SHIFT_BONUS)),
            location=row.get("location") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ShiftCalculation:
    """Categorized pay breakdown of one shift."""

    base_hours: float
    overtime_hours: float
    shabbat_hours: float
    night_hours: float
    transport_cost: float
    base_earnings: float
    overtime_earnings: float
    shabbat_earnings: float
    night_bonus: float
    total_earnings: float
    total_hours: float = 0.0
    breakdown: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
