"""Attendance record data model."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional

from eventease.utils.date_utils import now_local
from eventease.utils.id_utils import generate_id


class AttendanceType(str, Enum):
    """Kind of check-in/out event."""

    CHECK_IN = "CheckIn"
    CHECK_OUT = "CheckOut"
    LATE = "Late"
    EARLY = "Early"


@dataclass
class AttendanceRecord:
    """A timestamped check-in or check-out at an event.

    Kept separate from EventRegistration.attendance_time; the two are not
    reconciled.
    """

    attendance_id: str
    attendance_time: datetime
    event_id: int = 0
    user_id: str = ""
    type: AttendanceType = AttendanceType.CHECK_IN
    notes: Optional[str] = None

    @classmethod
    def create(
        cls,
        event_id: int,
        user_id: str = "",
        attendance_type: AttendanceType = AttendanceType.CHECK_IN,
        notes: Optional[str] = None,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], datetime] = now_local,
    ) -> "AttendanceRecord":
        return cls(
            attendance_id=id_factory(),
            attendance_time=clock(),
            event_id=event_id,
            user_id=user_id,
            type=attendance_type,
            notes=notes,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attendance_id": self.attendance_id,
            "event_id": self.event_id,
            "user_id": self.user_id,
            "attendance_time": self.attendance_time.isoformat(),
            "type": self.type.value,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttendanceRecord":
        return cls(
            attendance_id=data["attendance_id"],
            attendance_time=datetime.fromisoformat(data["attendance_time"]),
            event_id=data.get("event_id", 0),
            user_id=data.get("user_id", ""),
            type=AttendanceType(data.get("type", AttendanceType.CHECK_IN.value)),
            notes=data.get("notes"),
        )
