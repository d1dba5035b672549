"""Event registration data model."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from eventease.models.user_profile import UserProfile
from eventease.utils.date_utils import now_local
from eventease.utils.exceptions import ValidationError
from eventease.utils.id_utils import generate_id
from eventease.utils.validation import REGISTRATION_RULES, FieldError, validate_record


class RegistrationStatus(str, Enum):
    """Lifecycle tag of a registration.

    Intended progression is Registered -> Confirmed -> Attended, with NoShow
    and Cancelled as alternate outcomes. Nothing here enforces it.
    """

    REGISTERED = "Registered"
    CONFIRMED = "Confirmed"
    ATTENDED = "Attended"
    NO_SHOW = "NoShow"
    CANCELLED = "Cancelled"


@dataclass
class EventRegistration:
    """One registrant's record for one event.

    Contact fields are stored on the registration itself so they may differ
    from the member's profile (e.g., someone registering a guest).
    """

    registration_id: str
    registration_date: datetime
    event_id: int = 0
    user_id: str = ""
    status: RegistrationStatus = RegistrationStatus.REGISTERED
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    attendance_time: Optional[datetime] = None
    notes: Optional[str] = None

    @classmethod
    def create(
        cls,
        event_id: int,
        user_id: str = "",
        first_name: str = "",
        last_name: str = "",
        email: str = "",
        phone: str = "",
        notes: Optional[str] = None,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], datetime] = now_local,
    ) -> "EventRegistration":
        """Build a new registration with a fresh ID, dated now, status Registered."""
        return cls(
            registration_id=id_factory(),
            registration_date=clock(),
            event_id=event_id,
            user_id=user_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            notes=notes,
        )

    @classmethod
    def for_profile(
        cls,
        profile: UserProfile,
        event_id: int,
        notes: Optional[str] = None,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], datetime] = now_local,
    ) -> "EventRegistration":
        """
        Build a registration pre-filled from a member profile.

        Args:
            profile: Member registering themselves
            event_id: Event to register for
            notes: Free-text notes (optional)
            id_factory: Source of the registration ID
            clock: Source of the registration date

        Returns:
            EventRegistration carrying the profile's user ID and contact fields
        """
        return cls.create(
            event_id=event_id,
            user_id=profile.user_id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            phone=profile.phone,
            notes=notes,
            id_factory=id_factory,
            clock=clock,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_active(self) -> bool:
        """False once the registration ended as Cancelled or NoShow."""
        return self.status not in (RegistrationStatus.CANCELLED, RegistrationStatus.NO_SHOW)

    def validate(self) -> List[FieldError]:
        """Evaluate the registration field rules."""
        return validate_record(self, REGISTRATION_RULES)

    def is_valid(self) -> bool:
        return not self.validate()

    def ensure_valid(self) -> None:
        errors = self.validate()
        if errors:
            raise ValidationError(errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "registration_id": self.registration_id,
            "event_id": self.event_id,
            "user_id": self.user_id,
            "registration_date": self.registration_date.isoformat(),
            "status": self.status.value,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "attendance_time": (
                self.attendance_time.isoformat() if self.attendance_time else None
            ),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventRegistration":
        """
        Rebuild a registration from to_dict() output.

        Raises:
            KeyError: If registration_id or registration_date is missing
            ValueError: If a timestamp is not ISO 8601 or the status is unknown
        """
        attendance_time = data.get("attendance_time")
        return cls(
            registration_id=data["registration_id"],
            registration_date=datetime.fromisoformat(data["registration_date"]),
            event_id=data.get("event_id", 0),
            user_id=data.get("user_id", ""),
            status=RegistrationStatus(data.get("status", RegistrationStatus.REGISTERED.value)),
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            attendance_time=(
                datetime.fromisoformat(attendance_time) if attendance_time else None
            ),
            notes=data.get("notes"),
        )
