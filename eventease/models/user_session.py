"""Visitor session data model."""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from eventease.models.event_registration import EventRegistration
from eventease.models.user_profile import UserProfile
from eventease.utils.date_utils import now_local
from eventease.utils.id_utils import generate_id


@dataclass
class UserSession:
    """Short-lived browsing and registration state of one visitor.

    Event lists keep insertion order and allow duplicates; every view,
    registration or attendance is one entry.
    """

    session_id: str
    created_at: datetime
    last_activity: datetime
    user: Optional[UserProfile] = None
    viewed_events: List[int] = field(default_factory=list)
    registered_events: List[int] = field(default_factory=list)
    attended_events: List[int] = field(default_factory=list)
    preferences: Dict[str, str] = field(default_factory=dict)
    last_search_term: Optional[str] = None
    search_history: List[str] = field(default_factory=list)
    registrations: List[EventRegistration] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], datetime] = now_local,
    ) -> "UserSession":
        """Start an anonymous session; created_at and last_activity share one reading."""
        started = clock()
        return cls(session_id=id_factory(), created_at=started, last_activity=started)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def total_events_viewed(self) -> int:
        return len(self.viewed_events)

    @property
    def total_events_registered(self) -> int:
        return len(self.registered_events)

    @property
    def total_events_attended(self) -> int:
        return len(self.attended_events)

    def touch(self, now: datetime) -> None:
        """Mark activity at the given time."""
        self.last_activity = now

    def age(self, now: datetime) -> timedelta:
        """Time elapsed since the session was created."""
        return now - self.created_at

    def add_registration(self, registration: EventRegistration) -> None:
        """
        Append a registration and its event ID.

        Args:
            registration: Registration to record
        """
        self.registrations.append(registration)
        self.registered_events.append(registration.event_id)

    def find_registration(self, registration_id: str) -> Optional[EventRegistration]:
        for registration in self.registrations:
            if registration.registration_id == registration_id:
                return registration
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "created_at": self.created_at.isoformat(),
            "last_activity": self.last_activity.isoformat(),
            "user": self.user.to_dict() if self.user else None,
            "viewed_events": list(self.viewed_events),
            "registered_events": list(self.registered_events),
            "attended_events": list(self.attended_events),
            "preferences": dict(self.preferences),
            "last_search_term": self.last_search_term,
            "search_history": list(self.search_history),
            "registrations": [r.to_dict() for r in self.registrations],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserSession":
        """
        Rebuild a session from to_dict() output.

        Missing collections default to empty (older stored sessions may lack them).

        Raises:
            KeyError: If session_id or created_at is missing
            ValueError: If a timestamp is not ISO 8601
        """
        created_at = datetime.fromisoformat(data["created_at"])
        last_activity = data.get("last_activity")
        user_data = data.get("user")
        return cls(
            session_id=data["session_id"],
            created_at=created_at,
            last_activity=(
                datetime.fromisoformat(last_activity) if last_activity else created_at
            ),
            user=UserProfile.from_dict(user_data) if user_data else None,
            viewed_events=list(data.get("viewed_events", [])),
            registered_events=list(data.get("registered_events", [])),
            attended_events=list(data.get("attended_events", [])),
            preferences=dict(data.get("preferences", {})),
            last_search_term=data.get("last_search_term"),
            search_history=list(data.get("search_history", [])),
            registrations=[
                EventRegistration.from_dict(r) for r in data.get("registrations", [])
            ],
        )
