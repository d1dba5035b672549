"""Session activity service: applies visitor actions to a UserSession."""
import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Tuple

from eventease.models.attendance import AttendanceRecord, AttendanceType
from eventease.models.event_registration import EventRegistration, RegistrationStatus
from eventease.models.user_profile import UserProfile
from eventease.models.user_session import UserSession
from eventease.utils.date_utils import (
    format_member_since,
    format_session_duration,
    format_session_time,
    now_local,
)
from eventease.utils.exceptions import RegistrationNotFoundError
from eventease.utils.id_utils import generate_id

logger = logging.getLogger(__name__)

# Idle time after which a session store may discard a session
SESSION_TIMEOUT = timedelta(minutes=20)

# Attendance types that mean the visitor showed up
ARRIVAL_TYPES = (AttendanceType.CHECK_IN, AttendanceType.LATE)

REGISTRATION_SUCCESS = "Registration successful"
REGISTRATION_NOT_FOUND = "Registration not found"


def start_session(
    clock: Callable[[], datetime] = now_local,
    id_factory: Callable[[], str] = generate_id,
) -> UserSession:
    """Create an anonymous session for a first visit."""
    session = UserSession.create(id_factory=id_factory, clock=clock)
    logger.info(f"Session started: {session.session_id}")
    return session


def sign_in(
    session: UserSession,
    profile: UserProfile,
    clock: Callable[[], datetime] = now_local,
) -> None:
    """Link a member profile to the session."""
    session.user = profile
    session.touch(clock())
    logger.info(f"Session {session.session_id} signed in as {profile.user_id}")


def sign_out(session: UserSession, clock: Callable[[], datetime] = now_local) -> None:
    session.user = None
    session.touch(clock())
    logger.info(f"Session {session.session_id} signed out")


def view_event(
    session: UserSession,
    event_id: int,
    clock: Callable[[], datetime] = now_local,
) -> None:
    """Record an event page view (repeat views are kept)."""
    session.viewed_events.append(event_id)
    session.touch(clock())


def search_events(
    session: UserSession,
    term: str,
    clock: Callable[[], datetime] = now_local,
) -> bool:
    """
    Record a search.

    Args:
        session: Visitor session
        term: Search text as typed

    Returns:
        True if recorded, False if the term was blank

    Behavior:
        - Stores the stripped term as last_search_term
        - Appends it to search_history (repeats are kept)
    """
    if term is None or not term.strip():
        return False

    cleaned = term.strip()
    session.last_search_term = cleaned
    session.search_history.append(cleaned)
    session.touch(clock())
    return True


def set_preference(
    session: UserSession,
    key: str,
    value: str,
    clock: Callable[[], datetime] = now_local,
) -> None:
    session.preferences[key] = value
    session.touch(clock())


def register_for_event(
    session: UserSession,
    event_id: int,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    notes: Optional[str] = None,
    clock: Callable[[], datetime] = now_local,
    id_factory: Callable[[], str] = generate_id,
) -> Tuple[bool, str]:
    """
    Register the visitor (or a guest) for an event.

    Args:
        session: Visitor session
        event_id: Event to register for
        first_name, last_name, email, phone: Contact fields; None falls back
            to the signed-in profile's value (or "" when anonymous)
        notes: Free-text notes (optional)

    Returns:
        Tuple of (success: bool, message: str)
        - (True, "Registration successful") on success
        - (False, first validation message) when a field rule fails

    Behavior:
        - Validates with the registration rule table
        - On failure the session is left unchanged
        - Duplicate registrations for the same event are allowed
    """
    now = clock()
    profile = session.user
    if profile is not None:
        registration = EventRegistration.for_profile(
            profile, event_id, notes=notes, id_factory=id_factory, clock=lambda: now
        )
    else:
        registration = EventRegistration.create(
            event_id, notes=notes, id_factory=id_factory, clock=lambda: now
        )

    if first_name is not None:
        registration.first_name = first_name
    if last_name is not None:
        registration.last_name = last_name
    if email is not None:
        registration.email = email
    if phone is not None:
        registration.phone = phone

    errors = registration.validate()
    if errors:
        logger.warning(
            f"Registration for event {event_id} rejected: "
            f"{', '.join(error.field for error in errors)}"
        )
        return False, errors[0].message

    session.add_registration(registration)
    session.touch(now)
    logger.info(
        f"Registration {registration.registration_id} created for event {event_id}"
    )
    return True, REGISTRATION_SUCCESS


def get_registration(session: UserSession, registration_id: str) -> EventRegistration:
    """
    Look up a registration in the session.

    Raises:
        RegistrationNotFoundError: If no registration has this ID
    """
    registration = session.find_registration(registration_id)
    if registration is None:
        raise RegistrationNotFoundError(f"Registration not found: {registration_id}")
    return registration


def update_registration_status(
    session: UserSession,
    registration_id: str,
    status: RegistrationStatus,
    clock: Callable[[], datetime] = now_local,
) -> Tuple[bool, str]:
    """
    Set a registration's status.

    Any status may follow any other; ordering is left to the caller.

    Returns:
        Tuple of (success: bool, message: str)
        - (True, "Status updated to <status>") on success
        - (False, "Registration not found") for an unknown ID
    """
    try:
        registration = get_registration(session, registration_id)
    except RegistrationNotFoundError:
        logger.warning(f"Status update for unknown registration {registration_id}")
        return False, REGISTRATION_NOT_FOUND

    previous = registration.status
    registration.status = status
    session.touch(clock())
    logger.info(
        f"Registration {registration_id} status {previous.value} -> {status.value}"
    )
    return True, f"Status updated to {status.value}"


def cancel_registration(
    session: UserSession,
    registration_id: str,
    clock: Callable[[], datetime] = now_local,
) -> Tuple[bool, str]:
    return update_registration_status(
        session, registration_id, RegistrationStatus.CANCELLED, clock=clock
    )


def record_attendance(
    session: UserSession,
    event_id: int,
    attendance_type: AttendanceType = AttendanceType.CHECK_IN,
    notes: Optional[str] = None,
    clock: Callable[[], datetime] = now_local,
    id_factory: Callable[[], str] = generate_id,
) -> AttendanceRecord:
    """
    Record a check-in/out for the session's visitor.

    Args:
        session: Visitor session
        event_id: Event attended
        attendance_type: Kind of attendance event
        notes: Free-text notes (optional)

    Returns:
        The new AttendanceRecord

    Behavior:
        - Arrival types (CheckIn, Late) append event_id to attended_events
        - Registration attendance_time is not modified
    """
    now = clock()
    user_id = session.user.user_id if session.user else ""
    record = AttendanceRecord.create(
        event_id,
        user_id=user_id,
        attendance_type=attendance_type,
        notes=notes,
        id_factory=id_factory,
        clock=lambda: now,
    )
    if attendance_type in ARRIVAL_TYPES:
        session.attended_events.append(event_id)
    session.touch(now)
    logger.info(
        f"Attendance {attendance_type.value} for event {event_id} "
        f"in session {session.session_id}"
    )
    return record


def is_session_expired(
    session: UserSession,
    now: datetime,
    timeout: timedelta = SESSION_TIMEOUT,
) -> bool:
    """True once idle time exceeds the timeout (an idle time equal to it is still live)."""
    return now - session.last_activity > timeout


def build_session_summary(session: UserSession, now: datetime) -> Dict[str, str]:
    """
    Build display strings for a session dashboard.

    Args:
        session: Visitor session
        now: Current time

    Returns:
        dict with "started", "last_activity" and "duration", plus
        "member_since" when a profile is linked
    """
    summary = {
        "started": format_session_time(session.created_at),
        "last_activity": format_session_time(session.last_activity),
        "duration": format_session_duration(session.age(now)),
    }
    if session.user is not None:
        summary["member_since"] = format_member_since(session.user.registered_at)
    return summary
