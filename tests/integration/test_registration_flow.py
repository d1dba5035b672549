"""
Integration test for a visitor's journey through a session.

Flow: visit -> browse -> search -> sign in -> register -> confirm -> check in
-> store and reload the session.
"""
import json
from datetime import datetime, timedelta

from eventease.models.attendance import AttendanceType
from eventease.models.event_registration import RegistrationStatus
from eventease.models.user_profile import UserProfile
from eventease.models.user_session import UserSession
from eventease.services.session_activity_service import (
    build_session_summary,
    record_attendance,
    register_for_event,
    search_events,
    sign_in,
    start_session,
    update_registration_status,
    view_event,
)
from eventease.utils.date_utils import format_event_datetime


class FakeClock:
    """Clock advanced manually by the test."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def test_full_visitor_journey():
    """Test a member's complete visit leaves a consistent, storable session."""
    clock = FakeClock(datetime(2025, 8, 15, 13, 0))
    session = start_session(clock=clock)

    view_event(session, 11, clock=clock)
    view_event(session, 12, clock=clock)
    view_event(session, 11, clock=clock)
    search_events(session, "workshop", clock=clock)

    clock.advance(minutes=5)
    profile = UserProfile.create(
        first_name="Ann",
        last_name="Lee",
        email="ann@example.com",
        clock=lambda: datetime(2024, 3, 1, 8, 0),
    )
    assert profile.is_valid()
    sign_in(session, profile, clock=clock)

    success, message = register_for_event(
        session, 11, notes="Vegetarian lunch", clock=clock
    )
    assert (success, message) == (True, "Registration successful")
    registration = session.registrations[0]

    update_registration_status(
        session, registration.registration_id, RegistrationStatus.CONFIRMED, clock=clock
    )

    clock.advance(hours=1, minutes=30)
    record_attendance(session, 11, AttendanceType.LATE, clock=clock)
    update_registration_status(
        session, registration.registration_id, RegistrationStatus.ATTENDED, clock=clock
    )

    assert session.total_events_viewed == 3
    assert session.total_events_registered == 1
    assert session.total_events_attended == 1
    assert session.last_activity == datetime(2025, 8, 15, 14, 35)
    assert format_event_datetime(session.last_activity) == (
        "Friday, August 15, 2025 at 2:35 PM"
    )

    summary = build_session_summary(session, clock())
    assert summary["duration"] == "1h 35m"
    assert summary["member_since"] == "March 2024"

    stored = json.dumps(session.to_dict())
    restored = UserSession.from_dict(json.loads(stored))
    assert restored == session
    assert restored.registrations[0].status == RegistrationStatus.ATTENDED
    assert restored.registrations[0].notes == "Vegetarian lunch"


def test_guest_registration_keeps_profile_separate():
    """Test registering a guest does not alter the member's profile."""
    session = start_session()
    profile = UserProfile.create(
        first_name="Ann", last_name="Lee", email="ann@example.com"
    )
    sign_in(session, profile)

    success, _ = register_for_event(
        session, 20, first_name="Guest", last_name="Kim", email="guest@example.com"
    )

    assert success is True
    assert session.registrations[0].full_name == "Guest Kim"
    assert session.registrations[0].user_id == profile.user_id
    assert profile.full_name == "Ann Lee"
