"""Tests for EventRegistration and AttendanceRecord models."""
import pytest
from datetime import datetime
from eventease.models.attendance import AttendanceRecord, AttendanceType
from eventease.models.event_registration import EventRegistration, RegistrationStatus
from eventease.models.user_profile import UserProfile


@pytest.fixture
def profile():
    """Create a member profile."""
    return UserProfile(
        user_id="user-1",
        registered_at=datetime(2025, 1, 10, 8, 0),
        first_name="Ann",
        last_name="Lee",
        email="ann@example.com",
        phone="555-0100",
    )


@pytest.fixture
def registration(profile):
    """Create a registration for event 7."""
    return EventRegistration.for_profile(
        profile,
        7,
        id_factory=lambda: "reg-1",
        clock=lambda: datetime(2025, 8, 1, 10, 0),
    )


class TestRegistrationStatus:
    """Tests for the status enum."""

    def test_members_in_order(self):
        """Statuses are declared in intended order, alternates last."""
        assert [s.value for s in RegistrationStatus] == [
            "Registered", "Confirmed", "Attended", "NoShow", "Cancelled"
        ]


class TestEventRegistration:
    """Tests for registration construction and rules."""

    def test_for_profile_copies_contact(self, registration):
        """Contact fields come from the profile."""
        assert registration.registration_id == "reg-1"
        assert registration.event_id == 7
        assert registration.user_id == "user-1"
        assert registration.full_name == "Ann Lee"
        assert registration.email == "ann@example.com"
        assert registration.phone == "555-0100"

    def test_defaults(self, registration):
        """New registration starts Registered with no attendance."""
        assert registration.status == RegistrationStatus.REGISTERED
        assert registration.attendance_time is None
        assert registration.notes is None
        assert registration.registration_date == datetime(2025, 8, 1, 10, 0)

    def test_can_diverge_from_profile(self, registration, profile):
        """Editing the registration leaves the profile untouched."""
        registration.first_name = "Guest"
        assert profile.first_name == "Ann"

    def test_status_set_freely(self, registration):
        """The model applies no transition rules."""
        registration.status = RegistrationStatus.ATTENDED
        registration.status = RegistrationStatus.REGISTERED
        assert registration.status == RegistrationStatus.REGISTERED

    @pytest.mark.parametrize("status,active", [
        (RegistrationStatus.REGISTERED, True),
        (RegistrationStatus.CONFIRMED, True),
        (RegistrationStatus.ATTENDED, True),
        (RegistrationStatus.NO_SHOW, False),
        (RegistrationStatus.CANCELLED, False),
    ])
    def test_is_active(self, registration, status, active):
        """Cancelled and NoShow registrations are inactive."""
        registration.status = status
        assert registration.is_active is active

    def test_valid(self, registration):
        """Registration copied from a valid profile passes."""
        assert registration.is_valid() is True

    def test_notes_500_chars_accepted(self, registration):
        """Notes at the limit pass."""
        registration.notes = "n" * 500
        assert registration.validate() == []

    def test_notes_501_chars_rejected(self, registration):
        """Notes over the limit fail."""
        registration.notes = "n" * 501
        assert [e.message for e in registration.validate()] == [
            "Notes cannot exceed 500 characters"
        ]

    def test_blank_registration_invalid(self):
        """Anonymous blank registration reports required fields."""
        blank = EventRegistration.create(3)
        assert [e.field for e in blank.validate()] == [
            "first_name", "last_name", "email"
        ]

    def test_round_trip_with_attendance_time(self, registration):
        """Serialized registration rebuilds with status and attendance time."""
        registration.status = RegistrationStatus.NO_SHOW
        registration.attendance_time = datetime(2025, 8, 15, 14, 35)
        data = registration.to_dict()
        assert data["status"] == "NoShow"
        assert EventRegistration.from_dict(data) == registration

    def test_from_dict_unknown_status(self, registration):
        """Unknown status text raises ValueError."""
        data = registration.to_dict()
        data["status"] = "Waitlisted"
        with pytest.raises(ValueError):
            EventRegistration.from_dict(data)


class TestAttendanceRecord:
    """Tests for attendance records."""

    def test_create(self):
        """Factory stamps ID and time."""
        record = AttendanceRecord.create(
            7,
            user_id="user-1",
            attendance_type=AttendanceType.LATE,
            id_factory=lambda: "att-1",
            clock=lambda: datetime(2025, 8, 15, 14, 40),
        )
        assert record.attendance_id == "att-1"
        assert record.attendance_time == datetime(2025, 8, 15, 14, 40)
        assert record.type == AttendanceType.LATE
        assert record.notes is None

    def test_default_type_is_check_in(self):
        """Default type is CheckIn."""
        assert AttendanceRecord.create(1).type == AttendanceType.CHECK_IN

    def test_independent_of_registration(self, registration):
        """Creating a record does not set registration attendance time."""
        AttendanceRecord.create(registration.event_id, user_id=registration.user_id)
        assert registration.attendance_time is None

    def test_round_trip(self):
        """Serialized record rebuilds equal."""
        record = AttendanceRecord(
            attendance_id="att-2",
            attendance_time=datetime(2025, 8, 15, 17, 0),
            event_id=7,
            user_id="user-1",
            type=AttendanceType.CHECK_OUT,
            notes="Left after keynote",
        )
        data = record.to_dict()
        assert data["type"] == "CheckOut"
        assert AttendanceRecord.from_dict(data) == record
