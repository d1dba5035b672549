"""User profile data model."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from eventease.utils.date_utils import now_local
from eventease.utils.exceptions import ValidationError
from eventease.utils.id_utils import generate_id
from eventease.utils.validation import PROFILE_RULES, FieldError, validate_record

DEFAULT_LANGUAGE = "en"


@dataclass
class UserProfile:
    """Durable identity and contact details of a site member."""

    user_id: str
    registered_at: datetime
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    interests: List[str] = field(default_factory=list)
    preferred_language: str = DEFAULT_LANGUAGE

    @classmethod
    def create(
        cls,
        first_name: str = "",
        last_name: str = "",
        email: str = "",
        phone: str = "",
        interests: Optional[List[str]] = None,
        preferred_language: str = DEFAULT_LANGUAGE,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], datetime] = now_local,
    ) -> "UserProfile":
        """
        Build a new profile with a fresh user ID and registration time.

        Args:
            first_name: Given name
            last_name: Family name
            email: Contact email
            phone: Contact phone (optional)
            interests: Interest tags, copied into a new list
            preferred_language: Language code (default "en")
            id_factory: Source of the user ID
            clock: Source of the registration timestamp

        Returns:
            UserProfile (not validated; call validate() after binding form input)
        """
        return cls(
            user_id=id_factory(),
            registered_at=clock(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            interests=list(interests or []),
            preferred_language=preferred_language,
        )

    @property
    def full_name(self) -> str:
        """First and last name joined by a space, trimmed at both ends."""
        return f"{self.first_name} {self.last_name}".strip()

    def validate(self) -> List[FieldError]:
        """Evaluate the profile field rules."""
        return validate_record(self, PROFILE_RULES)

    def is_valid(self) -> bool:
        return not self.validate()

    def ensure_valid(self) -> None:
        """Raise ValidationError listing every failed rule."""
        errors = self.validate()
        if errors:
            raise ValidationError(errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "registered_at": self.registered_at.isoformat(),
            "interests": list(self.interests),
            "preferred_language": self.preferred_language,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        """
        Rebuild a profile from to_dict() output.

        Raises:
            KeyError: If user_id or registered_at is missing
            ValueError: If registered_at is not ISO 8601
        """
        return cls(
            user_id=data["user_id"],
            registered_at=datetime.fromisoformat(data["registered_at"]),
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            interests=list(data.get("interests", [])),
            preferred_language=data.get("preferred_language", DEFAULT_LANGUAGE),
        )
