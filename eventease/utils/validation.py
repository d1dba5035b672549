"""Field validation rules for profile and registration forms."""
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

PHONE_EXTRA_CHARACTERS = "-.()"
PHONE_EXTENSION_MARKERS = ("ext.", "ext", "x")


@dataclass(frozen=True)
class FieldRule:
    """Constraints declared for one record attribute."""

    field: str
    required: bool = False
    required_message: str = ""
    max_length: Optional[int] = None
    length_message: str = ""
    shape: Optional[Callable[[str], bool]] = None
    shape_message: str = ""


@dataclass(frozen=True)
class FieldError:
    """A single failed rule, keyed by attribute name."""

    field: str
    message: str


def is_valid_email(value: str) -> bool:
    """
    Check email shape.

    Args:
        value: Candidate address

    Returns:
        True if the value has exactly one "@" that is neither the first nor
        the last character and contains no line breaks
    """
    if "\r" in value or "\n" in value:
        return False
    index = value.find("@")
    return 0 < index < len(value) - 1 and index == value.rfind("@")


def _is_extension(candidate: str) -> bool:
    candidate = candidate.lstrip()
    return bool(candidate) and all(ch.isdecimal() for ch in candidate)


def _strip_extension(number: str) -> str:
    lowered = number.lower()
    for marker in PHONE_EXTENSION_MARKERS:
        index = lowered.rfind(marker)
        if index >= 0 and _is_extension(number[index + len(marker):]):
            return number[:index]
    return number


def is_valid_phone(value: str) -> bool:
    """
    Check phone number shape.

    Args:
        value: Candidate number (e.g., "+1 (555) 010-2030 ext. 12")

    Returns:
        True if, after dropping "+" signs and a trailing extension, the value
        holds at least one digit and only digits, whitespace and "-.()"
    """
    number = _strip_extension(value.replace("+", "").rstrip())
    if not any(ch.isdecimal() for ch in number):
        return False
    return all(
        ch.isdecimal() or ch.isspace() or ch in PHONE_EXTRA_CHARACTERS
        for ch in number
    )


def validate_field(value: Any, rule: FieldRule) -> List[str]:
    """
    Evaluate one rule against a value.

    Args:
        value: Attribute value (str or None)
        rule: Constraints for the attribute

    Returns:
        Failing messages in rule order (required, shape, length); empty if valid

    Behavior:
        - None, "" and whitespace-only values fail a required rule, and no
          other check runs for that field
        - Absent values (None or "") pass shape and length checks on
          optional fields
        - Length is counted in characters; exactly max_length passes
    """
    if rule.required and (value is None or not str(value).strip()):
        return [rule.required_message]

    if value is None or value == "":
        return []

    messages = []
    if rule.shape is not None and not rule.shape(value):
        messages.append(rule.shape_message)
    if rule.max_length is not None and len(value) > rule.max_length:
        messages.append(rule.length_message)
    return messages


def validate_record(record: Any, rules: Sequence[FieldRule]) -> List[FieldError]:
    """
    Evaluate a rule table against a record's attributes.

    Args:
        record: Any object exposing the attributes named by the rules
        rules: Rule table (e.g., PROFILE_RULES)

    Returns:
        List of FieldError in table order; empty if the record is valid
    """
    errors = []
    for rule in rules:
        for message in validate_field(getattr(record, rule.field), rule):
            errors.append(FieldError(field=rule.field, message=message))
    return errors


FIRST_NAME_RULE = FieldRule(
    field="first_name",
    required=True,
    required_message="First name is required",
    max_length=50,
    length_message="First name cannot exceed 50 characters",
)

LAST_NAME_RULE = FieldRule(
    field="last_name",
    required=True,
    required_message="Last name is required",
    max_length=50,
    length_message="Last name cannot exceed 50 characters",
)

EMAIL_RULE = FieldRule(
    field="email",
    required=True,
    required_message="Email is required",
    shape=is_valid_email,
    shape_message="Please enter a valid email address",
    max_length=100,
    length_message="Email cannot exceed 100 characters",
)

PHONE_RULE = FieldRule(
    field="phone",
    shape=is_valid_phone,
    shape_message="Please enter a valid phone number",
    max_length=20,
    length_message="Phone number cannot exceed 20 characters",
)

NOTES_RULE = FieldRule(
    field="notes",
    max_length=500,
    length_message="Notes cannot exceed 500 characters",
)

PROFILE_RULES = (FIRST_NAME_RULE, LAST_NAME_RULE, EMAIL_RULE, PHONE_RULE)
REGISTRATION_RULES = PROFILE_RULES + (NOTES_RULE,)
