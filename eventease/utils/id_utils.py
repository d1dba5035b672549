"""Identifier generation."""
import uuid


def generate_id() -> str:
    """Return a random unique token (UUID4 text, e.g. "3f2b...-...")."""
    return str(uuid.uuid4())
