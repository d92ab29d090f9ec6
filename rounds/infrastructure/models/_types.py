"""Column helpers shared by the ORM models."""

from uuid import uuid4


def generate_uuid() -> str:
    """Return a new random identifier in canonical string form."""

    return str(uuid4())


__all__ = ["generate_uuid"]
