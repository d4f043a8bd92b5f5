import uuid


def new_uuid() -> str:
    """Generate a new UUID4 string for primary keys."""
    return str(uuid.uuid4())
