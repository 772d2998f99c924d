"""Domain errors raised by admin services."""


class InvalidInputError(ValueError):
    """Submitted data breaks a model invariant."""


class RecordNotFoundError(LookupError):
    """A referenced row does not exist."""
