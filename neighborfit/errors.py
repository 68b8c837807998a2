"""Domain errors raised by the engine and the storage/account collaborators."""


class ValidationError(ValueError):
    """Input rejected: bad weights, bad limit, too few areas to compare, etc."""


class NotFoundError(LookupError):
    """A requested user or area identity does not exist."""
