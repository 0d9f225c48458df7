from __future__ import annotations


class ValidationError(ValueError):
    """Raised when caller-supplied input violates a documented precondition."""
