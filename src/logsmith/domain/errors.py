from __future__ import annotations

"""
Validation Error Model.

Defines the single exception type raised for malformed configuration or
per-call input. It always carries the offending value and, where one exists,
the set of legal values.
"""

from typing import Any, Iterable, List, Optional


class ValidationError(ValueError):
    """
    Raised synchronously when configuration input cannot be accepted.

    Attributes:
        field: Name of the option or switch group that failed.
        value: The rejected value.
        allowed: Legal values for the field, when the field is enumerable.
    """

    def __init__(
            self,
            message: str,
            *,
            field: Optional[str] = None,
            value: Any = None,
            allowed: Optional[Iterable[str]] = None,
    ):
        super().__init__(message)
        self.field = field
        self.value = value
        self.allowed: Optional[List[str]] = list(allowed) if allowed is not None else None
