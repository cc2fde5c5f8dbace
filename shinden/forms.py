"""
Helpers for building the form data posted back to the edit pages.

Form data is a list of ``(name, value)`` pairs so that multi-value fields
such as ``lang[]`` can repeat; ``requests`` posts such a list as is.
"""

from __future__ import annotations

from typing import List, Optional, Tuple, TypeVar

T = TypeVar('T')

FormData = List[Tuple[str, str]]


def merge(current: Optional[T], new: Optional[T], accept_null_fields: bool = False) -> Optional[T]:
    """Pick the value to post: *new* unless it is ``None`` and nulls are not accepted."""
    if accept_null_fields or new is not None:
        return new
    return current


def form_str(value) -> str:
    """Render a value for a form field; ``None`` posts an empty field."""
    if value is None:
        return ''
    return str(value)


def form_pairs(values) -> FormData:
    """``(form_parameter, form_value)`` for every enum member in *values*."""
    return [(value.form_parameter, value.form_value) for value in values or ()]
