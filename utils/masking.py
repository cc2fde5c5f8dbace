"""
Masking utilities for sensitive data in logs.

Session cookies are the only secret the client handles; they are fully
masked wherever headers or configuration end up in a log line.
"""

from typing import Dict, Optional

SENSITIVE_HEADERS = ('cookie', 'authorization')


def mask_full(value: Optional[str]) -> str:
    """
    Fully mask a sensitive value (100% hidden).

    Returns:
        '********' if value exists, 'None' if value is None/empty
    """
    if not value:
        return 'None'
    return '********'


def mask_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Copy of *headers* with cookie and authorization values masked."""
    return {
        name: mask_full(value) if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }
