"""
Regex capture-group extraction used by the document mapping engine.

A ``PatternMatcher`` is compiled once (usually as a module-level constant)
and reused for every page.  ``match()`` builds a matcher that raises on a
miss, ``nullable_match()`` one that quietly yields ``None``::

    USER_ID_MATCHER = PatternMatcher.match(r'user/(\\d+)', 1)
    USER_ID_MATCHER.get('https://shinden.pl/user/123-nick')   # '123'
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern


@dataclass(frozen=True)
class PatternMatcher:
    """A compiled regex plus the capture group to extract from it."""
    pattern: Pattern
    group: int
    nullable: bool = False

    @classmethod
    def match(cls, regex: str, group: int) -> 'PatternMatcher':
        """Matcher whose :meth:`get_or_throw` raises when nothing matches."""
        return cls(re.compile(regex), group, nullable=False)

    @classmethod
    def nullable_match(cls, regex: str, group: int) -> 'PatternMatcher':
        """Matcher whose :meth:`get_or_throw` returns ``None`` when nothing matches."""
        return cls(re.compile(regex), group, nullable=True)

    @property
    def regex(self) -> str:
        return self.pattern.pattern

    def get(self, text: str) -> Optional[str]:
        """Return the captured group of the first match in *text*, or ``None``.

        Uses search semantics: the regex may match anywhere unless it is
        anchored itself.  Group ``0`` is the whole match.
        """
        found = self.pattern.search(text)
        if found is None:
            return None
        return found.group(self.group)

    def get_or_throw(self, text: str, exception_supplier: Callable[[], BaseException]) -> Optional[str]:
        """Return the captured group, or handle a miss.

        Nullable matchers return ``None``; the others raise whatever
        *exception_supplier* builds (it is called exactly once).
        """
        value = self.get(text)
        if value is not None or self.nullable:
            return value
        raise exception_supplier()
