"""
Declarative HTML-to-value mapping engine.

Mappers describe *what* to read from a parsed page with a fluent chain and
the engine takes care of selection, text extraction, regex/replacement
post-processing, type conversion and error reporting::

    engine = DocumentMapperEngine(exception_factory=my_factory)

    title = (engine.with_element(row)
             .select_first('h3 > a')
             .text()
             .or_throw_with_code('title'))

    episodes = (engine.with_element(row)
                .select_first('li.episodes-col')
                .text()
                .to_integer()
                .or_else(None))

Chains are lazy: no CSS selection, regex or conversion runs before a
terminal method (``or_throw_with_code`` / ``or_else``) is called.  Every
step object is immutable, so a partially built chain can be stored and
reused.

Value pipeline order is fixed, regardless of the order the chain methods
were called in: raw extraction -> ``pattern()`` -> ``replace()`` rules (in
registration order) -> strip -> type conversion.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, replace as _evolve
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from bs4.element import NavigableString, PreformattedString, Tag

from utils.pattern_matcher import PatternMatcher

logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMAT = '%Y-%m-%d'
DEFAULT_DATE_TIME_FORMAT = '%Y-%m-%d %H:%M:%S'

Converter = Callable[[str], Any]
Locator = Callable[[], Any]
ExceptionFactory = Callable[[str, Optional[BaseException]], 'MappingError']


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class MappingError(Exception):
    """Raised when a page does not contain what a chain expects.

    Exception factories handed to the engine must build instances of this
    class (or a subclass) so that nested chains are not re-coded by outer
    terminals.
    """

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(message or f'Mapping failed. Error code: {code}')
        self.code = code


class UnsupportedTypeError(ValueError):
    """A conversion to a type missing from the converter table was requested."""


def _default_exception_factory(code: str, cause: Optional[BaseException]) -> MappingError:
    return MappingError(code)


# ---------------------------------------------------------------------------
# Type conversion
# ---------------------------------------------------------------------------

def clear_for_number(value: str) -> str:
    """Drop regular and non-breaking spaces used as thousands separators."""
    return value.replace(' ', '').replace('\xa0', '')


def _to_int(value: str) -> Optional[int]:
    if not value.strip():
        return None
    return int(clear_for_number(value))


def _to_float(value: str) -> Optional[float]:
    if not value.strip():
        return None
    return float(clear_for_number(value))


def _to_bool(value: str) -> bool:
    return value.strip().lower() == 'true'


def default_type_converters(date_time_format: str, date_format: str) -> Dict[type, Converter]:
    """Built-in converter table: str, int, float, bool, date and datetime."""
    return {
        str: lambda value: value,
        int: _to_int,
        float: _to_float,
        bool: _to_bool,
        date: lambda value: datetime.strptime(value, date_format).date(),
        datetime: lambda value: datetime.strptime(value, date_time_format),
    }


# ---------------------------------------------------------------------------
# Text extraction helpers
# ---------------------------------------------------------------------------

# Elements rendered on their own line; their text is space-separated from
# the surrounding text, like a browser would lay it out.
_BLOCK_TAGS = frozenset((
    'address', 'article', 'aside', 'blockquote', 'dd', 'details', 'dialog',
    'div', 'dl', 'dt', 'fieldset', 'figcaption', 'figure', 'footer', 'form',
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'header', 'hgroup', 'hr', 'li',
    'main', 'nav', 'ol', 'p', 'pre', 'section', 'summary', 'table', 'tbody',
    'td', 'tfoot', 'th', 'thead', 'tr', 'ul',
))
_SKIPPED_TAGS = frozenset(('script', 'style', 'template'))

_LINE_MARK = '\x00'


def _is_text(node) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _text_pieces(element: Tag, line_break: str):
    for child in element.children:
        if isinstance(child, Tag):
            if child.name == 'br':
                yield line_break
            elif child.name in _SKIPPED_TAGS:
                continue
            elif child.name in _BLOCK_TAGS:
                yield ' '
                yield from _text_pieces(child, line_break)
                yield ' '
            else:
                yield from _text_pieces(child, line_break)
        elif _is_text(child):
            yield str(child)


def _own_text_pieces(element: Tag, line_break: str):
    for child in element.children:
        if isinstance(child, Tag):
            if child.name == 'br':
                yield line_break
        elif _is_text(child):
            yield str(child)


def _collapse(text: str) -> str:
    return ' '.join(text.split())


def _render(pieces, keep_new_lines: bool) -> str:
    raw = ''.join(pieces)
    if not keep_new_lines:
        return _collapse(raw)
    return os.linesep.join(_collapse(line) for line in raw.split(_LINE_MARK))


def element_text(element: Tag, keep_new_lines: bool = False) -> str:
    """Rendered text of *element* and its descendants, whitespace collapsed.

    With *keep_new_lines* every ``<br>`` becomes ``os.linesep`` instead of a
    space.  The tree is never modified.
    """
    return _render(_text_pieces(element, _LINE_MARK if keep_new_lines else ' '), keep_new_lines)


def element_own_text(element: Tag, keep_new_lines: bool = False) -> str:
    """Text directly inside *element*, excluding descendant elements' text."""
    return _render(_own_text_pieces(element, _LINE_MARK if keep_new_lines else ' '), keep_new_lines)


def element_attr(element: Tag, name: str) -> str:
    """Attribute value as a string; ``''`` when missing."""
    value = element.get(name)
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return ' '.join(value)
    return value


def _select_nth(scope, css: str, index: int):
    if scope is None or index < 0:
        return None
    matches = scope.select(css)
    if index < len(matches):
        return matches[index]
    return None


def _select_first(scope, css: str):
    if scope is None:
        return None
    return scope.select_one(css)


# ---------------------------------------------------------------------------
# Chain value objects
# ---------------------------------------------------------------------------

_ABSENT = object()

TEXT = 'text'
OWN_TEXT = 'own_text'
ATTR = 'attr'
LOCATION = 'location'


@dataclass(frozen=True)
class Replacement:
    """A regex and the literal string every match is replaced with."""
    regex: str
    replacement: str

    def apply(self, text: str) -> str:
        return re.sub(self.regex, lambda _match: self.replacement, text)


@dataclass(frozen=True)
class Extraction:
    """Everything needed to turn a located node into a raw string."""
    source: str
    attr_name: Optional[str] = None
    keep_new_lines: bool = False
    pattern: Optional[PatternMatcher] = None
    replacements: Tuple[Replacement, ...] = ()


@dataclass(frozen=True)
class MappingResult:
    """Pending value of a chain, resolved by a terminal method.

    *locate* yields the node the value is read from (``None`` means
    absent); *convert* turns that node into the final value.
    """
    engine: 'DocumentMapperEngine'
    locate: Locator
    convert: Callable[[Any], Any]

    def or_throw_with_code(self, code: str):
        """Return the value or raise the engine's structured error for *code*.

        Absence and conversion failures are both reported with *code*; a
        miss of a non-nullable ``PatternMatcher`` keeps its own pattern code.
        """
        node = self.locate()
        if node is None:
            raise self.engine.error(code)
        try:
            value = self.convert(node)
        except (MappingError, UnsupportedTypeError):
            raise
        except Exception as exc:
            raise self.engine.error(code, exc) from exc
        if value is _ABSENT:
            raise self.engine.error(code)
        return value

    def or_else(self, default=None):
        """Return the value, or *default* when it is absent.

        Only absence is covered: conversion errors still propagate.
        """
        node = self.locate()
        if node is None:
            return default
        value = self.convert(node)
        if value is _ABSENT:
            return default
        return value


@dataclass(frozen=True)
class ValueStep:
    """A located node plus the extraction to run on it."""
    engine: 'DocumentMapperEngine'
    locate: Locator
    extraction: Extraction

    def pattern(self, matcher: PatternMatcher) -> 'ValueStep':
        return _evolve(self, extraction=_evolve(self.extraction, pattern=matcher))

    def replace(self, regex: str, replacement: str) -> 'ValueStep':
        replacements = self.extraction.replacements + (Replacement(regex, replacement),)
        return _evolve(self, extraction=_evolve(self.extraction, replacements=replacements))

    def map_to(self, target: type) -> MappingResult:
        converter = self.engine.converter_for(target)
        extraction = self.extraction
        return MappingResult(
            self.engine,
            self.locate,
            lambda node: self.engine.resolve(node, extraction, converter),
        )

    def to_string(self) -> MappingResult:
        return self.map_to(str)

    def to_long(self) -> MappingResult:
        return self.map_to(int)

    def to_integer(self) -> MappingResult:
        return self.map_to(int)

    def to_double(self) -> MappingResult:
        return self.map_to(float)

    def to_float(self) -> MappingResult:
        return self.map_to(float)

    def to_boolean(self) -> MappingResult:
        return self.map_to(bool)

    def to_date(self) -> MappingResult:
        return self.map_to(date)

    def to_datetime(self) -> MappingResult:
        return self.map_to(datetime)

    def or_throw_with_code(self, code: str) -> Optional[str]:
        return self.to_string().or_throw_with_code(code)

    def or_else(self, default: Optional[str] = None) -> Optional[str]:
        return self.to_string().or_else(default)


@dataclass(frozen=True)
class TextStep(ValueStep):
    """Text or own-text extraction; may keep ``<br>`` line breaks."""

    def keep_new_lines(self) -> 'TextStep':
        return _evolve(self, extraction=_evolve(self.extraction, keep_new_lines=True))


# ---------------------------------------------------------------------------
# Selection steps
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ElementStep:
    """Root of a chain over an element (``engine.with_element``)."""
    engine: 'DocumentMapperEngine'
    locate: Locator

    def select_first(self, css: str) -> 'SelectFirstStep':
        return SelectFirstStep(self.engine, self.locate, css)

    def select(self, css: str) -> 'SelectStep':
        return SelectStep(self.engine, self.locate, css)

    def text(self) -> TextStep:
        return TextStep(self.engine, self.locate, Extraction(TEXT))

    def own_text(self) -> TextStep:
        return TextStep(self.engine, self.locate, Extraction(OWN_TEXT))

    def attr(self, name: str) -> ValueStep:
        return ValueStep(self.engine, self.locate, Extraction(ATTR, attr_name=name))


@dataclass(frozen=True)
class DocumentStep(ElementStep):
    """Root of a chain over a whole page (``engine.with_document``)."""
    document_location: str = ''

    def location(self) -> ValueStep:
        """The page URL; a blank location counts as absent."""
        url = self.document_location
        return ValueStep(self.engine, lambda: url if url and url.strip() else None, Extraction(LOCATION))


@dataclass(frozen=True)
class SelectFirstStep:
    engine: 'DocumentMapperEngine'
    scope: Locator
    css: str

    def _located(self):
        return _select_first(self.scope(), self.css)

    def select(self, css: str) -> 'SelectStep':
        """Select all matches of *css* inside the first match of this step."""
        return SelectStep(self.engine, self._located, css)

    def text(self) -> TextStep:
        return TextStep(self.engine, self._located, Extraction(TEXT))

    def own_text(self) -> TextStep:
        return TextStep(self.engine, self._located, Extraction(OWN_TEXT))

    def attr(self, name: str) -> ValueStep:
        return ValueStep(self.engine, self._located, Extraction(ATTR, attr_name=name))

    def exists(self) -> MappingResult:
        return MappingResult(self.engine, self._located, lambda _node: True)


@dataclass(frozen=True)
class SelectStep:
    engine: 'DocumentMapperEngine'
    scope: Locator
    css: str

    def map_to(self, mapper: Callable[[Tag], Any]) -> MappingResult:
        """Map every match with *mapper*; the result is a list."""
        css = self.css
        return MappingResult(
            self.engine,
            self.scope,
            lambda scope: [mapper(element) for element in scope.select(css)],
        )

    def get(self, index: int) -> 'SelectWithIndexStep':
        return SelectWithIndexStep(self.engine, self.scope, self.css, index)

    def collect(self) -> 'CollectSelectStep':
        return CollectSelectStep(self.engine, self.scope, self.css)

    def and_(self) -> 'MultipleSelectStep':
        return MultipleSelectStep(self.engine, self.scope, (self.css,))


@dataclass(frozen=True)
class MultipleSelectStep:
    """Several selectors over one scope, zipped index by index."""
    engine: 'DocumentMapperEngine'
    scope: Locator
    selectors: Tuple[str, ...]

    def and_(self) -> 'MultipleSelectStep':
        return self

    def select(self, css: str) -> 'MultipleSelectStep':
        return _evolve(self, selectors=self.selectors + (css,))

    def map_to(self, mapper: Callable[[Dict[str, Optional[Tag]]], Any]) -> MappingResult:
        """Map each zipped row ``{selector: element or None}`` with *mapper*.

        There are as many rows as the longest match list.
        """
        selectors = self.selectors
        return MappingResult(
            self.engine,
            self.scope,
            lambda scope: [mapper(row) for row in zip_selections(scope, selectors)],
        )


def zip_selections(scope: Tag, selectors) -> List[Dict[str, Optional[Tag]]]:
    matches = {css: scope.select(css) for css in selectors}
    size = max((len(found) for found in matches.values()), default=0)
    return [
        {css: found[i] if i < len(found) else None for css, found in matches.items()}
        for i in range(size)
    ]


@dataclass(frozen=True)
class CollectSelectStep:
    engine: 'DocumentMapperEngine'
    scope: Locator
    css: str

    def map_to(self, mapper: Callable[[List[Tag]], Any]) -> MappingResult:
        """Hand the whole list of matches to *mapper* at once."""
        css = self.css
        return MappingResult(self.engine, self.scope, lambda scope: mapper(list(scope.select(css))))


@dataclass(frozen=True)
class SelectWithIndexStep:
    engine: 'DocumentMapperEngine'
    scope: Locator
    css: str
    index: int

    def _located(self):
        return _select_nth(self.scope(), self.css, self.index)

    def text(self) -> TextStep:
        return TextStep(self.engine, self._located, Extraction(TEXT))

    def own_text(self) -> TextStep:
        return TextStep(self.engine, self._located, Extraction(OWN_TEXT))

    def attr(self, name: str) -> ValueStep:
        return ValueStep(self.engine, self._located, Extraction(ATTR, attr_name=name))

    def exists(self) -> MappingResult:
        return MappingResult(self.engine, self._located, lambda _node: True)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class DocumentMapperEngine:
    """Entry point of the mapping DSL.

    Holds the read-only configuration shared by every chain: the converter
    table (built-ins merged with *type_converters*, which win on collision)
    and the factory that turns an error code into an exception.  Instances
    carry no per-call state and can be shared between threads.
    """

    def __init__(self, date_time_format: str = DEFAULT_DATE_TIME_FORMAT,
                 date_format: str = DEFAULT_DATE_FORMAT,
                 type_converters: Optional[Mapping[type, Converter]] = None,
                 exception_factory: Optional[ExceptionFactory] = None):
        converters = default_type_converters(date_time_format, date_format)
        if type_converters:
            converters.update(type_converters)
        self.type_converters = MappingProxyType(converters)
        self.exception_factory = exception_factory or _default_exception_factory

    def with_element(self, element: Optional[Tag]) -> ElementStep:
        return ElementStep(self, lambda: element)

    def with_document(self, document: Optional[Tag], location: str = '') -> DocumentStep:
        return DocumentStep(self, lambda: document, location or '')

    def converter_for(self, target: type) -> Converter:
        try:
            return self.type_converters[target]
        except KeyError:
            name = getattr(target, '__name__', repr(target))
            raise UnsupportedTypeError(f'Unsupported type: {name}') from None

    def error(self, code: str, cause: Optional[BaseException] = None) -> MappingError:
        logger.debug('Mapping failed with code %s (cause: %r)', code, cause)
        return self.exception_factory(code, cause)

    def pattern_error(self, matcher: PatternMatcher) -> MappingError:
        return self.error(f'pattern.{matcher.regex}.group.{matcher.group}')

    def extract(self, node, extraction: Extraction) -> Optional[str]:
        """Raw string for *node*; ``None`` when a text extraction is blank."""
        if extraction.source == LOCATION:
            return node
        if extraction.source == ATTR:
            return element_attr(node, extraction.attr_name)
        if extraction.source == OWN_TEXT:
            text = element_own_text(node, extraction.keep_new_lines)
        else:
            text = element_text(node, extraction.keep_new_lines)
        return text if text.strip() else None

    def resolve(self, node, extraction: Extraction, converter: Converter):
        raw = self.extract(node, extraction)
        if raw is None:
            return None
        matcher = extraction.pattern
        if matcher is not None:
            raw = matcher.get_or_throw(raw.strip(), lambda: self.pattern_error(matcher))
            if raw is None:
                return _ABSENT
        for rule in extraction.replacements:
            raw = rule.apply(raw)
        return converter(raw.strip())
