"""
Base class of every page mapper.

A concrete mapper declares a short ``mapper_code`` and, if it reads enums or
other custom types from the page, the converters for them::

    class UserAchievementsMapper(BaseDocumentMapper):
        mapper_code = 'user.achievements'

        def type_converters(self):
            return {UrlType: UrlType.from_value}

Every structure error raised by ``self.mapper`` is then a
``PageStructureChangedError`` whose code starts with the mapper code, e.g.
``user.achievements.last-check``.
"""

from __future__ import annotations

from typing import Dict, Optional

from bs4 import BeautifulSoup

from shinden.constants import DATE_FORMAT, DATE_TIME_FORMAT
from shinden.exceptions import ErrorCode, PageStructureChangedError
from utils.document_mapper import Converter, DocumentMapperEngine


class BaseDocumentMapper:
    """Configures a ``DocumentMapperEngine`` for one kind of page."""

    mapper_code: str = ''
    date_format: str = DATE_FORMAT
    date_time_format: str = DATE_TIME_FORMAT

    def __init__(self):
        if not self.mapper_code:
            raise TypeError(f'{type(self).__name__} must define mapper_code')
        self.mapper = DocumentMapperEngine(
            date_time_format=self.date_time_format,
            date_format=self.date_format,
            type_converters=self.type_converters(),
            exception_factory=self.create_exception,
        )

    def type_converters(self) -> Dict[type, Converter]:
        """Extra ``{type: converter}`` entries; they override the built-ins."""
        return {}

    def error_code(self, code: str) -> ErrorCode:
        return ErrorCode(f'{self.mapper_code}.{code}')

    def create_exception(self, code: str, cause: Optional[BaseException] = None) -> PageStructureChangedError:
        error = PageStructureChangedError(self.error_code(code))
        if cause is not None:
            error.__cause__ = cause
        return error

    @staticmethod
    def parse(html_content: str) -> BeautifulSoup:
        return BeautifulSoup(html_content, 'html.parser')
