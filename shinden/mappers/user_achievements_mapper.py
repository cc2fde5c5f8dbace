"""
Mapper for the achievements tab of a user profile (``/user/<id>/achievements``).
"""

from __future__ import annotations

import logging

from bs4.element import Tag

from shinden.mappers.base import BaseDocumentMapper
from shinden.models import Achievement, Achievements
from utils.pattern_matcher import PatternMatcher

logger = logging.getLogger(__name__)

# "Level 3" -> "3"
LEVEL_MATCHER = PatternMatcher.nullable_match(r'(?i)level\s*(.*)', 1)
# "Oglądacz: Level 3" -> "Oglądacz:"
TYPE_MATCHER = PatternMatcher.nullable_match(r'(?i)^(.*?)(?=\blevel\b|$)', 1)


class UserAchievementsMapper(BaseDocumentMapper):
    mapper_code = 'user.achievements'

    def map(self, html_content: str) -> Achievements:
        soup = self.parse(html_content)
        result = Achievements(
            last_check=self.mapper.with_document(soup)
                .select_first('section.achv h2 span.timeago')
                .attr('title')
                .to_datetime()
                .or_throw_with_code('last-check'),
            achievements=self.mapper.with_document(soup)
                .select('section.achv div.achv-entry')
                .map_to(self._achievement)
                .or_else([]),
        )
        logger.debug('Parsed %d achievements', len(result.achievements))
        return result

    def _achievement(self, entry: Tag) -> Achievement:
        m = self.mapper
        return Achievement(
            title=m.with_element(entry).select_first('h3').own_text().or_throw_with_code('title'),
            progress=m.with_element(entry).select_first('span span').attr('style')
                .replace('width:', '').replace('%', '').to_float().or_throw_with_code('progress'),
            description=m.with_element(entry).select_first('p.desc').text().or_throw_with_code('description'),
            image_url=m.with_element(entry).select_first('img').attr('src').or_throw_with_code('image-url'),
            level=m.with_element(entry).select_first('p.achv-level').own_text()
                .pattern(LEVEL_MATCHER).or_else(None),
            type=m.with_element(entry).select_first('p.achv-level').text()
                .pattern(TYPE_MATCHER).replace(':', '').or_throw_with_code('type'),
            date=m.with_element(entry).select_first('h3 > p.achv-level > span.timeago').attr('title')
                .to_date().or_throw_with_code('date'),
            previous='prev' in (entry.get('class') or []),
        )
