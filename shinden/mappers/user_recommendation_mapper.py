"""
Mapper for the recommendations tab of a user profile.

A recommendation is not wrapped in a single element: its header
(``div.media.clearfix``) and its description paragraph are siblings, so
both lists are selected and zipped by position.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from bs4.element import Tag

from shinden.constants import MEDIA_ID_MATCHER, MEDIA_URL_TYPE_MATCHER, PROGRESS_BAR_MATCHER
from shinden.enums import UrlType
from shinden.mappers.base import BaseDocumentMapper
from shinden.models import Recommendation
from utils.pattern_matcher import PatternMatcher

HEADER_SELECTOR = 'div.media.clearfix'
CONTENT_SELECTOR = 'p:not(.text-center):not(:empty)'
ID_MATCHER = PatternMatcher.match(r'recommendation_(\d+)', 1)

MEDIA_LINK = 'div.title:nth-of-type(1) > a'
FOR_MEDIA_LINK = 'div.title:nth-of-type(3) > a'


class UserRecommendationMapper(BaseDocumentMapper):
    mapper_code = 'user.recommendations'

    def type_converters(self):
        return {UrlType: UrlType.from_value}

    def map(self, html_content: str) -> List[Recommendation]:
        soup = self.parse(html_content)
        return (self.mapper.with_document(soup)
                .select_first('div.l-container-col2.box-userprofile')
                .select(HEADER_SELECTOR)
                .and_()
                .select(CONTENT_SELECTOR)
                .map_to(self._recommendation)
                .or_throw_with_code('list'))

    def _recommendation(self, elements: Dict[str, Optional[Tag]]) -> Recommendation:
        header = self.mapper.with_element(elements[HEADER_SELECTOR])
        return Recommendation(
            id=header.attr('id').pattern(ID_MATCHER).to_long().or_throw_with_code('id'),
            media_id=header.select_first(MEDIA_LINK).attr('href')
                .pattern(MEDIA_ID_MATCHER).to_long().or_throw_with_code('media-id'),
            media_url_type=header.select_first(MEDIA_LINK).attr('href')
                .pattern(MEDIA_URL_TYPE_MATCHER).map_to(UrlType).or_throw_with_code('media-url-type'),
            media_title=header.select_first(MEDIA_LINK).text().or_throw_with_code('media-title'),
            media_image_url=header.select_first('img').attr('src').or_throw_with_code('media-image-url'),
            for_media_id=header.select_first(FOR_MEDIA_LINK).attr('href')
                .pattern(MEDIA_ID_MATCHER).to_long().or_throw_with_code('for-media-id'),
            for_media_url_type=header.select_first(FOR_MEDIA_LINK).attr('href')
                .pattern(MEDIA_URL_TYPE_MATCHER).map_to(UrlType).or_throw_with_code('for-media-url-type'),
            for_media_title=header.select_first(FOR_MEDIA_LINK).text().or_throw_with_code('for-media-title'),
            date=header.select_first('span.add-date').attr('title').to_datetime().or_throw_with_code('date'),
            rating=header.select_first('div.progressbar-value').attr('style')
                .pattern(PROGRESS_BAR_MATCHER).to_integer().or_throw_with_code('rating'),
            description=self.mapper.with_element(elements[CONTENT_SELECTOR]).text().keep_new_lines()
                .or_throw_with_code('description'),
        )
