"""
Mapper for the anime search results page (``/series?search=...``).
"""

from __future__ import annotations

import logging

from bs4.element import Tag

from shinden.constants import MEDIA_ID_MATCHER, MEDIA_URL_TYPE_MATCHER
from shinden.enums import TitleStatus, TitleType, UrlType
from shinden.mappers.base import BaseDocumentMapper
from shinden.models import AnimeSearchPage, AnimeSearchResult, Genre, Rating

logger = logging.getLogger(__name__)

ANIME_SEARCH_RESULT_ROW = 'section.anime-list > section > article > ul.div-row'
LI_RATING_COL = 'li.ratings-col'
LI_RATE_TOP = 'li.rate-top'


class AnimeSearchMapper(BaseDocumentMapper):
    mapper_code = 'anime.search'

    def type_converters(self):
        return {
            UrlType: UrlType.from_value,
            TitleType: TitleType.from_value,
            TitleStatus: TitleStatus.from_value,
        }

    def map(self, html_content: str, page: int = 1) -> AnimeSearchPage:
        """Parse a search results page; a page without results maps to an empty list."""
        soup = self.parse(html_content)
        results = (self.mapper.with_document(soup)
                   .select(ANIME_SEARCH_RESULT_ROW)
                   .map_to(self._map_anime)
                   .or_else([]))
        logger.debug('[Page %d] Parsed %d search results', page, len(results))
        return AnimeSearchPage(results=results, page=page)

    def _map_anime(self, row: Tag) -> AnimeSearchResult:
        m = self.mapper
        return AnimeSearchResult(
            id=m.with_element(row).select_first('li.desc-col > h3 > a').attr('href')
                .pattern(MEDIA_ID_MATCHER).to_long().or_throw_with_code('id'),
            url_type=m.with_element(row).select_first('li.desc-col > h3 > a').attr('href')
                .pattern(MEDIA_URL_TYPE_MATCHER).map_to(UrlType).or_throw_with_code('url-type'),
            image_url=m.with_element(row).select_first('li.cover-col > a').attr('href')
                .or_throw_with_code('image-url'),
            title=m.with_element(row).select_first('li.desc-col > h3 > a').text()
                .or_throw_with_code('title'),
            genres=m.with_element(row).select('li.desc-col > ul > li > a')
                .map_to(self._map_genre).or_else([]),
            type=m.with_element(row).select_first('li.title-kind-col').text()
                .map_to(TitleType).or_throw_with_code('type'),
            episodes=m.with_element(row).select_first('li.episodes-col').text()
                .to_integer().or_throw_with_code('episodes'),
            rating=self._map_rating(row),
            status=m.with_element(row).select_first('li.title-status-col').text()
                .map_to(TitleStatus).or_throw_with_code('status'),
        )

    def _map_rating(self, row: Tag) -> Rating:
        m = self.mapper

        def category(name):
            return (m.with_element(row)
                    .select_first(f'{LI_RATING_COL} div.rating.rating-{name} span')
                    .own_text().replace(',', '.').to_float().or_else(None))

        return Rating(
            top=m.with_element(row).select_first(LI_RATE_TOP).text()
                .replace('Brak', '').replace(',', '.').to_float().or_else(None),
            overall=category('total'),
            story=category('story'),
            graphics=category('graphics'),
            music=category('music'),
            # class name is misspelled on the site
            characters=category('titlecahracters'),
        )

    def _map_genre(self, link: Tag) -> Genre:
        return Genre(
            id=self.mapper.with_element(link).attr('href')
                .pattern(MEDIA_ID_MATCHER).to_integer().or_throw_with_code('genre'),
            name=self.mapper.with_element(link).text().or_throw_with_code('genre'),
        )
