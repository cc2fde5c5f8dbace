"""
Mapper for a user's main profile page (``/user/<id>``).

The page is split into blocks: basic information in the side panel,
anime and manga statistics, four favourites sections, the two latest list
update feeds and the profile comments.  Each block has its own helper.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from shinden.constants import MEDIA_ID_MATCHER, MEDIA_URL_TYPE_MATCHER, USER_ID_MATCHER
from shinden.enums import TitleType, UrlType, UserTitleStatus
from shinden.mappers.base import BaseDocumentMapper
from shinden.models import (
    Comment,
    EntityOverview,
    FavouriteMediaItem,
    ListItemOverview,
    MediaStatistics,
    UserOverview,
)
from utils.pattern_matcher import PatternMatcher

logger = logging.getLogger(__name__)

EMPTY_ABOUT_ME = 'Ten użytkownik jeszcze nic o sobie nie napisał.'
FIRST_NAME_MATCHER = PatternMatcher.nullable_match(r'^[^,]*', 0)
LAST_NAME_MATCHER = PatternMatcher.nullable_match(r'(?<=,).*', 0)

USER_ASIDE = 'aside.info-aside.aside-user'

# Row order of the second statistics table
_STATUS_ROWS = ('in-progress', 'completed', 'skip', 'hold', 'dropped', 'planned')


class UserOverviewMapper(BaseDocumentMapper):
    mapper_code = 'user.overview'

    def type_converters(self):
        return {
            TitleType: TitleType.from_value,
            UrlType: UrlType.from_value,
            UserTitleStatus: UserTitleStatus.from_value,
        }

    def map(self, html_content: str, location: str) -> UserOverview:
        """Parse a profile page fetched from *location* (the user id is read from it)."""
        soup = self.parse(html_content)
        m = self.mapper
        overview = UserOverview(
            id=m.with_document(soup, location).location()
                .pattern(USER_ID_MATCHER).to_long().or_throw_with_code('id'),
            username=m.with_document(soup)
                .select_first('div.l-main-contantainer.controller-user > div > button > strong')
                .text().or_throw_with_code('username'),
            avatar_url=m.with_document(soup).select_first(f'{USER_ASIDE} > img')
                .attr('src').or_throw_with_code('avatar'),
            achievements=m.with_document(soup).select_first(f'{USER_ASIDE} > div.achievements span')
                .text().to_integer().or_throw_with_code('achievements'),
            last_online=self._stat(soup, 1).to_datetime().or_throw_with_code('last-online'),
            rank=self._stat(soup, 2).or_throw_with_code('rank'),
            language=self._stat(soup, 3).or_throw_with_code('language'),
            join_date=self._stat(soup, 4).to_datetime().or_throw_with_code('join-date'),
            score=self._stat(soup, 5).to_integer().or_throw_with_code('score'),
            about=self._about(soup),
            anime_statistics=self._statistics(soup, 'anime', 'episodes', 're-watch'),
            manga_statistics=self._statistics(soup, 'manga', 'chapters', 're-read'),
            favourite_anime=self._favourite_media(soup, 'section.favouritue.animes', 'anime'),
            favourite_manga=self._favourite_media(soup, 'section.favouritue.mangas', 'manga'),
            favourite_characters=self._favourite_entities(soup, 'section.favouritue.characters', 'characters'),
            favourite_people=self._favourite_entities(soup, 'section.favouritue.staffs', 'people'),
            anime_list_updates=self._list_updates(soup, 'section.last-updates.anime-updates', 'anime'),
            manga_list_updates=self._list_updates(soup, 'section.push6.col6.box:nth-of-type(2)', 'manga'),
            comments=m.with_document(soup).select_first('section.box.comments')
                .select('ul li.media.media-comment').map_to(self._comment)
                .or_throw_with_code('comments'),
        )
        logger.debug('Parsed profile of user %s (%d comments)', overview.id, len(overview.comments))
        return overview

    # ------------------------------------------------------------------
    # Side panel
    # ------------------------------------------------------------------

    def _stat(self, soup: BeautifulSoup, position: int):
        return (self.mapper.with_document(soup)
                .select_first(f'{USER_ASIDE} dl.stats dd:nth-of-type({position})')
                .text())

    def _about(self, soup: BeautifulSoup) -> Optional[str]:
        about = (self.mapper.with_document(soup)
                 .select_first('div.box-userprofile div.row.about-me')
                 .text()
                 .or_throw_with_code('about'))
        if about is None or about.lower() == EMPTY_ABOUT_ME.lower():
            return None
        return about

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def _statistics(self, soup: BeautifulSoup, kind: str, segments: str, revisits: str) -> MediaStatistics:
        """Read the anime or manga statistics section.

        The first table holds the totals and the second one the number of
        titles per list status, both with the value in the second column.
        """
        m = self.mapper
        section = f'section.{kind}-stats'

        def cell(table: str, row: int, code: str):
            return (m.with_document(soup)
                    .select_first(f'{section} {table} tr:nth-child({row}) > td:nth-child(2)')
                    .text()
                    .to_integer()
                    .or_throw_with_code(f'stats.{kind}.{code}'))

        totals = 'table.data-view-table:nth-of-type(1)'
        statuses = 'table.data-view-table:nth-of-type(2)'
        per_status = {code: cell(statuses, row, code) for row, code in enumerate(_STATUS_ROWS, start=1)}

        return MediaStatistics(
            total_time=m.with_document(soup).select_first(f'{section} div.total-time > strong')
                .attr('title').replace('min', '').to_integer()
                .or_throw_with_code(f'stats.{kind}.total-time'),
            mean_score=m.with_document(soup).select_first(f'{section} div.mean-score > strong')
                .text().replace(',', '.').to_float()
                .or_throw_with_code(f'stats.{kind}.mean-score'),
            total_titles=cell(totals, 1, 'total-titles'),
            total_segments=cell(totals, 2, f'total-{segments}'),
            total_revisits=cell(totals, 3, f'total-{revisits}'),
            in_progress=per_status['in-progress'],
            completed=per_status['completed'],
            skip=per_status['skip'],
            hold=per_status['hold'],
            dropped=per_status['dropped'],
            planned=per_status['planned'],
        )

    # ------------------------------------------------------------------
    # Favourites
    # ------------------------------------------------------------------

    def _favourite_media(self, soup: BeautifulSoup, section: str, code: str) -> List[FavouriteMediaItem]:
        return (self.mapper.with_document(soup)
                .select_first(section)
                .select('li')
                .map_to(lambda item: self._favourite_media_item(item, code))
                .or_throw_with_code(f'favourite.{code}'))

    def _favourite_media_item(self, item: Tag, code: str) -> FavouriteMediaItem:
        m = self.mapper
        prefix = f'favourite.{code}'
        return FavouriteMediaItem(
            id=m.with_element(item).attr('data-id').to_long().or_throw_with_code(f'{prefix}.id'),
            url_type=m.with_element(item).select_first('h3 > a').attr('href')
                .pattern(MEDIA_URL_TYPE_MATCHER).map_to(UrlType).or_throw_with_code(f'{prefix}.url-type'),
            title=m.with_element(item).select_first('h3 > a').text().or_throw_with_code(f'{prefix}.title'),
            image_url=m.with_element(item).select_first('img').attr('src')
                .or_throw_with_code(f'{prefix}.image-url'),
            type=m.with_element(item).select_first('span:nth-of-type(2)').text()
                .map_to(TitleType).or_throw_with_code(f'{prefix}.type'),
            year=m.with_element(item).select_first('span').text()
                .to_integer().or_throw_with_code(f'{prefix}.year'),
        )

    def _favourite_entities(self, soup: BeautifulSoup, section: str, code: str) -> List[EntityOverview]:
        return (self.mapper.with_document(soup)
                .select_first(section)
                .select('li')
                .map_to(lambda item: self._favourite_entity(item, code))
                .or_throw_with_code(f'favourite.{code}'))

    def _favourite_entity(self, item: Tag, code: str) -> EntityOverview:
        """A character or person; the displayed name is split on its comma."""
        m = self.mapper
        prefix = f'favourite.{code}'
        return EntityOverview(
            id=m.with_element(item).attr('data-id').to_long().or_throw_with_code(f'{prefix}.id'),
            url_type=m.with_element(item).select_first('h3 > a').attr('href')
                .pattern(MEDIA_URL_TYPE_MATCHER).map_to(UrlType).or_throw_with_code(f'{prefix}.url-type'),
            image_url=m.with_element(item).select_first('img').attr('src')
                .or_throw_with_code(f'{prefix}.image-url'),
            first_name=m.with_element(item).select_first('h3 > a').text()
                .pattern(FIRST_NAME_MATCHER).or_else(None),
            last_name=m.with_element(item).select_first('h3 > a').text()
                .pattern(LAST_NAME_MATCHER).or_else(None),
            media_id=m.with_element(item).select_first('div > a').attr('href')
                .pattern(MEDIA_ID_MATCHER).to_long().or_else(None),
            media_url_type=m.with_element(item).select_first('div > a').attr('href')
                .pattern(MEDIA_URL_TYPE_MATCHER).map_to(UrlType).or_else(None),
            media_title=m.with_element(item).select_first('div > a').text().or_else(None),
        )

    # ------------------------------------------------------------------
    # List updates and comments
    # ------------------------------------------------------------------

    def _list_updates(self, soup: BeautifulSoup, section: str, code: str) -> List[ListItemOverview]:
        return (self.mapper.with_document(soup)
                .select_first(section)
                .select('li')
                .map_to(lambda item: self._list_item(item, code))
                .or_throw_with_code(f'{code}-list-updates'))

    def _list_item(self, item: Tag, code: str) -> ListItemOverview:
        m = self.mapper
        prefix = f'list-item.{code}'
        return ListItemOverview(
            id=m.with_element(item).select_first('a').attr('href')
                .pattern(MEDIA_ID_MATCHER).to_long().or_throw_with_code(f'{prefix}.id'),
            url_type=m.with_element(item).select_first('a').attr('href')
                .pattern(MEDIA_URL_TYPE_MATCHER).map_to(UrlType).or_throw_with_code(f'{prefix}.url-type'),
            image_url=m.with_element(item).select_first('img').attr('src')
                .or_throw_with_code(f'{prefix}.image-url'),
            title=m.with_element(item).select_first('h4 > a').text().or_throw_with_code(f'{prefix}.title'),
            last_modified_at=m.with_element(item).select_first('span time').attr('datetime')
                .to_datetime().or_throw_with_code(f'{prefix}.last-modified-at'),
            status=m.with_element(item).select_first('span').own_text().replace(':', '')
                .map_to(UserTitleStatus).or_throw_with_code(f'{prefix}.status'),
        )

    def _comment(self, item: Tag) -> Comment:
        m = self.mapper
        return Comment(
            id=m.with_element(item).select_first('h3 > a:nth-of-type(2)').attr('href')
                .replace('/comment/', '').to_long().or_throw_with_code('comment.id'),
            user_id=m.with_element(item).select_first('h3 > a').attr('href')
                .pattern(USER_ID_MATCHER).to_long().or_throw_with_code('comment.user-id'),
            username=m.with_element(item).select_first('h3 > a').text()
                .or_throw_with_code('comment.username'),
            user_avatar=m.with_element(item).select_first('img').attr('src')
                .or_throw_with_code('comment.user-avatar'),
            user_role=m.with_element(item).select_first('div.img > ul').text()
                .or_throw_with_code('comment.user-role'),
            user_signature=m.with_element(item).select_first('div.media-comment-signature').text()
                .or_else(None),
            content=m.with_element(item).select_first('p').text().keep_new_lines()
                .or_throw_with_code('comment.content'),
            created_at=m.with_element(item).select_first('span').attr('title')
                .to_datetime().or_throw_with_code('comment.created-at'),
        )
