"""
Mapper for the settings page (``/user/<id>/settings``).

The page holds three forms: page look and read times
(``form.creator-form``), list preferences (``form.horizontal-form``) and
the "add to list" widget (``form.creator-form.box``).  ``map`` reads all of
them; the ``*_form`` methods build the data posted by each form.
"""

from __future__ import annotations

import logging
from typing import Optional

from shinden.enums import (
    ChapterLanguage,
    ChapterStatus,
    PageMainMenu,
    PageTheme,
    ShowOption,
    SkipFillers,
    SliderPosition,
    StatusAutoChange,
    SubtitlesLanguage,
    UserTitleStatus,
)
from shinden.forms import FormData, form_pairs, form_str, merge
from shinden.mappers.base import BaseDocumentMapper
from shinden.models import (
    AddToListSettings,
    AnimeListSettings,
    MangaListSettings,
    PageSettings,
    ReadTimeSettings,
    UserSettings,
)

logger = logging.getLogger(__name__)

PAGE_FORM = 'form.creator-form:not(.box)'
LISTS_FORM = 'form.horizontal-form'
ADD_TO_LIST_FORM = 'form.creator-form.box'

ANIME_BOX = 'div.push0.col4.box'
STATUS_BOX = 'div.push4.col4.box'
AUTO_CHANGE = 'select[name=status_autochange] > option[selected]'


def _checked(box: str, name: str) -> str:
    return f'{box} input[type=checkbox][name="{name}"][checked]'


class UserSettingsMapper(BaseDocumentMapper):
    mapper_code = 'user.settings.edit'

    def type_converters(self):
        return {
            enum: enum.from_value
            for enum in (ChapterLanguage, ChapterStatus, PageMainMenu, PageTheme, ShowOption,
                         SkipFillers, SliderPosition, StatusAutoChange, SubtitlesLanguage,
                         UserTitleStatus)
        }

    def map(self, html_content: str) -> UserSettings:
        document = self.mapper.with_document(self.parse(html_content))
        return UserSettings(
            page_settings=self._page_settings(document),
            read_time_settings=self._read_time_settings(document),
            add_to_list_settings=self._add_to_list_settings(document),
            anime_list_settings=self._anime_list_settings(document),
            manga_list_settings=self._manga_list_settings(document),
        )

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def _values(self, document, css: str, target: type, code: str):
        return (document.select(css)
                .map_to(lambda item: self.mapper.with_element(item).attr('value')
                        .map_to(target).or_throw_with_code(f'{code}-single'))
                .or_throw_with_code(code))

    def _page_settings(self, document) -> PageSettings:
        return PageSettings(
            page_theme=document.select_first('select#skin_id > option[selected]').attr('value')
                .map_to(PageTheme).or_else(PageTheme.DEFAULT),
            page_main_menu=document.select_first('select#pinned_menu > option[selected]').attr('value')
                .map_to(PageMainMenu).or_throw_with_code('page-main-menu'),
        )

    def _read_time_settings(self, document) -> ReadTimeSettings:
        return ReadTimeSettings(
            manga_chapter_read_time=document.select_first('input[name=manga_time]').attr('value')
                .to_integer().or_throw_with_code('manga-chapter-read-time'),
            visual_novel_chapter_read_time=document.select_first('input[name=novel_time]').attr('value')
                .to_integer().or_throw_with_code('visual-novel-chapter-read-time'),
        )

    def _add_to_list_settings(self, document) -> AddToListSettings:
        return AddToListSettings(
            slider_position=document.select_first('select[name=steps] > option[selected]').attr('value')
                .map_to(SliderPosition).or_throw_with_code('slider-position'),
            show_add_to_list=document.select_first('select[name=show] > option[selected]').attr('value')
                .map_to(ShowOption).or_else(ShowOption.NO),
        )

    def _anime_list_settings(self, document) -> AnimeListSettings:
        return AnimeListSettings(
            subtitles_languages=self._values(document, _checked(ANIME_BOX, 'lang[]'),
                                             SubtitlesLanguage, 'subtitles-language'),
            anime_watch_status=self._values(document, _checked(STATUS_BOX, 'status[]'),
                                            UserTitleStatus, 'anime-watch-status'),
            skip_fillers=document.select_first('input[name=skip_filers][checked]').attr('value')
                .map_to(SkipFillers).or_throw_with_code('skip-fillers'),
            status_auto_change=document.select(AUTO_CHANGE).get(0).attr('value')
                .map_to(StatusAutoChange).or_else(StatusAutoChange.NO),
        )

    def _manga_list_settings(self, document) -> MangaListSettings:
        return MangaListSettings(
            chapter_languages=self._values(document, _checked(ANIME_BOX, 'chap_lang[]'),
                                           ChapterLanguage, 'chapter-language'),
            manga_read_status=self._values(document, _checked(STATUS_BOX, 'chap_status[]'),
                                           ChapterStatus, 'manga-read-status'),
            status_auto_change=document.select(AUTO_CHANGE).get(1).attr('value')
                .map_to(StatusAutoChange).or_else(StatusAutoChange.NO),
        )

    def _csrf(self, document, form: str) -> str:
        return document.select_first(f'{form} input[name=csrf]').attr('value').or_throw_with_code('csrf')

    # ------------------------------------------------------------------
    # Form data
    # ------------------------------------------------------------------

    def page_settings_form(self, html_content: str,
                           page_settings: Optional[PageSettings] = None,
                           read_time_settings: Optional[ReadTimeSettings] = None) -> FormData:
        """Data for the page look / read time form; empty when nothing changes."""
        if page_settings is None and read_time_settings is None:
            return []
        document = self.mapper.with_document(self.parse(html_content))
        current = self.map(html_content)
        page = page_settings or PageSettings()
        read_time = read_time_settings or ReadTimeSettings()
        current_page = current.page_settings
        current_read_time = current.read_time_settings
        return [
            ('csrf', self._csrf(document, PAGE_FORM)),
            ('skin_id', merge(current_page.page_theme, page.page_theme).form_value),
            ('pinned_menu', merge(current_page.page_main_menu, page.page_main_menu).form_value),
            ('manga_time', form_str(merge(current_read_time.manga_chapter_read_time,
                                          read_time.manga_chapter_read_time))),
            ('novel_time', form_str(merge(current_read_time.visual_novel_chapter_read_time,
                                          read_time.visual_novel_chapter_read_time))),
        ]

    def lists_settings_form(self, html_content: str,
                            anime_list_settings: Optional[AnimeListSettings] = None,
                            manga_list_settings: Optional[MangaListSettings] = None) -> FormData:
        """Data for the list preferences form; empty when nothing changes."""
        if anime_list_settings is None and manga_list_settings is None:
            return []
        document = self.mapper.with_document(self.parse(html_content))
        current = self.map(html_content)
        anime = anime_list_settings or AnimeListSettings()
        manga = manga_list_settings or MangaListSettings()
        current_anime = current.anime_list_settings
        current_manga = current.manga_list_settings

        form: FormData = [
            ('setting-type', 'pedding-list'),
            ('csrf', self._csrf(document, LISTS_FORM)),
        ]
        form += form_pairs(merge(current_anime.subtitles_languages, anime.subtitles_languages))
        form += form_pairs(merge(current_anime.anime_watch_status, anime.anime_watch_status))
        form.append(('skip_filers', merge(current_anime.skip_fillers, anime.skip_fillers).form_value))
        form.append(('status_autochange',
                     merge(current_anime.status_auto_change, anime.status_auto_change).form_value))
        form += form_pairs(merge(current_manga.chapter_languages, manga.chapter_languages))
        form += form_pairs(merge(current_manga.manga_read_status, manga.manga_read_status))
        form.append(('status_autochange',
                     merge(current_manga.status_auto_change, manga.status_auto_change).form_value))
        logger.debug('Built lists settings form with %d fields', len(form))
        return form

    def add_to_list_settings_form(self, html_content: str,
                                  add_to_list_settings: Optional[AddToListSettings] = None) -> FormData:
        """Data for the "add to list" form; empty when nothing changes."""
        if add_to_list_settings is None:
            return []
        document = self.mapper.with_document(self.parse(html_content))
        current = self.map(html_content).add_to_list_settings
        return [
            ('setting-type', 'add-to-list'),
            ('csrf', self._csrf(document, ADD_TO_LIST_FORM)),
            ('steps', merge(current.slider_position, add_to_list_settings.slider_position).form_value),
            ('show', merge(current.show_add_to_list, add_to_list_settings.show_add_to_list).form_value),
        ]
