"""
Tests for the profile edit and settings page mappers and their form data.
"""
import os
import sys
from datetime import date

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

import pytest

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
    UserGender,
    UserTitleStatus,
)
from shinden.exceptions import PageStructureChangedError
from shinden.forms import form_pairs, form_str, merge
from shinden.mappers import UserInformationMapper, UserSettingsMapper
from shinden.models import (
    AddToListSettings,
    AnimeListSettings,
    MangaListSettings,
    PageSettings,
    ReadTimeSettings,
    UserInformationUpdate,
)


class TestForms:
    def test_merge(self):
        assert merge('old', 'new') == 'new'
        assert merge('old', None) == 'old'
        assert merge('old', None, accept_null_fields=True) is None

    def test_form_str(self):
        assert form_str(None) == ''
        assert form_str(24) == '24'

    def test_form_pairs(self):
        assert form_pairs([SubtitlesLanguage.POLISH, UserTitleStatus.PLAN]) == [('lang[]', 'pl'), ('status[]', 'plan')]
        assert form_pairs(None) == []


class TestUserInformationMapper:
    def test_map(self, sample_user_information_html):
        information = UserInformationMapper().map(sample_user_information_html)
        assert information.signature == 'Kosmateus was here'
        assert information.about_me == 'I like long shows.'
        assert information.gender is UserGender.MALE
        assert (information.birth_day, information.birth_month, information.birth_year) == (24, 12, 1990)
        assert information.email == 'user@example.com'

    def test_empty_signature_is_none(self, sample_user_information_html):
        html = sample_user_information_html.replace('Kosmateus was here', '')
        assert UserInformationMapper().map(html).signature is None

    def test_missing_gender_selection(self, sample_user_information_html):
        html = sample_user_information_html.replace('<option value="1" selected="selected">', '<option value="1">')
        with pytest.raises(PageStructureChangedError) as exc_info:
            UserInformationMapper().map(html)
        assert exc_info.value.code == 'user.information.edit.gender'

    def test_unknown_gender(self, sample_user_information_html):
        html = sample_user_information_html.replace('value="1" selected', 'value="9" selected')
        with pytest.raises(PageStructureChangedError) as exc_info:
            UserInformationMapper().map(html)
        assert exc_info.value.code == 'user.information.edit.gender'
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_form_data_keeps_current_values(self, sample_user_information_html):
        form = UserInformationMapper().form_data(sample_user_information_html, UserInformationUpdate())
        assert form == {
            'csrf': 'info-csrf',
            'portal_lang': 'pl',
            'signature': 'Kosmateus was here',
            'about_me': 'I like long shows.',
            'gender': '1',
            'birthdate_day': '24',
            'birthdate_month': '12',
            'birthdate_year': '1990',
            'email': 'user@example.com',
        }

    def test_form_data_applies_update(self, sample_user_information_html):
        update = UserInformationUpdate(gender=UserGender.FEMALE, birth_date=date(2001, 3, 7), email='new@example.com')
        form = UserInformationMapper().form_data(sample_user_information_html, update)
        assert form['gender'] == '2'
        assert (form['birthdate_day'], form['birthdate_month'], form['birthdate_year']) == ('7', '3', '2001')
        assert form['email'] == 'new@example.com'
        assert form['signature'] == 'Kosmateus was here'

    def test_form_data_accepting_null_fields_clears_values(self, sample_user_information_html):
        update = UserInformationUpdate(about_me='Short.', accept_null_fields=True)
        form = UserInformationMapper().form_data(sample_user_information_html, update)
        assert form['about_me'] == 'Short.'
        assert form['signature'] == ''
        assert form['gender'] == ''
        assert form['birthdate_year'] == ''

    def test_form_data_without_csrf(self, sample_user_information_html):
        html = sample_user_information_html.replace('name="csrf"', 'name="token"')
        with pytest.raises(PageStructureChangedError) as exc_info:
            UserInformationMapper().form_data(html, UserInformationUpdate())
        assert exc_info.value.code == 'user.information.edit.csrf'


class TestUserSettingsMapper:
    def test_page_and_read_time_settings(self, sample_user_settings_html):
        settings = UserSettingsMapper().map(sample_user_settings_html)
        assert settings.page_settings == PageSettings(PageTheme.BAKEMONO, PageMainMenu.MOBILE)
        assert settings.read_time_settings == ReadTimeSettings(5, 12)

    def test_add_to_list_settings(self, sample_user_settings_html):
        settings = UserSettingsMapper().map(sample_user_settings_html)
        assert settings.add_to_list_settings == AddToListSettings(SliderPosition.SIX_ITEMS, ShowOption.YES)

    def test_anime_list_settings(self, sample_user_settings_html):
        anime = UserSettingsMapper().map(sample_user_settings_html).anime_list_settings
        assert anime.subtitles_languages == [SubtitlesLanguage.POLISH, SubtitlesLanguage.JAPANESE]
        assert anime.anime_watch_status == [UserTitleStatus.IN_PROGRESS]
        assert anime.skip_fillers is SkipFillers.YES
        assert anime.status_auto_change is StatusAutoChange.YES

    def test_manga_list_settings(self, sample_user_settings_html):
        manga = UserSettingsMapper().map(sample_user_settings_html).manga_list_settings
        assert manga.chapter_languages == [ChapterLanguage.POLISH]
        assert manga.manga_read_status == [ChapterStatus.COMPLETED, ChapterStatus.HOLD]
        assert manga.status_auto_change is StatusAutoChange.NO

    def test_optional_selections_fall_back(self, sample_user_settings_html):
        html = (sample_user_settings_html
                .replace('<option value="2" selected="selected">', '<option value="2">')
                .replace('<option value="yes" selected="selected">', '<option value="yes">'))
        settings = UserSettingsMapper().map(html)
        assert settings.page_settings.page_theme is PageTheme.DEFAULT
        assert settings.add_to_list_settings.show_add_to_list is ShowOption.NO

    def test_missing_main_menu(self, sample_user_settings_html):
        html = sample_user_settings_html.replace('<option value="mobile" selected="selected">', '<option value="mobile">')
        with pytest.raises(PageStructureChangedError) as exc_info:
            UserSettingsMapper().map(html)
        assert exc_info.value.code == 'user.settings.edit.page-main-menu'

    def test_unknown_checkbox_value_keeps_item_code(self, sample_user_settings_html):
        html = sample_user_settings_html.replace('name="lang[]" value="jp"', 'name="lang[]" value="xx"')
        with pytest.raises(PageStructureChangedError) as exc_info:
            UserSettingsMapper().map(html)
        assert exc_info.value.code == 'user.settings.edit.subtitles-language-single'

    def test_to_dict_renders_enum_lists(self, sample_user_settings_html):
        data = UserSettingsMapper().map(sample_user_settings_html).to_dict()
        assert data['anime_list_settings']['subtitles_languages'] == ['POLISH', 'JAPANESE']
        assert data['page_settings']['page_theme'] == 'BAKEMONO'


class TestUserSettingsForms:
    def test_nothing_to_update(self, sample_user_settings_html):
        mapper = UserSettingsMapper()
        assert mapper.page_settings_form(sample_user_settings_html) == []
        assert mapper.lists_settings_form(sample_user_settings_html) == []
        assert mapper.add_to_list_settings_form(sample_user_settings_html) == []

    def test_page_settings_form(self, sample_user_settings_html):
        form = UserSettingsMapper().page_settings_form(
            sample_user_settings_html, page_settings=PageSettings(page_theme=PageTheme.CHRISTMAS))
        assert form == [
            ('csrf', 'page-csrf'),
            ('skin_id', '5'),
            ('pinned_menu', 'mobile'),
            ('manga_time', '5'),
            ('novel_time', '12'),
        ]

    def test_read_time_only(self, sample_user_settings_html):
        form = UserSettingsMapper().page_settings_form(
            sample_user_settings_html, read_time_settings=ReadTimeSettings(visual_novel_chapter_read_time=20))
        assert ('skin_id', '2') in form
        assert ('novel_time', '20') in form

    def test_lists_settings_form(self, sample_user_settings_html):
        anime = AnimeListSettings(subtitles_languages=[SubtitlesLanguage.ENGLISH], skip_fillers=SkipFillers.NO)
        form = UserSettingsMapper().lists_settings_form(sample_user_settings_html, anime_list_settings=anime)
        assert form == [
            ('setting-type', 'pedding-list'),
            ('csrf', 'lists-csrf'),
            ('lang[]', 'en'),
            ('status[]', 'in progress'),
            ('skip_filers', '0'),
            ('status_autochange', '1'),
            ('chap_lang[]', 'pl'),
            ('chap_status[]', 'completed'),
            ('chap_status[]', 'hold'),
            ('status_autochange', '0'),
        ]

    def test_lists_settings_form_manga_only(self, sample_user_settings_html):
        manga = MangaListSettings(manga_read_status=[], status_auto_change=StatusAutoChange.YES)
        form = UserSettingsMapper().lists_settings_form(sample_user_settings_html, manga_list_settings=manga)
        assert ('chap_status[]', 'completed') not in form
        assert form[-1] == ('status_autochange', '1')
        assert ('lang[]', 'jp') in form

    def test_add_to_list_settings_form(self, sample_user_settings_html):
        form = UserSettingsMapper().add_to_list_settings_form(
            sample_user_settings_html, AddToListSettings(slider_position=SliderPosition.NO_LIMIT))
        assert form == [
            ('setting-type', 'add-to-list'),
            ('csrf', 'add-csrf'),
            ('steps', '0'),
            ('show', 'yes'),
        ]
