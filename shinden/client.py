"""
High level client: fetch a Shinden page and map it to models.

Usage::

    from shinden.client import ShindenClient

    client = ShindenClient.from_config()
    page = client.search_anime('naruto')
    overview = client.get_user_overview(123)
"""

from __future__ import annotations

import logging
from typing import List, Optional

from shinden.enums import UpdateStatus
from shinden.mappers import (
    AnimeSearchMapper,
    UserAchievementsMapper,
    UserFavouriteTagsMapper,
    UserInformationMapper,
    UserOverviewMapper,
    UserRecommendationMapper,
    UserSettingsMapper,
)
from shinden.models import (
    Achievements,
    AddToListSettings,
    AnimeListSettings,
    AnimeSearchPage,
    FavouriteTag,
    MangaListSettings,
    PageSettings,
    ReadTimeSettings,
    Recommendation,
    UpdateResult,
    UserInformation,
    UserInformationUpdate,
    UserOverview,
    UserSettings,
)
from utils.request_handler import RequestHandler, create_request_handler_from_config

logger = logging.getLogger(__name__)


class ShindenClient:
    """Access to search results, user profile pages and the profile edit forms.

    Edit pages need an authenticated session cookie (``SHINDEN_SESSION_COOKIE``).

    HTTP errors (``NotFoundError``, ``ForbiddenError``, ``HttpError``) come
    from the request handler; ``PageStructureChangedError`` from the mappers.
    """

    def __init__(self, request_handler: Optional[RequestHandler] = None):
        self.request_handler = request_handler or RequestHandler()
        self.anime_search_mapper = AnimeSearchMapper()
        self.user_overview_mapper = UserOverviewMapper()
        self.user_achievements_mapper = UserAchievementsMapper()
        self.user_favourite_tags_mapper = UserFavouriteTagsMapper()
        self.user_recommendation_mapper = UserRecommendationMapper()
        self.user_information_mapper = UserInformationMapper()
        self.user_settings_mapper = UserSettingsMapper()

    @classmethod
    def from_config(cls, **overrides) -> 'ShindenClient':
        """Build a client from the optional ``config`` module; *overrides* win."""
        settings = {}
        try:
            import config
            settings = {
                'base_url': getattr(config, 'SHINDEN_URL', None),
                'timeout': getattr(config, 'REQUEST_TIMEOUT', None),
                'session_cookie': getattr(config, 'SHINDEN_SESSION_COOKIE', None) or None,
            }
        except ImportError:
            logger.debug('No config.py found, using default request settings')
        settings = {key: value for key, value in settings.items() if value is not None}
        settings.update(overrides)
        return cls(create_request_handler_from_config(**settings))

    def search_anime(self, search: str, page: int = 1) -> AnimeSearchPage:
        html, _ = self.request_handler.get_page('/series', params={'search': search, 'page': page})
        return self.anime_search_mapper.map(html, page=page)

    def get_user_overview(self, user_id: int) -> UserOverview:
        html, final_url = self.request_handler.get_page(f'/user/{user_id}')
        return self.user_overview_mapper.map(html, final_url)

    def get_user_achievements(self, user_id: int) -> Achievements:
        html, _ = self.request_handler.get_page(f'/user/{user_id}/achievements')
        return self.user_achievements_mapper.map(html)

    def get_user_favourite_tags(self, user_id: int) -> List[FavouriteTag]:
        html, _ = self.request_handler.get_page(f'/user/{user_id}/favourite-tags')
        return self.user_favourite_tags_mapper.map(html)

    def get_user_recommendations(self, user_id: int) -> List[Recommendation]:
        html, _ = self.request_handler.get_page(f'/user/{user_id}/recommendations')
        return self.user_recommendation_mapper.map(html)

    def get_user_information(self, user_id: int) -> UserInformation:
        """Current values of the profile edit form (needs a session cookie)."""
        html, _ = self.request_handler.get_page(f'/user/{user_id}/edit')
        return self.user_information_mapper.map(html)

    def update_user_information(self, user_id: int, update: UserInformationUpdate) -> UpdateResult:
        path = f'/user/{user_id}/edit'
        html, _ = self.request_handler.get_page(path)
        form = self.user_information_mapper.form_data(html, update)
        return self._update_result(self.request_handler.post_form(path, form))

    def get_user_settings(self, user_id: int) -> UserSettings:
        html, _ = self.request_handler.get_page(f'/user/{user_id}/settings')
        return self.user_settings_mapper.map(html)

    def update_user_page_settings(self, user_id: int,
                                  page_settings: Optional[PageSettings] = None,
                                  read_time_settings: Optional[ReadTimeSettings] = None) -> UpdateResult:
        html, _ = self.request_handler.get_page(f'/user/{user_id}/settings')
        form = self.user_settings_mapper.page_settings_form(html, page_settings, read_time_settings)
        return self._submit(f'/user/{user_id}/edit-skin-and-time', form)

    def update_user_lists_settings(self, user_id: int,
                                   anime_list_settings: Optional[AnimeListSettings] = None,
                                   manga_list_settings: Optional[MangaListSettings] = None) -> UpdateResult:
        path = f'/user/{user_id}/settings'
        html, _ = self.request_handler.get_page(path)
        form = self.user_settings_mapper.lists_settings_form(html, anime_list_settings, manga_list_settings)
        return self._submit(path, form)

    def update_user_add_to_list_settings(self, user_id: int,
                                         add_to_list_settings: AddToListSettings) -> UpdateResult:
        path = f'/user/{user_id}/settings'
        html, _ = self.request_handler.get_page(path)
        form = self.user_settings_mapper.add_to_list_settings_form(html, add_to_list_settings)
        return self._submit(path, form)

    def _submit(self, path: str, form) -> UpdateResult:
        if not form:
            logger.info(f"Nothing to update for {path}")
            return UpdateResult(UpdateStatus.SUCCESS)
        return self._update_result(self.request_handler.post_form(path, form))

    @staticmethod
    def _update_result(response) -> UpdateResult:
        if response.status_code < 400:
            return UpdateResult(UpdateStatus.SUCCESS)
        logger.warning(f"Update rejected: HTTP {response.status_code} for {response.url}")
        return UpdateResult(UpdateStatus.FAILURE, reason=f'HTTP {response.status_code}')
