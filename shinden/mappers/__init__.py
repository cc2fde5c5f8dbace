"""
Page mappers: each one turns the HTML of one kind of Shinden page into
models from ``shinden.models``.
"""

from shinden.mappers.base import BaseDocumentMapper
from shinden.mappers.anime_search_mapper import AnimeSearchMapper
from shinden.mappers.user_overview_mapper import UserOverviewMapper
from shinden.mappers.user_achievements_mapper import UserAchievementsMapper
from shinden.mappers.user_favourite_tags_mapper import UserFavouriteTagsMapper
from shinden.mappers.user_recommendation_mapper import UserRecommendationMapper
from shinden.mappers.user_information_mapper import UserInformationMapper
from shinden.mappers.user_settings_mapper import UserSettingsMapper

__all__ = [
    'BaseDocumentMapper',
    'AnimeSearchMapper',
    'UserOverviewMapper',
    'UserAchievementsMapper',
    'UserFavouriteTagsMapper',
    'UserRecommendationMapper',
    'UserInformationMapper',
    'UserSettingsMapper',
]
