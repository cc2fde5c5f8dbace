"""
Shinden client: scraping layer.

This package turns shinden.pl HTML pages into typed models with a
declarative mapping engine (``utils.document_mapper``), and offers a thin
FastAPI REST interface for use by front-end applications.

Quick start (Python)::

    from shinden import ShindenClient

    client = ShindenClient.from_config()
    results = client.search_anime('naruto').results

Quick start (REST)::

    uvicorn shinden.server:app --reload
"""

from shinden.client import ShindenClient
from shinden.exceptions import (
    ErrorCode,
    ForbiddenError,
    HttpError,
    NotFoundError,
    PageStructureChangedError,
    ShindenError,
)
from shinden.mappers import (
    AnimeSearchMapper,
    BaseDocumentMapper,
    UserAchievementsMapper,
    UserFavouriteTagsMapper,
    UserInformationMapper,
    UserOverviewMapper,
    UserRecommendationMapper,
    UserSettingsMapper,
)

__all__ = [
    # Client
    'ShindenClient',
    # Errors
    'ShindenError',
    'ErrorCode',
    'PageStructureChangedError',
    'HttpError',
    'NotFoundError',
    'ForbiddenError',
    # Mappers
    'BaseDocumentMapper',
    'AnimeSearchMapper',
    'UserOverviewMapper',
    'UserAchievementsMapper',
    'UserFavouriteTagsMapper',
    'UserRecommendationMapper',
    'UserInformationMapper',
    'UserSettingsMapper',
]
