"""
Thin FastAPI REST layer wrapping the page mappers.

The caller fetches the HTML itself and posts it here; nothing is downloaded
by the server.  Run with::

    uvicorn shinden.server:app --reload --port 8100
"""

from __future__ import annotations

import logging
from typing import Callable

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from shinden.exceptions import PageStructureChangedError
from shinden.mappers import (
    AnimeSearchMapper,
    UserAchievementsMapper,
    UserFavouriteTagsMapper,
    UserInformationMapper,
    UserOverviewMapper,
    UserRecommendationMapper,
    UserSettingsMapper,
)

logger = logging.getLogger(__name__)

anime_search_mapper = AnimeSearchMapper()
user_overview_mapper = UserOverviewMapper()
user_achievements_mapper = UserAchievementsMapper()
user_favourite_tags_mapper = UserFavouriteTagsMapper()
user_recommendation_mapper = UserRecommendationMapper()
user_information_mapper = UserInformationMapper()
user_settings_mapper = UserSettingsMapper()


def _result_to_dict(result):
    """Convert a mapper result (model or list of models) to plain JSON data."""
    if isinstance(result, list):
        return [item.to_dict() for item in result]
    return result.to_dict()


def _run(parse: Callable[[], object]):
    try:
        return _result_to_dict(parse())
    except PageStructureChangedError as exc:
        logger.warning(f"Page structure changed: {exc.code}")
        raise HTTPException(status_code=422, detail={'code': exc.code, 'message': str(exc)}) from exc
    except Exception as exc:
        logger.error(f"Mapping failed: {exc}")
        raise HTTPException(status_code=500, detail=str(exc)) from exc


app = FastAPI(
    title='Shinden Client API',
    version='0.1.0',
    description='Structured parsing API for Shinden HTML pages.',
)


# ---------------------------------------------------------------------------
# Request / response schemas (Pydantic models for FastAPI validation)
# ---------------------------------------------------------------------------

class HtmlPayload(BaseModel):
    """POST body for all parse endpoints."""
    html: str
    location: str = ''
    page: int = 1


class HealthResponse(BaseModel):
    status: str = 'ok'


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get('/api/health', response_model=HealthResponse)
async def health_check():
    """Simple liveness check."""
    return HealthResponse()


@app.post('/api/parse/anime-search')
async def api_parse_anime_search(payload: HtmlPayload):
    """Parse an anime search results page."""
    return _run(lambda: anime_search_mapper.map(payload.html, page=payload.page))


@app.post('/api/parse/user-overview')
async def api_parse_user_overview(payload: HtmlPayload):
    """Parse a user profile page; ``location`` must be the profile URL."""
    return _run(lambda: user_overview_mapper.map(payload.html, payload.location))


@app.post('/api/parse/user-achievements')
async def api_parse_user_achievements(payload: HtmlPayload):
    return _run(lambda: user_achievements_mapper.map(payload.html))


@app.post('/api/parse/user-favourite-tags')
async def api_parse_user_favourite_tags(payload: HtmlPayload):
    return _run(lambda: user_favourite_tags_mapper.map(payload.html))


@app.post('/api/parse/user-recommendations')
async def api_parse_user_recommendations(payload: HtmlPayload):
    return _run(lambda: user_recommendation_mapper.map(payload.html))


@app.post('/api/parse/user-information')
async def api_parse_user_information(payload: HtmlPayload):
    """Parse the profile edit page."""
    return _run(lambda: user_information_mapper.map(payload.html))


@app.post('/api/parse/user-settings')
async def api_parse_user_settings(payload: HtmlPayload):
    return _run(lambda: user_settings_mapper.map(payload.html))
