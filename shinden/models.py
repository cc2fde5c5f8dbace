"""
Data models returned by the Shinden page mappers.

All models use dataclasses for lightweight internal usage and easy
serialisation to dicts / JSON (for the FastAPI REST layer).  ``to_dict()``
renders enums by name and dates in ISO format.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

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
    TitleStatus,
    TitleType,
    UpdateStatus,
    UrlType,
    UserGender,
    UserTitleStatus,
)


def _json_value(value):
    if isinstance(value, list):
        return [_json_value(item) for item in value]
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _dict_factory(items) -> dict:
    return {key: _json_value(value) for key, value in items}


class _Serializable:
    def to_dict(self) -> dict:
        return asdict(self, dict_factory=_dict_factory)


# ---------------------------------------------------------------------------
# Anime search
# ---------------------------------------------------------------------------

@dataclass
class Genre(_Serializable):
    """A genre tag linked from a search result row."""
    id: int
    name: str


@dataclass
class Rating(_Serializable):
    """Per-category scores; ``None`` where the site shows no score yet."""
    top: Optional[float] = None
    overall: Optional[float] = None
    story: Optional[float] = None
    graphics: Optional[float] = None
    music: Optional[float] = None
    characters: Optional[float] = None


@dataclass
class AnimeSearchResult(_Serializable):
    id: int
    url_type: UrlType
    image_url: str
    title: str
    genres: List[Genre] = field(default_factory=list)
    type: Optional[TitleType] = None
    episodes: Optional[int] = None
    rating: Rating = field(default_factory=Rating)
    status: Optional[TitleStatus] = None


@dataclass
class AnimeSearchPage(_Serializable):
    """One page of search results."""
    results: List[AnimeSearchResult] = field(default_factory=list)
    page: int = 1


# ---------------------------------------------------------------------------
# User profile overview
# ---------------------------------------------------------------------------

@dataclass
class MediaStatistics(_Serializable):
    """Anime or manga statistics block of a profile.

    *total_segments* counts episodes (anime) or chapters (manga) and
    *total_revisits* re-watches or re-reads.
    """
    total_time: Optional[int] = None
    mean_score: Optional[float] = None
    total_titles: Optional[int] = None
    total_segments: Optional[int] = None
    total_revisits: Optional[int] = None
    in_progress: Optional[int] = None
    completed: Optional[int] = None
    skip: Optional[int] = None
    hold: Optional[int] = None
    dropped: Optional[int] = None
    planned: Optional[int] = None


@dataclass
class FavouriteMediaItem(_Serializable):
    id: int
    url_type: UrlType
    title: str
    image_url: str
    type: TitleType
    year: Optional[int] = None


@dataclass
class EntityOverview(_Serializable):
    """A favourite character or person, with the title they are known from."""
    id: int
    url_type: UrlType
    image_url: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    media_id: Optional[int] = None
    media_title: Optional[str] = None
    media_url_type: Optional[UrlType] = None


@dataclass
class ListItemOverview(_Serializable):
    """A recent change on the user's anime or manga list."""
    id: int
    url_type: UrlType
    title: str
    image_url: str
    last_modified_at: datetime
    status: UserTitleStatus


@dataclass
class Comment(_Serializable):
    id: int
    user_id: int
    username: str
    user_avatar: str
    user_role: str
    content: str
    created_at: datetime
    user_signature: Optional[str] = None


@dataclass
class UserOverview(_Serializable):
    """Everything shown on a user's main profile page."""
    id: int
    username: str
    avatar_url: str = ''
    achievements: Optional[int] = None
    last_online: Optional[datetime] = None
    rank: str = ''
    language: str = ''
    join_date: Optional[datetime] = None
    score: Optional[int] = None
    about: Optional[str] = None
    anime_statistics: MediaStatistics = field(default_factory=MediaStatistics)
    manga_statistics: MediaStatistics = field(default_factory=MediaStatistics)
    favourite_anime: List[FavouriteMediaItem] = field(default_factory=list)
    favourite_manga: List[FavouriteMediaItem] = field(default_factory=list)
    favourite_characters: List[EntityOverview] = field(default_factory=list)
    favourite_people: List[EntityOverview] = field(default_factory=list)
    anime_list_updates: List[ListItemOverview] = field(default_factory=list)
    manga_list_updates: List[ListItemOverview] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Achievements, favourite tags, recommendations
# ---------------------------------------------------------------------------

@dataclass
class Achievement(_Serializable):
    title: str
    description: str
    progress: float
    image_url: str
    type: str
    date: Optional[date] = None
    level: Optional[str] = None
    previous: bool = False


@dataclass
class Achievements(_Serializable):
    last_check: datetime
    achievements: List[Achievement] = field(default_factory=list)

    def get_previous(self) -> List[Achievement]:
        """Return only achievements superseded by a higher level."""
        return [a for a in self.achievements if a.previous]


@dataclass
class FavouriteTag(_Serializable):
    """One row of the favourite tags table."""
    id: int
    name: str
    lowest_rating: int
    highest_rating: int
    titles_count: int
    average_rating: float
    weighted_rating: float
    spent_time: int


@dataclass
class Recommendation(_Serializable):
    """A recommendation of one title (*media*) for fans of another (*for_media*)."""
    id: int
    media_id: int
    media_url_type: UrlType
    media_title: str
    media_image_url: str
    for_media_id: int
    for_media_url_type: UrlType
    for_media_title: str
    date: datetime
    rating: int
    description: str


# ---------------------------------------------------------------------------
# Profile information and settings (edit pages)
# ---------------------------------------------------------------------------

@dataclass
class UserInformation(_Serializable):
    """Values currently filled in on the profile edit form."""
    signature: Optional[str] = None
    about_me: Optional[str] = None
    gender: Optional[UserGender] = None
    birth_year: Optional[int] = None
    birth_month: Optional[int] = None
    birth_day: Optional[int] = None
    email: Optional[str] = None


@dataclass
class UserInformationUpdate(_Serializable):
    """Changes to the profile edit form.

    ``None`` fields keep the current value unless *accept_null_fields* is
    set, in which case they are cleared.
    """
    signature: Optional[str] = None
    about_me: Optional[str] = None
    gender: Optional[UserGender] = None
    birth_date: Optional[date] = None
    email: Optional[str] = None
    accept_null_fields: bool = False


# Settings models double as update requests: a ``None`` field is left as is.

@dataclass
class PageSettings(_Serializable):
    page_theme: Optional[PageTheme] = None
    page_main_menu: Optional[PageMainMenu] = None


@dataclass
class ReadTimeSettings(_Serializable):
    """Estimated minutes per manga / visual novel chapter."""
    manga_chapter_read_time: Optional[int] = None
    visual_novel_chapter_read_time: Optional[int] = None


@dataclass
class AddToListSettings(_Serializable):
    slider_position: Optional[SliderPosition] = None
    show_add_to_list: Optional[ShowOption] = None


@dataclass
class AnimeListSettings(_Serializable):
    subtitles_languages: Optional[List[SubtitlesLanguage]] = None
    anime_watch_status: Optional[List[UserTitleStatus]] = None
    skip_fillers: Optional[SkipFillers] = None
    status_auto_change: Optional[StatusAutoChange] = None


@dataclass
class MangaListSettings(_Serializable):
    chapter_languages: Optional[List[ChapterLanguage]] = None
    manga_read_status: Optional[List[ChapterStatus]] = None
    status_auto_change: Optional[StatusAutoChange] = None


@dataclass
class UserSettings(_Serializable):
    page_settings: PageSettings
    read_time_settings: ReadTimeSettings
    add_to_list_settings: AddToListSettings
    anime_list_settings: AnimeListSettings
    manga_list_settings: MangaListSettings


@dataclass
class UpdateResult(_Serializable):
    """Outcome of a form submission; *reason* is set on failure."""
    status: UpdateStatus
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is UpdateStatus.SUCCESS
