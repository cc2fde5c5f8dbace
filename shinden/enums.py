"""
Enumerations parsed from page content.

Every enum exposes ``from_value`` which the mappers register as a type
converter.  Unknown values raise ``ValueError`` so the engine reports them
as a structure change of the field being read.
"""

from __future__ import annotations

from enum import Enum


class UrlType(Enum):
    """First path segment of a link to a media or person page."""
    SERIES = 'series'
    TITLES = 'titles'
    CHARACTER = 'character'
    STAFF = 'staff'
    MANGA = 'manga'

    @classmethod
    def from_value(cls, value: str) -> 'UrlType':
        for url_type in cls:
            if url_type.value == value:
                return url_type
        raise ValueError(f'Unknown url type: {value}')


class TitleType(Enum):
    TV = 'TV'
    OVA = 'OVA'
    ONA = 'ONA'
    MOVIE = 'Movie'
    SPECIAL = 'Special'

    @classmethod
    def from_value(cls, value: str) -> 'TitleType':
        for title_type in cls:
            if title_type.value == value:
                return title_type
        raise ValueError(f'Unknown title type: {value}')


class TitleStatus(Enum):
    """Airing status of a title; the site shows either label."""
    PROPOSAL = ('Proposal', 'Zapowiedź')
    CURRENTLY_AIRING = ('Currently Airing', 'Emitowane')
    NOT_YET_AIRED = ('Not yet aired', 'Nie wyemitowane')
    FINISHED_AIRING = ('Finished Airing', 'Zakończone')

    def __init__(self, label: str, display_value: str):
        self.label = label
        self.display_value = display_value

    @classmethod
    def from_value(cls, value: str) -> 'TitleStatus':
        for status in cls:
            if value in (status.label, status.display_value):
                return status
        raise ValueError(f'Unknown title status: {value}')


class UserTitleStatus(Enum):
    """Status of a title on a user's list."""
    IN_PROGRESS = ('in progress', 'in-progress', 'Oglądam')
    COMPLETED = ('completed', 'completed', 'Obejrzane')
    SKIP = ('skip', 'skip', 'Pomijam')
    HOLD = ('hold', 'hold', 'Wstrzymane')
    DROPPED = ('dropped', 'dropped', 'Porzucone')
    PLAN = ('plan', 'plan', 'Planuję')

    def __init__(self, form_value: str, path_value: str, display_value: str):
        self.form_value = form_value
        self.path_value = path_value
        self.display_value = display_value

    @classmethod
    def from_value(cls, value: str) -> 'UserTitleStatus':
        for status in cls:
            if value in (status.form_value, status.path_value, status.display_value):
                return status
        raise ValueError(f'Unknown status: {value}')

    @property
    def form_parameter(self) -> str:
        return 'status[]'


class UpdateStatus(Enum):
    SUCCESS = 'success'
    FAILURE = 'failure'


# ---------------------------------------------------------------------------
# Form values of the profile edit and settings pages
# ---------------------------------------------------------------------------

class FormValue(Enum):
    """Value of a form control; the member value is what the form posts.

    ``form_parameter`` is the name of the field the value is posted under.
    """

    @property
    def form_parameter(self) -> str:
        raise NotImplementedError

    @property
    def form_value(self) -> str:
        return self.value

    @classmethod
    def from_value(cls, value: str):
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f'Unknown {cls.__name__} value: {value}')


class UserGender(FormValue):
    NOT_SPECIFIED = '0'
    MALE = '1'
    FEMALE = '2'

    @property
    def form_parameter(self) -> str:
        return 'gender'


class PageTheme(FormValue):
    DEFAULT = '0'
    SIMPLE_BLUE = '1'
    BAKEMONO = '2'
    HELLOWEEN = '3'
    HIGURASHI = '4'
    CHRISTMAS = '5'
    CHRISTMAS_NO_SNOW = '6'

    @property
    def form_parameter(self) -> str:
        return 'skin_id'


class PageMainMenu(FormValue):
    ALL = 'all'
    MOBILE = 'mobile'
    PHONE = 'phone'
    NONE = 'none'

    @property
    def form_parameter(self) -> str:
        return 'pinned_menu'


class SliderPosition(FormValue):
    """How many items the "add to list" slider shows."""
    NO_LIMIT = '0'
    FOUR_ITEMS = '4'
    SIX_ITEMS = '6'
    EIGHT_ITEMS = '8'
    TEN_ITEMS = '10'

    @property
    def form_parameter(self) -> str:
        return 'steps'


class ShowOption(FormValue):
    YES = 'yes'
    NO = 'no'

    @property
    def form_parameter(self) -> str:
        return 'show'


class SkipFillers(FormValue):
    NO = '0'
    YES = '1'

    @property
    def form_parameter(self) -> str:
        return 'skip_filers'


class StatusAutoChange(FormValue):
    NO = '0'
    YES = '1'

    @property
    def form_parameter(self) -> str:
        return 'status_autochange'


class SubtitlesLanguage(FormValue):
    NONE = ''
    JAPANESE = 'jp'
    POLISH = 'pl'
    ENGLISH = 'en'
    CHINESE = 'cn'
    KOREAN = 'kr'

    @property
    def form_parameter(self) -> str:
        return 'lang[]'


class ChapterLanguage(FormValue):
    NONE = ''
    JAPANESE = 'jp'
    POLISH = 'pl'
    ENGLISH = 'en'
    CHINESE = 'cn'
    KOREAN = 'kr'

    @property
    def form_parameter(self) -> str:
        return 'chap_lang[]'


class ChapterStatus(FormValue):
    IN_PROGRESS = 'in progress'
    COMPLETED = 'completed'
    SKIP = 'skip'
    HOLD = 'hold'
    DROPPED = 'dropped'
    PLAN = 'plan'

    @property
    def form_parameter(self) -> str:
        return 'chap_status[]'
