"""
Pytest configuration and fixtures for Shinden client tests.
"""
import os
import sys

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

import pytest

from utils.document_mapper import DocumentMapperEngine, MappingError


class FieldError(MappingError):
    """Error type produced by the test engine's exception factory."""

    def __init__(self, code, cause=None):
        super().__init__(code)
        self.cause = cause


@pytest.fixture
def engine():
    """Engine whose errors carry the plain code and the conversion cause."""
    return DocumentMapperEngine(exception_factory=FieldError)


@pytest.fixture
def user_location():
    return 'https://shinden.pl/user/123-kosmateus'


@pytest.fixture
def sample_anime_search_html():
    """Return sample anime search results page HTML for testing."""
    return '''
    <html>
    <head><title>Shinden</title></head>
    <body>
        <section class="anime-list">
            <section>
                <article>
                    <ul class="div-row">
                        <li class="cover-col"><a href="/res/images/225x350/12345.jpg"><img src="/res/images/100x100/12345.jpg"/></a></li>
                        <li class="desc-col">
                            <h3><a href="/series/12345-naruto">Naruto</a></h3>
                            <ul>
                                <li><a href="/genre/4-akcja">Akcja</a></li>
                                <li><a href="/genre/14-przygodowe">Przygodowe</a></li>
                            </ul>
                        </li>
                        <li class="title-kind-col">TV</li>
                        <li class="episodes-col">220</li>
                        <li class="ratings-col">
                            <div class="rating rating-total"><span>8,12 <small>/10</small></span></div>
                            <div class="rating rating-story"><span>7,9</span></div>
                            <div class="rating rating-graphics"><span>7,5</span></div>
                            <div class="rating rating-music"><span>8,4</span></div>
                            <div class="rating rating-titlecahracters"><span>8,8</span></div>
                        </li>
                        <li class="rate-top">8,45</li>
                        <li class="title-status-col">Zakończone</li>
                    </ul>
                    <ul class="div-row">
                        <li class="cover-col"><a href="/res/images/225x350/999.jpg"><img src="/res/images/100x100/999.jpg"/></a></li>
                        <li class="desc-col">
                            <h3><a href="/series/999-naruto-the-movie">Naruto the Movie</a></h3>
                            <ul></ul>
                        </li>
                        <li class="title-kind-col">Movie</li>
                        <li class="episodes-col">1</li>
                        <li class="ratings-col">
                            <div class="rating rating-total"><span></span></div>
                        </li>
                        <li class="rate-top">Brak</li>
                        <li class="title-status-col">Emitowane</li>
                    </ul>
                </article>
            </section>
        </section>
    </body>
    </html>
    '''


@pytest.fixture
def sample_user_overview_html():
    """Return sample user profile page HTML for testing."""
    return '''
    <html>
    <body>
    <div class="l-main-contantainer controller-user">
        <div><button><strong>Kosmateus</strong></button></div>
        <aside class="info-aside aside-user">
            <img src="/res/avatars/123.jpg"/>
            <div class="achievements"><span>42</span></div>
            <dl class="stats">
                <dt>Ostatnio online</dt><dd>2024-03-01 12:30:00</dd>
                <dt>Ranga</dt><dd>Użytkownik</dd>
                <dt>Język</dt><dd>Polski</dd>
                <dt>Dołączył</dt><dd>2019-05-10 08:00:00</dd>
                <dt>Punkty</dt><dd>1 234</dd>
            </dl>
        </aside>
        <div class="box-userprofile">
            <div class="row about-me">Lubię <b>anime</b>.</div>
        </div>
        <section class="anime-stats">
            <div class="total-time"><strong title="12345 min">8 dni</strong></div>
            <div class="mean-score"><strong>7,85</strong></div>
            <table class="data-view-table">
                <tr><td>Tytuły</td><td>150</td></tr>
                <tr><td>Odcinki</td><td>2 500</td></tr>
                <tr><td>Powtórki</td><td>3</td></tr>
            </table>
            <table class="data-view-table">
                <tr><td>Oglądam</td><td>5</td></tr>
                <tr><td>Obejrzane</td><td>120</td></tr>
                <tr><td>Pomijam</td><td>2</td></tr>
                <tr><td>Wstrzymane</td><td>4</td></tr>
                <tr><td>Porzucone</td><td>6</td></tr>
                <tr><td>Planuję</td><td>13</td></tr>
            </table>
        </section>
        <section class="manga-stats">
            <div class="total-time"><strong title="600 min">10 godzin</strong></div>
            <div class="mean-score"><strong>6,5</strong></div>
            <table class="data-view-table">
                <tr><td>Tytuły</td><td>10</td></tr>
                <tr><td>Rozdziały</td><td>300</td></tr>
                <tr><td>Powtórki</td><td>0</td></tr>
            </table>
            <table class="data-view-table">
                <tr><td>Czytam</td><td>1</td></tr>
                <tr><td>Przeczytane</td><td>7</td></tr>
                <tr><td>Pomijam</td><td>0</td></tr>
                <tr><td>Wstrzymane</td><td>1</td></tr>
                <tr><td>Porzucone</td><td>0</td></tr>
                <tr><td>Planuję</td><td>1</td></tr>
            </table>
        </section>
        <section class="favouritue animes">
            <ul>
                <li data-id="12345">
                    <img src="/res/images/12345.jpg"/>
                    <h3><a href="/series/12345-naruto">Naruto</a></h3>
                    <span>2002</span><span>TV</span>
                </li>
            </ul>
        </section>
        <section class="favouritue mangas">
            <ul></ul>
        </section>
        <section class="favouritue characters">
            <ul>
                <li data-id="77">
                    <img src="/res/images/chars/77.jpg"/>
                    <h3><a href="/character/77-naruto-uzumaki">Uzumaki, Naruto</a></h3>
                    <div><a href="/series/12345-naruto">Naruto</a></div>
                </li>
            </ul>
        </section>
        <section class="favouritue staffs">
            <ul>
                <li data-id="88">
                    <img src="/res/images/staff/88.jpg"/>
                    <h3><a href="/staff/88-masashi-kishimoto">Kishimoto Masashi</a></h3>
                </li>
            </ul>
        </section>
        <div class="updates">
            <section class="push6 col6 box last-updates anime-updates">
                <ul>
                    <li>
                        <a href="/series/12345-naruto"><img src="/res/images/12345.jpg"/></a>
                        <h4><a href="/series/12345-naruto">Naruto</a></h4>
                        <span>Oglądam: <time datetime="2024-02-28 21:15:00">wczoraj</time></span>
                    </li>
                </ul>
            </section>
            <section class="push6 col6 box">
                <ul>
                    <li>
                        <a href="/manga/555-berserk"><img src="/res/images/555.jpg"/></a>
                        <h4><a href="/manga/555-berserk">Berserk</a></h4>
                        <span>Planuję: <time datetime="2024-02-27 10:00:00">przedwczoraj</time></span>
                    </li>
                </ul>
            </section>
        </div>
        <section class="box comments">
            <ul>
                <li class="media media-comment">
                    <div class="img">
                        <img src="/res/avatars/456.jpg"/>
                        <ul><li>Moderator</li></ul>
                    </div>
                    <div class="media-body">
                        <h3><a href="/user/456-commenter">Commenter</a> <a href="/comment/9876">#</a></h3>
                        <span title="2024-02-20 10:00:00">2 tygodnie temu</span>
                        <p>First line<br/>Second line</p>
                        <div class="media-comment-signature">Pozdrawiam</div>
                    </div>
                </li>
                <li class="media media-comment">
                    <div class="img">
                        <img src="/res/avatars/789.jpg"/>
                        <ul><li>Użytkownik</li></ul>
                    </div>
                    <div class="media-body">
                        <h3><a href="/user/789-other">Other</a> <a href="/comment/9877">#</a></h3>
                        <span title="2024-02-21 11:00:00">2 tygodnie temu</span>
                        <p>Nice profile</p>
                    </div>
                </li>
            </ul>
        </section>
    </div>
    </body>
    </html>
    '''


@pytest.fixture
def sample_achievements_html():
    """Return sample achievements page HTML for testing."""
    return '''
    <html>
    <body>
        <section class="achv">
            <h2>Osiągnięcia <span class="timeago" title="2024-03-01 10:00:00">dzisiaj</span></h2>
            <div class="achv-entry">
                <img src="/res/achv/1.png"/>
                <h3>Maratończyk <p class="achv-level">Anime: Level 3 <span class="timeago" title="2023-12-24">24.12.2023</span></p></h3>
                <div class="progress"><span><span style="width: 75%"></span></span></div>
                <p class="desc">Obejrzyj 100 odcinków</p>
            </div>
            <div class="achv-entry prev">
                <img src="/res/achv/2.png"/>
                <h3>Czytelnik <p class="achv-level">Manga <span class="timeago" title="2023-01-05"></span></p></h3>
                <div class="progress"><span><span style="width: 100%"></span></span></div>
                <p class="desc">Przeczytaj 10 rozdziałów</p>
            </div>
        </section>
    </body>
    </html>
    '''


@pytest.fixture
def sample_favourite_tags_html():
    """Return sample favourite tags table HTML for testing."""
    return '''
    <html>
    <body>
        <table class="fav-tags">
            <thead>
                <tr><th>#</th><th>Tag</th><th>Min</th><th>Max</th><th>Tytuły</th><th>Średnia</th><th>Ważona</th><th>Czas</th></tr>
            </thead>
            <tbody>
                <tr data-tag-id="4">
                    <td>1</td><td>Akcja</td><td>3</td><td>10</td><td>25</td>
                    <td data-sort-value="7.85">7,85</td><td data-sort-value="7.2">7,20</td><td data-sort-value="1440">1 dzień</td>
                </tr>
                <tr data-tag-id="14">
                    <td>2</td><td>Przygodowe</td><td>5</td><td>9</td><td>12</td>
                    <td data-sort-value="7.1">7,10</td><td data-sort-value="6.5">6,50</td><td data-sort-value="600">10 godzin</td>
                </tr>
            </tbody>
        </table>
    </body>
    </html>
    '''


@pytest.fixture
def sample_recommendations_html():
    """Return sample recommendations page HTML for testing."""
    return '''
    <html>
    <body>
        <div class="l-container-col2 box-userprofile">
            <div class="media clearfix" id="recommendation_321">
                <img src="/res/images/12345.jpg"/>
                <div class="title"><a href="/series/12345-naruto">Naruto</a></div>
                <div class="info">polecane dla fanów</div>
                <div class="title"><a href="/series/20-bleach">Bleach</a></div>
                <span class="add-date" title="2024-01-15 18:30:00">15.01.2024</span>
                <div class="progressbar"><div class="progressbar-value" style="width: 80%"></div></div>
            </div>
            <p>Great show.<br/>Watch it.</p>
            <div class="media clearfix" id="recommendation_322">
                <img src="/res/images/555.jpg"/>
                <div class="title"><a href="/manga/555-berserk">Berserk</a></div>
                <div class="info">polecane dla fanów</div>
                <div class="title"><a href="/manga/556-vagabond">Vagabond</a></div>
                <span class="add-date" title="2024-01-16 09:00:00">16.01.2024</span>
                <div class="progressbar"><div class="progressbar-value" style="width: 65%"></div></div>
            </div>
            <p></p>
            <p>Dark and brutal.</p>
            <p class="text-center">Pokaż więcej</p>
        </div>
    </body>
    </html>
    '''


@pytest.fixture
def sample_user_information_html():
    """Return sample profile edit page HTML for testing."""
    return '''
    <html lang="pl">
    <body>
      <form class="creator-form" method="post" action="/user/123/edit">
        <input type="hidden" name="csrf" value="info-csrf">
        <textarea id="signature" name="signature">Kosmateus was here</textarea>
        <textarea name="about_me">I like long shows.</textarea>
        <select id="gender" name="gender">
          <option value="0">Nie podano</option>
          <option value="1" selected="selected">Mężczyzna</option>
          <option value="2">Kobieta</option>
        </select>
        <select id="birthdate" name="birthdate_day">
          <option value="">-</option>
          <option value="24" selected="selected">24</option>
        </select>
        <select id="birthdate" name="birthdate_month">
          <option value="">-</option>
          <option value="12" selected="selected">12</option>
        </select>
        <select id="birthdate" name="birthdate_year">
          <option value="">-</option>
          <option value="1990" selected="selected">1990</option>
        </select>
        <input type="email" name="email" value="user@example.com">
      </form>
    </body>
    </html>
    '''


@pytest.fixture
def sample_user_settings_html():
    """Return sample settings page HTML (three forms) for testing."""
    return '''
    <html lang="pl">
    <body>
      <form class="creator-form" method="post" action="/user/123/edit-skin-and-time">
        <input type="hidden" name="csrf" value="page-csrf">
        <select id="skin_id" name="skin_id">
          <option value="0">Domyślny</option>
          <option value="2" selected="selected">Bakemono</option>
        </select>
        <select id="pinned_menu" name="pinned_menu">
          <option value="all">Wszędzie</option>
          <option value="mobile" selected="selected">Mobile</option>
        </select>
        <input type="number" name="manga_time" value="5">
        <input type="number" name="novel_time" value="12">
      </form>
      <form class="horizontal-form" method="post" action="/user/123/settings">
        <input type="hidden" name="csrf" value="lists-csrf">
        <div class="push0 col4 box">
          <input type="checkbox" name="lang[]" value="pl" checked="checked">
          <input type="checkbox" name="lang[]" value="en">
          <input type="checkbox" name="lang[]" value="jp" checked="checked">
        </div>
        <div class="push4 col4 box">
          <input type="checkbox" name="status[]" value="in progress" checked="checked">
          <input type="checkbox" name="status[]" value="plan">
        </div>
        <input type="radio" name="skip_filers" value="0">
        <input type="radio" name="skip_filers" value="1" checked="checked">
        <select name="status_autochange">
          <option value="0">Nie</option>
          <option value="1" selected="selected">Tak</option>
        </select>
        <div class="push0 col4 box">
          <input type="checkbox" name="chap_lang[]" value="pl" checked="checked">
          <input type="checkbox" name="chap_lang[]" value="en">
        </div>
        <div class="push4 col4 box">
          <input type="checkbox" name="chap_status[]" value="completed" checked="checked">
          <input type="checkbox" name="chap_status[]" value="hold" checked="checked">
        </div>
        <select name="status_autochange">
          <option value="0" selected="selected">Nie</option>
          <option value="1">Tak</option>
        </select>
      </form>
      <form class="creator-form box" method="post" action="/user/123/settings">
        <input type="hidden" name="csrf" value="add-csrf">
        <select name="steps">
          <option value="0">Bez limitu</option>
          <option value="6" selected="selected">6</option>
        </select>
        <select name="show">
          <option value="yes" selected="selected">Tak</option>
          <option value="no">Nie</option>
        </select>
      </form>
    </body>
    </html>
    '''
