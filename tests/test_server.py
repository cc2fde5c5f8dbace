"""
Tests for the FastAPI REST layer (shinden/server.py).
"""
import os
import sys

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

import pytest
from fastapi.testclient import TestClient

from shinden.server import app


@pytest.fixture
def client():
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        response = client.get('/api/health')
        assert response.status_code == 200
        assert response.json() == {'status': 'ok'}


class TestParseEndpoints:
    def test_anime_search(self, client, sample_anime_search_html):
        response = client.post('/api/parse/anime-search', json={'html': sample_anime_search_html, 'page': 3})
        assert response.status_code == 200
        data = response.json()
        assert data['page'] == 3
        assert data['results'][0]['id'] == 12345
        assert data['results'][0]['type'] == 'TV'

    def test_user_overview(self, client, sample_user_overview_html, user_location):
        response = client.post('/api/parse/user-overview',
                               json={'html': sample_user_overview_html, 'location': user_location})
        assert response.status_code == 200
        data = response.json()
        assert data['id'] == 123
        assert data['last_online'] == '2024-03-01T12:30:00'
        assert data['anime_list_updates'][0]['status'] == 'IN_PROGRESS'

    def test_user_overview_without_location(self, client, sample_user_overview_html):
        response = client.post('/api/parse/user-overview', json={'html': sample_user_overview_html})
        assert response.status_code == 422
        assert response.json()['detail']['code'] == 'user.overview.id'

    def test_user_achievements(self, client, sample_achievements_html):
        response = client.post('/api/parse/user-achievements', json={'html': sample_achievements_html})
        assert response.status_code == 200
        data = response.json()
        assert data['last_check'] == '2024-03-01T10:00:00'
        assert data['achievements'][0]['date'] == '2023-12-24'

    def test_user_favourite_tags(self, client, sample_favourite_tags_html):
        response = client.post('/api/parse/user-favourite-tags', json={'html': sample_favourite_tags_html})
        assert response.status_code == 200
        assert [tag['name'] for tag in response.json()] == ['Akcja', 'Przygodowe']

    def test_user_recommendations(self, client, sample_recommendations_html):
        response = client.post('/api/parse/user-recommendations', json={'html': sample_recommendations_html})
        assert response.status_code == 200
        assert response.json()[1]['media_title'] == 'Berserk'

    def test_structure_change_is_422(self, client):
        response = client.post('/api/parse/user-achievements', json={'html': '<html></html>'})
        assert response.status_code == 422
        assert response.json()['detail']['code'] == 'user.achievements.last-check'

    def test_missing_html_is_rejected(self, client):
        response = client.post('/api/parse/anime-search', json={'page': 1})
        assert response.status_code == 422

    def test_user_information(self, client, sample_user_information_html):
        response = client.post('/api/parse/user-information', json={'html': sample_user_information_html})
        assert response.status_code == 200
        assert response.json()['gender'] == 'MALE'
        assert response.json()['birth_year'] == 1990

    def test_user_settings(self, client, sample_user_settings_html):
        response = client.post('/api/parse/user-settings', json={'html': sample_user_settings_html})
        assert response.status_code == 200
        data = response.json()
        assert data['anime_list_settings']['anime_watch_status'] == ['IN_PROGRESS']
        assert data['add_to_list_settings']['slider_position'] == 'SIX_ITEMS'

    def test_recommendation_url_types_by_name(self, client, sample_recommendations_html):
        response = client.post('/api/parse/user-recommendations', json={'html': sample_recommendations_html})
        assert response.json()[0]['media_url_type'] == 'SERIES'
