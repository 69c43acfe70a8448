import pytest

from routes import dashboard as routes_dashboard
from tests.app_helpers import load_app


@pytest.fixture
def app_client(tmp_path, raw_platform_data):
    app_module = load_app(tmp_path, raw_platform_data)
    return app_module, app_module.app.test_client()


def test_games_default_view(app_client):
    _, client = app_client

    response = client.get('/api/games')

    assert response.status_code == 200
    data = response.get_json()
    assert data['count'] == 6
    assert data['total'] == 6
    assert [game['name'] for game in data['games']][:2] == ['Disco Elysium', 'Portal 2']
    assert data['criteria']['sort'] == 'recent'
    assert data['criteria']['tagLabel'] == 'All Tags'
    assert data['stats'] == {
        'gameCount': 6,
        'totalUnlocked': 100,
        'fullyCompletedCount': 2,
    }


def test_games_filtered_and_sorted(app_client):
    _, client = app_client

    response = client.get(
        '/api/games?platform=steam&include=Puzzle&exclude=Co-op&sort=playtime'
    )

    assert response.status_code == 200
    data = response.get_json()
    assert [game['name'] for game in data['games']] == ['Portal']
    assert data['stats']['totalUnlocked'] == 3
    assert data['criteria']['tagLabel'] == '+1 -1'


def test_games_search(app_client):
    _, client = app_client

    data = client.get('/api/games?q=SONIC&sort=name').get_json()

    assert [game['name'] for game in data['games']] == [
        'Sonic the Hedgehog',
        'Sonic the Hedgehog: Bonus',
    ]
    bonus = data['games'][1]
    assert bonus['link'] == 'https://retroachievements.org/game/1?set=1234'
    assert bonus['progress']['percentage'] == 30


def test_invalid_sort_is_bad_request(app_client):
    _, client = app_client

    response = client.get('/api/games?sort=rarity')

    assert response.status_code == 400
    assert response.get_json()['field'] == 'sort'


def test_invalid_platform_is_bad_request(app_client):
    _, client = app_client

    response = client.get('/api/stats?platform=xbox')

    assert response.status_code == 400


def test_single_game(app_client):
    _, client = app_client

    response = client.get('/api/games/steam/620')

    assert response.status_code == 200
    data = response.get_json()
    assert data['name'] == 'Portal 2'
    assert data['progress']['status'] == 'Complete'
    assert data['link'] == 'https://steamcommunity.com/stats/620/achievements'


def test_single_game_not_found(app_client):
    _, client = app_client

    response = client.get('/api/games/gog/620')

    assert response.status_code == 404
    assert 'error' in response.get_json()


def test_tags_endpoint(app_client):
    _, client = app_client

    data = client.get('/api/tags').get_json()

    assert data['tags'] == ['Co-op', 'Platformer', 'Puzzle', 'RPG']
    assert data['frequency'][0] == {'tag': 'Platformer', 'games': 2}


def test_stats_endpoint(app_client):
    _, client = app_client

    data = client.get('/api/stats?platform=gog').get_json()

    assert data['stats'] == {'gameCount': 1, 'totalUnlocked': 20, 'fullyCompletedCount': 0}
    assert data['criteria']['platform'] == 'gog'


def test_charts_endpoint(app_client):
    _, client = app_client

    data = client.get('/api/charts').get_json()

    assert [row['games'] for row in data['platforms']] == [2, 1, 3]
    assert data['consoles'][0] == {'console': 'PC', 'games': 3}


def test_health_endpoint(app_client):
    _, client = app_client

    data = client.get('/api/health').get_json()

    assert data == {
        'loaded': True,
        'games': 6,
        'platforms': ['steam', 'gog', 'retroachievements'],
        'error': None,
    }


def test_unknown_api_route_returns_json(app_client):
    _, client = app_client

    response = client.get('/api/nothing-here')

    assert response.status_code == 404
    assert response.get_json() == {'error': 'not found'}


def test_missing_data_returns_service_unavailable(tmp_path):
    app_module = load_app(tmp_path)
    client = app_module.app.test_client()

    response = client.get('/api/games')

    assert response.status_code == 503
    assert 'No games data found' in response.get_json()['reason']
    health = client.get('/api/health').get_json()
    assert health['loaded'] is False


def test_sample_data_fallback(tmp_path):
    app_module = load_app(tmp_path, sample_fallback=True)
    client = app_module.app.test_client()

    data = client.get('/api/games?sort=name').get_json()

    assert data['count'] == 5
    assert 'Portal 2' in [game['name'] for game in data['games']]


def test_reload_catalog_picks_up_new_files(tmp_path, raw_platform_data, monkeypatch):
    app_module = load_app(tmp_path, {'steam': raw_platform_data['steam']})
    assert app_module.catalog_state.total_games == 2

    (tmp_path / 'data' / 'gog.json').write_text(
        '[{"platformId": "x", "name": "Late Arrival"}]', encoding='utf-8'
    )
    monkeypatch.setenv('DATA_SOURCE', str(tmp_path / 'data'))

    assert app_module.reload_catalog() == 3
    assert app_module.catalog_state.find('gog', 'x').name == 'Late Arrival'


def test_unexpected_error_returns_json_500(app_client, monkeypatch):
    _, client = app_client

    def broken_payload(game):
        raise KeyError(game.effective_id)

    monkeypatch.setitem(routes_dashboard._context, 'build_game_payload', broken_payload)

    response = client.get('/api/games/steam/620')

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Internal server error'}


def test_tag_with_comma_can_be_filtered(tmp_path):
    app_module = load_app(
        tmp_path,
        {
            'steam': [
                {'platformId': '1', 'name': 'Alien', 'tags': ['Sci-Fi, Horror']},
                {'platformId': '2', 'name': 'Tetris', 'tags': ['Puzzle']},
            ]
        },
    )
    client = app_module.app.test_client()

    assert client.get('/api/tags').get_json()['tags'] == ['Puzzle', 'Sci-Fi, Horror']
    data = client.get('/api/games', query_string={'include': 'Sci-Fi, Horror'}).get_json()
    assert [game['name'] for game in data['games']] == ['Alien']
