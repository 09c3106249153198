"""Integration tests for Lambda handler."""
import json
import logging
import os
from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest
import requests

from lambda_function import JsonFormatter, lambda_handler, load_settings

FIXED_NOW = datetime(2025, 1, 8, 20, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_env():
    """Set up environment variables for testing."""
    env_vars = {
        'LOG_LEVEL': 'INFO',
        'MANIFEST_SOURCE': 'builtin',
        'TIMEOUT_SECONDS': '30',
        'CLUB_TIMEZONE': 'America/Los_Angeles'
    }
    with patch.dict(os.environ, env_vars):
        yield env_vars


@pytest.fixture(autouse=True)
def fixed_clock():
    """Pin the handler clock to noon Pacific on 2025-01-08."""
    with patch('lambda_function._current_time', return_value=FIXED_NOW):
        yield


@pytest.fixture
def mock_context():
    """Create a mock Lambda context."""
    context = Mock()
    context.function_name = 'test-function'
    context.aws_request_id = 'test-request-id'
    return context


def api_event(path, params=None, method='GET'):
    return {
        'httpMethod': method,
        'path': path,
        'queryStringParameters': params
    }


class TestSettings:
    """Test cases for configuration loading."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings()

        assert settings.manifest_source == 'builtin'
        assert settings.timeout_seconds == 30
        assert settings.club_timezone == 'America/Los_Angeles'
        assert settings.manifest_url is None

    def test_reads_environment(self):
        env_vars = {
            'MANIFEST_SOURCE': 's3',
            'MANIFEST_BUCKET': 'bucket',
            'MANIFEST_KEY': 'manifest.json',
            'TIMEOUT_SECONDS': '5'
        }
        with patch.dict(os.environ, env_vars, clear=True):
            settings = load_settings()

        assert settings.manifest_source == 's3'
        assert settings.manifest_bucket == 'bucket'
        assert settings.manifest_key == 'manifest.json'
        assert settings.timeout_seconds == 5


class TestEventRoutes:
    """Test cases for event list, calendar and export routes."""

    def test_health(self, mock_env, mock_context):
        response = lambda_handler(api_event('/health'), mock_context)

        assert response['statusCode'] == 200
        assert json.loads(response['body']) == {'status': 'ok'}

    def test_event_list(self, mock_env, mock_context):
        response = lambda_handler(api_event('/events'), mock_context)

        assert response['statusCode'] == 200
        body = json.loads(response['body'])
        assert body['total'] == 19
        assert len(body['upcoming']) == 16
        assert len(body['past']) == 3
        assert body['upcoming'][0]['event_id'] == 'social-1'
        assert body['upcoming'][0]['time_range'] == '5:30 PM - 8:00 PM'
        assert body['upcoming'][0]['category'] == 'social'
        assert body['past'][0]['event_id'] == 'past-3'

    def test_event_list_filtered(self, mock_env, mock_context):
        response = lambda_handler(
            api_event('/events', {'category': 'racing', 'when': 'upcoming'}),
            mock_context
        )

        body = json.loads(response['body'])
        assert [row['event_id'] for row in body['upcoming']] == [
            'race-1', 'race-3', 'race-4', 'race-2', 'race-6', 'race-5'
        ]
        assert body['past'] == []

    def test_event_search(self, mock_env, mock_context):
        response = lambda_handler(
            api_event('/events', {'q': 'ilwaco'}), mock_context
        )

        body = json.loads(response['body'])
        assert [row['event_id'] for row in body['upcoming']] == ['cruise-3']

    @pytest.mark.parametrize('params', [
        {'category': 'regatta'},
        {'when': 'someday'},
    ])
    def test_invalid_event_params(self, mock_env, mock_context, params):
        response = lambda_handler(api_event('/events', params), mock_context)

        assert response['statusCode'] == 400
        body = json.loads(response['body'])
        assert body['message'] == 'Invalid query parameter'
        assert body['error_type'] == 'InvalidQueryError'

    def test_calendar_month(self, mock_env, mock_context):
        response = lambda_handler(
            api_event('/events/calendar', {'date': '2025-01-15'}), mock_context
        )

        assert response['statusCode'] == 200
        body = json.loads(response['body'])
        assert body['view'] == 'month'
        assert body['title'] == 'January 2025'
        cells = {cell['day']: cell for week in body['weeks'] for cell in week}
        assert [e['event_id'] for e in cells['2025-01-11']['events']] == ['race-1']
        assert cells['2025-01-08']['is_today'] is True

    def test_calendar_bad_date(self, mock_env, mock_context):
        response = lambda_handler(
            api_event('/events/calendar', {'date': '01/15/2025'}), mock_context
        )

        assert response['statusCode'] == 400

    def test_single_event_ics(self, mock_env, mock_context):
        response = lambda_handler(api_event('/events/race-1.ics'), mock_context)

        assert response['statusCode'] == 200
        assert response['headers']['Content-Type'].startswith('text/calendar')
        assert 'wednesday-night-racing.ics' in response['headers']['Content-Disposition']
        assert 'UID:race-1@astoriayachtclub.org' in response['body']
        assert 'DTSTAMP:20250108T200000Z' in response['body']
        # 18:00 Pacific on 2025-01-11
        assert 'DTSTART:20250112T020000Z' in response['body']

    def test_unknown_event_ics(self, mock_env, mock_context):
        response = lambda_handler(api_event('/events/nope.ics'), mock_context)

        assert response['statusCode'] == 404

    def test_feed(self, mock_env, mock_context):
        response = lambda_handler(
            api_event('/events.ics', {'category': 'meeting'}), mock_context
        )

        assert response['statusCode'] == 200
        assert response['body'].count('BEGIN:VEVENT') == 3

    def test_http_api_payload_shape(self, mock_env, mock_context):
        event = {
            'rawPath': '/health',
            'requestContext': {'http': {'method': 'GET'}}
        }

        response = lambda_handler(event, mock_context)

        assert response['statusCode'] == 200


class TestGalleryRoutes:
    """Test cases for gallery routes."""

    def test_gallery_album_ascending(self, mock_env, mock_context):
        response = lambda_handler(
            api_event('/gallery', {'album': 'historical', 'order': 'asc'}),
            mock_context
        )

        body = json.loads(response['body'])
        assert [p['photo_id'] for p in body['photos']] == [
            'historical-2', 'historical-3', 'historical-1', 'historical-4'
        ]
        assert body['filtered'] is True
        assert body['photos'][0]['captured_on'] == '1935-08-04'

    def test_gallery_default_newest_first(self, mock_env, mock_context):
        response = lambda_handler(api_event('/gallery'), mock_context)

        body = json.loads(response['body'])
        assert body['total'] == 22
        assert body['filtered'] is False
        assert body['photos'][0]['photo_id'] == 'social-4'

    def test_gallery_nonmatching_search(self, mock_env, mock_context):
        response = lambda_handler(
            api_event('/gallery', {'q': 'NONMATCHING_TOKEN'}), mock_context
        )

        body = json.loads(response['body'])
        assert body['photos'] == []
        assert body['total'] == 0

    def test_album_counts(self, mock_env, mock_context):
        response = lambda_handler(api_event('/gallery/albums'), mock_context)

        albums = {a['album']: a for a in json.loads(response['body'])['albums']}
        assert albums['racing']['count'] == 6
        assert albums['cruising']['count'] == 5
        assert albums['historical']['label'] == 'Historical Photos'

    def test_invalid_order(self, mock_env, mock_context):
        response = lambda_handler(
            api_event('/gallery', {'order': 'sideways'}), mock_context
        )

        assert response['statusCode'] == 400


class TestErrorHandling:
    """Test cases for routing and failure responses."""

    def test_unknown_route(self, mock_env, mock_context):
        response = lambda_handler(api_event('/shop'), mock_context)

        assert response['statusCode'] == 404

    def test_method_not_allowed(self, mock_env, mock_context):
        response = lambda_handler(api_event('/events', method='POST'), mock_context)

        assert response['statusCode'] == 405

    def test_missing_manifest_url(self, mock_env, mock_context):
        with patch.dict(os.environ, {'MANIFEST_SOURCE': 'url'}):
            response = lambda_handler(api_event('/events'), mock_context)

        assert response['statusCode'] == 500
        body = json.loads(response['body'])
        assert body['message'] == 'Failed to load records'
        assert body['error_type'] == 'ConfigurationError'

    @patch('lambda_function.load_record_store')
    def test_manifest_fetch_failure(self, mock_load, mock_env, mock_context):
        mock_load.side_effect = requests.ConnectionError('Network error')

        response = lambda_handler(api_event('/events'), mock_context)

        assert response['statusCode'] == 500
        body = json.loads(response['body'])
        assert 'Network error' in body['error']
        assert body['error_type'] == 'ConnectionError'
        assert 'duration_seconds' in body

    @patch('lambda_function.route_request')
    def test_unexpected_error(self, mock_route, mock_env, mock_context):
        mock_route.side_effect = RuntimeError('boom')

        response = lambda_handler(api_event('/events'), mock_context)

        assert response['statusCode'] == 500
        body = json.loads(response['body'])
        assert body['message'] == 'Request failed'
        assert body['error'] == 'boom'


class TestJsonFormatter:
    """Test cases for structured log output."""

    def test_includes_extra_fields(self):
        record = logging.makeLogRecord({
            'name': 'lambda_function',
            'levelname': 'INFO',
            'msg': 'Request completed',
            'path': '/events',
            'status_code': 200
        })

        data = json.loads(JsonFormatter().format(record))

        assert data['message'] == 'Request completed'
        assert data['logger'] == 'lambda_function'
        assert data['path'] == '/events'
        assert data['status_code'] == 200
        assert 'msg' not in data
