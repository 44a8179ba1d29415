"""Generation client against a monkeypatched requests.post."""

import json
from types import SimpleNamespace

import pytest
import requests

from services.errors import GenerationError
from services.generation import GenerationClient, build_meal_plan_prompt, _json_from_text
from services.plan_request import GenerationOptions, build_meal_plan_request


def blank_profile(**overrides):
    fields = dict(
        daily_calories_target=None, daily_protein_g=None, daily_carbs_g=None, daily_fat_g=None,
        diet_type=None, allergies=None, disliked_foods=None, favorite_cuisines=None,
        cooking_skill=None, meal_prep_time_minutes=None, budget_level=None, servings_per_meal=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError('not json')
        return self._payload


def chat_payload(content):
    return {'choices': [{'message': {'role': 'assistant', 'content': content}}]}


@pytest.fixture
def client():
    return GenerationClient(api_key='sk-test', base_url='https://llm.example.com/v1/', timeout=3)


@pytest.fixture
def request_obj():
    profile = blank_profile(allergies=['peanuts'], disliked_foods=['olives'])
    return build_meal_plan_request(profile, GenerationOptions(number_of_days=2, include_snacks=True))


def test_generate_meal_plan_posts_chat_completion(monkeypatch, client, request_obj):
    calls = []

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({'url': url, 'headers': headers, 'json': json, 'timeout': timeout})
        return FakeResponse(payload=chat_payload('{"name": "Plan", "days": []}'))

    monkeypatch.setattr(requests, 'post', fake_post)
    result = client.generate_meal_plan(request_obj)

    assert result == {'name': 'Plan', 'days': []}
    call = calls[0]
    assert call['url'] == 'https://llm.example.com/v1/chat/completions'
    assert call['timeout'] == 3
    assert call['headers']['Authorization'] == 'Bearer sk-test'
    assert call['json']['response_format'] == {'type': 'json_object'}
    assert call['json']['temperature'] == 0.7
    assert 'ALLERGIES (MUST AVOID): peanuts' in call['json']['messages'][1]['content']


def test_timeout_raises_generation_error(monkeypatch, client, request_obj):
    def fake_post(*args, **kwargs):
        raise requests.Timeout('slow')

    monkeypatch.setattr(requests, 'post', fake_post)
    with pytest.raises(GenerationError, match='timed out'):
        client.generate_meal_plan(request_obj)


def test_connection_error_raises_generation_error(monkeypatch, client, request_obj):
    def fake_post(*args, **kwargs):
        raise requests.ConnectionError('refused')

    monkeypatch.setattr(requests, 'post', fake_post)
    with pytest.raises(GenerationError):
        client.generate_meal_plan(request_obj)


def test_http_error_status(monkeypatch, client, request_obj):
    monkeypatch.setattr(requests, 'post', lambda *a, **k: FakeResponse(503, text='overloaded'))
    with pytest.raises(GenerationError, match='503'):
        client.generate_meal_plan(request_obj)


def test_empty_content(monkeypatch, client, request_obj):
    monkeypatch.setattr(requests, 'post', lambda *a, **k: FakeResponse(payload=chat_payload('')))
    with pytest.raises(GenerationError, match='No response'):
        client.generate_meal_plan(request_obj)


def test_unparseable_content(monkeypatch, client, request_obj):
    monkeypatch.setattr(requests, 'post', lambda *a, **k: FakeResponse(payload=chat_payload('not json at all')))
    with pytest.raises(GenerationError, match='unparseable'):
        client.generate_meal_plan(request_obj)


def test_json_array_is_rejected(monkeypatch, client, request_obj):
    monkeypatch.setattr(requests, 'post', lambda *a, **k: FakeResponse(payload=chat_payload('[1, 2]')))
    with pytest.raises(GenerationError):
        client.generate_meal_plan(request_obj)


def test_missing_api_key_fails_without_request(monkeypatch, request_obj):
    def fake_post(*args, **kwargs):
        raise AssertionError('should not be called')

    monkeypatch.setattr(requests, 'post', fake_post)
    with pytest.raises(GenerationError, match='not configured'):
        GenerationClient(api_key='').generate_meal_plan(request_obj)


def test_analyze_food_photo_sends_data_url(monkeypatch, client):
    captured = {}

    def fake_post(url, headers=None, json=None, timeout=None):
        captured.update(json)
        return FakeResponse(payload=chat_payload('{"foodName": "Salad", "confidence": "high"}'))

    monkeypatch.setattr(requests, 'post', fake_post)
    result = client.analyze_food_photo(b'\xff\xd8jpegbytes')

    assert result['foodName'] == 'Salad'
    assert captured['max_tokens'] == 1000
    image_part = captured['messages'][1]['content'][1]
    assert image_part['image_url']['url'].startswith('data:image/jpeg;base64,')


def test_json_from_text_strips_code_fences():
    assert _json_from_text('```json\n{"a": 1}\n```') == {'a': 1}
    assert _json_from_text('Here you go: {"a": 2} enjoy') == {'a': 2}


def test_prompt_lists_snack_slot(request_obj):
    prompt = build_meal_plan_prompt(request_obj)
    assert 'Generate a 2-day meal plan' in prompt
    assert 'Meals per day: 4 (breakfast, lunch, dinner, snack)' in prompt
    assert 'Foods to avoid: olives' in prompt
    assert '- Any cuisine' in prompt
    assert 'Shopping list categories: Produce, Meat & Seafood, Dairy & Eggs' in prompt


def test_from_config_reads_flask_config(app):
    client = GenerationClient.from_config(app.config)
    assert client.api_key == 'test-key'
    assert client.model == 'gpt-4o'
    assert client.timeout == 5
