"""Candidate plan sanitization before persistence."""

import pytest

from services.sanitize import sanitize_candidate_plan, sanitize_meal, sanitize_ingredients
from conftest import make_meal


def test_well_formed_meal_is_normalized():
    meal, reason = sanitize_meal(make_meal('Oatmeal', 'Breakfast'))
    assert reason is None
    assert meal['meal_type'] == 'breakfast'
    assert meal['prep_time_minutes'] == 10
    assert meal['total_time_minutes'] == 25
    assert meal['ingredients'][0] == {'name': 'Rolled oats', 'amount': 80.0, 'unit': 'g'}
    assert meal['ingredients'][1] == {'name': 'Milk', 'amount': 0.5, 'unit': 'cup'}
    assert meal['instructions'] == [
        {'step': 1, 'text': 'Combine everything.'},
        {'step': 2, 'text': 'Cook until done.'},
    ]
    assert meal['estimated_cost'] == 12.0


def test_numbers_are_clamped():
    meal, _ = sanitize_meal(make_meal('Feast', 'dinner', calories=99999, protein=-5,
                                      servings=0, prepTime=5000, estimatedCost=-3))
    assert meal['calories'] == 5000
    assert meal['protein_g'] == 0
    assert meal['servings'] == 1
    assert meal['prep_time_minutes'] == 1440
    assert meal['estimated_cost'] == 0


def test_snacks_alias_and_unknown_difficulty():
    meal, _ = sanitize_meal(make_meal('Trail mix', 'snacks', difficulty='trivial'))
    assert meal['meal_type'] == 'snack'
    assert meal['difficulty'] is None


def test_meal_without_name_is_skipped():
    meal, reason = sanitize_meal(make_meal('   ', 'lunch'))
    assert meal is None
    assert reason == 'missing name'


def test_meal_with_unknown_type_is_skipped():
    meal, reason = sanitize_meal(make_meal('Midnight pizza', 'fourth_meal'))
    assert meal is None
    assert 'unknown meal type' in reason


def test_meal_without_ingredients_or_instructions_is_skipped():
    assert sanitize_meal(make_meal('Air', 'lunch', ingredients=[]))[0] is None
    assert sanitize_meal(make_meal('Mystery', 'lunch', instructions=[]))[0] is None


def test_ingredients_without_name_are_dropped():
    ingredients = sanitize_ingredients([
        {'name': '', 'amount': 1, 'unit': 'cup'},
        {'amount': 2},
        'Salt',
        {'name': 'Eggs', 'amount': '2', 'unit': 'each'},
    ])
    assert [i['name'] for i in ingredients] == ['Salt', 'Eggs']
    assert ingredients[1] == {'name': 'Eggs', 'amount': 2.0, 'unit': 'piece'}


def test_days_outside_range_are_skipped():
    raw = {
        'name': 'Plan',
        'days': [
            {'day': 1, 'meals': [make_meal('A', 'lunch')]},
            {'day': 5, 'meals': [make_meal('B', 'lunch'), make_meal('C', 'dinner')]},
            {'day': 0, 'meals': [make_meal('D', 'lunch')]},
        ],
    }
    plan = sanitize_candidate_plan(raw, total_days=2)
    assert [d['day'] for d in plan['days']] == [1]
    assert plan['skipped_days'] == 2
    assert plan['skipped_meals'] == 3


def test_non_integer_day_uses_position():
    raw = {'days': [
        {'day': 'Monday', 'meals': [make_meal('A', 'lunch')]},
        {'meals': [make_meal('B', 'lunch')]},
    ]}
    plan = sanitize_candidate_plan(raw, total_days=2)
    assert [d['day'] for d in plan['days']] == [1, 2]
    assert plan['name'] == 'Meal Plan'


def test_shopping_list_is_normalized():
    raw = {
        'days': [],
        'shoppingList': [
            {'category': 'Produce', 'items': [
                {'name': 'Spinach', 'amount': '200', 'unit': 'Grams', 'estimatedCost': 3},
                {'name': '', 'amount': 1},
            ]},
            {'category': None, 'items': [{'name': 'Rice', 'amount': 1, 'unit': 'kg'}]},
            {'category': 'Empty', 'items': []},
        ],
        'totalEstimatedCost': '42.5',
    }
    plan = sanitize_candidate_plan(raw, total_days=1)
    assert plan['total_estimated_cost'] == 42.5
    assert [g['category'] for g in plan['shopping_list']] == ['Produce', 'Other']
    assert plan['shopping_list'][0]['items'] == [
        {'name': 'Spinach', 'amount': 200.0, 'unit': 'g', 'estimated_cost': 3.0},
    ]


def test_garbage_input_yields_empty_plan():
    plan = sanitize_candidate_plan(['not', 'a', 'dict'], total_days=3)
    assert plan['days'] == []
    assert plan['shopping_list'] == []


def test_shopping_group_with_non_list_items_is_skipped():
    raw = {'days': [], 'shoppingList': [
        {'category': 'Produce', 'items': 5},
        {'category': 'Pantry', 'items': True},
        {'category': 'Dairy & Eggs', 'items': [{'name': 'Milk', 'amount': 1, 'unit': 'l'}]},
    ]}
    plan = sanitize_candidate_plan(raw, total_days=1)
    assert [g['category'] for g in plan['shopping_list']] == ['Dairy & Eggs']


@pytest.mark.parametrize('day', ['--1', '²', '1.5', '', ' '])
def test_malformed_day_string_uses_position(day):
    raw = {'days': [{'day': day, 'meals': [make_meal('A', 'lunch')]}]}
    plan = sanitize_candidate_plan(raw, total_days=1)
    assert [d['day'] for d in plan['days']] == [1]


def test_numeric_day_string_is_used():
    raw = {'days': [{'day': ' 2 ', 'meals': [make_meal('A', 'lunch')]}]}
    plan = sanitize_candidate_plan(raw, total_days=2)
    assert [d['day'] for d in plan['days']] == [2]


def test_repeated_day_index_is_skipped():
    raw = {'days': [
        {'day': 1, 'meals': [make_meal('A', 'lunch')]},
        {'day': 1, 'meals': [make_meal('B', 'lunch'), make_meal('C', 'dinner')]},
    ]}
    plan = sanitize_candidate_plan(raw, total_days=2)
    assert [d['day'] for d in plan['days']] == [1]
    assert plan['days'][0]['meals'][0]['name'] == 'A'
    assert plan['skipped_days'] == 1
    assert plan['skipped_meals'] == 2
