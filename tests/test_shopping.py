"""Shopping list reads, display quantities and purchase toggles."""

from datetime import date

import pytest

from conftest import create_user
from models import ShoppingListItem
from services.cost import cost_per_serving, sum_costs
from services import (
    format_shopping_qty,
    generate_and_save_meal_plan,
    get_latest_shopping_list,
    get_shopping_list,
    toggle_shopping_item_purchased,
)


@pytest.fixture
def plan(onboarded_user, generator):
    result = generate_and_save_meal_plan(onboarded_user.id, {'number_of_days': 2},
                                         generator=generator, today=date(2024, 6, 3))
    assert result.success
    return result.data


@pytest.mark.parametrize('quantity,unit,expected', [
    (1.5, 'cup', '1 1/2 cup'),
    (0.25, 'tsp', '1/4 tsp'),
    (2, 'piece', '2 piece'),
    (200, 'g', '200 g'),
    (1, 'lb', '1.00 lb|0.45 kg'),
    (1, 'kg', '1.00 kg|2.20 lb'),
    (0, 'cup', 'cup'),
    (3, None, '3'),
])
def test_format_shopping_qty(quantity, unit, expected):
    assert format_shopping_qty(quantity, unit) == expected


@pytest.mark.parametrize('cost, servings, expected', [
    (12.00, 4, 3.00),
    (10.00, 3, 3.33),
    (12.00, 0, 12.00),
    (12.00, -2, 12.00),
    (12.00, None, 12.00),
    (-5.00, 2, 0.0),
    (None, 4, None),
])
def test_cost_per_serving(cost, servings, expected):
    assert cost_per_serving(cost, servings) == expected


def test_sum_costs_ignores_unknown():
    assert sum_costs([1.10, None, 2.25]) == 3.35
    assert sum_costs([None, None]) is None


def test_latest_list_groups_by_category(onboarded_user, plan):
    result = get_latest_shopping_list(onboarded_user.id)

    assert result.success
    data = result.data
    assert data['meal_plan_id'] == plan['meal_plan_id']
    assert [g['category'] for g in data['categories']] == ['Dairy & Eggs', 'Produce']
    produce = data['categories'][1]['items']
    assert [i['ingredient_name'] for i in produce] == ['Bananas', 'Spinach']
    assert produce[0]['display_quantity'] == '1 1/2 piece'
    assert data['categories'][0]['items'][0]['display_quantity'] == '1 1/2 cup'
    assert data['total_items'] == 3
    assert data['purchased_items'] == 0
    assert data['items_cost'] == 6.7


def test_no_list_yet(user):
    result = get_latest_shopping_list(user.id)
    assert result.success
    assert result.data is None


def test_list_of_another_user(onboarded_user, plan):
    list_id = get_latest_shopping_list(onboarded_user.id).data['id']
    other = create_user(email='other@example.com')
    assert get_shopping_list(other.id, list_id).code == 'not_found'


def test_toggle_purchased(onboarded_user, plan):
    item = ShoppingListItem.query.filter_by(ingredient_name='Milk').one()

    bought = toggle_shopping_item_purchased(onboarded_user.id, item.id)
    assert bought.data['is_purchased'] is True
    assert bought.data['purchased_at'] is not None

    data = get_latest_shopping_list(onboarded_user.id).data
    assert data['purchased_items'] == 1

    returned = toggle_shopping_item_purchased(onboarded_user.id, item.id)
    assert returned.data['is_purchased'] is False
    assert returned.data['purchased_at'] is None


def test_toggle_missing_item(onboarded_user):
    result = toggle_shopping_item_purchased(onboarded_user.id, 9999)
    assert result.code == 'not_found'


def test_toggle_requires_user(app):
    assert toggle_shopping_item_purchased(None, 1).code == 'unauthenticated'
