"""
Shopping List Service

Reads shopping lists created with meal plans and toggles purchase state.
"""

import logging

from sqlalchemy import update

from models import db, ShoppingList, ShoppingListItem
from models.base import utcnow
from .auth import require_user
from .cost import sum_costs
from .errors import NotFound
from .parsing import float_to_fraction
from .results import action

logger = logging.getLogger(__name__)


def format_shopping_qty(quantity, unit):
    """Format quantity string for shopping list display."""
    unit = unit or ''
    if not quantity:
        return unit

    # For lb, show as lb | kg
    if unit == 'lb':
        kg = quantity * 0.453592
        return f"{quantity:.2f} lb|{kg:.2f} kg"

    # For kg, show as kg | lb
    if unit == 'kg':
        lb = quantity / 0.453592
        return f"{quantity:.2f} kg|{lb:.2f} lb"

    # Metric small units read better as whole numbers
    if unit in ('g', 'ml'):
        return f"{quantity:.0f} {unit}"

    return f"{float_to_fraction(quantity)} {unit}".strip()


def _group_by_category(items):
    groups = []
    by_category = {}
    for item in items:
        category = item.category or 'Other'
        if category not in by_category:
            by_category[category] = {'category': category, 'items': []}
            groups.append(by_category[category])
        data = item.to_dict()
        data['display_quantity'] = format_shopping_qty(item.quantity, item.unit)
        by_category[category]['items'].append(data)
    return groups


def _shopping_list_payload(shopping_list):
    items = (ShoppingListItem.query
             .filter_by(shopping_list_id=shopping_list.id)
             .order_by(ShoppingListItem.category, ShoppingListItem.ingredient_name, ShoppingListItem.id)
             .all())
    data = shopping_list.to_dict()
    data['categories'] = _group_by_category(items)
    data['total_items'] = len(items)
    data['purchased_items'] = sum(1 for i in items if i.is_purchased)
    data['items_cost'] = sum_costs(i.estimated_cost for i in items)
    return data


@action('Failed to fetch shopping list')
def get_latest_shopping_list(user_id):
    """Most recently created list with its items, or None."""
    require_user(user_id)
    shopping_list = (ShoppingList.query
                     .filter_by(user_id=user_id)
                     .order_by(ShoppingList.created_at.desc(), ShoppingList.id.desc())
                     .first())
    if shopping_list is None:
        return None
    return _shopping_list_payload(shopping_list)


@action('Failed to fetch shopping list')
def get_shopping_list(user_id, list_id):
    require_user(user_id)
    shopping_list = ShoppingList.query.filter_by(id=list_id, user_id=user_id).first()
    if shopping_list is None:
        raise NotFound('Shopping list not found')
    return _shopping_list_payload(shopping_list)


@action('Failed to update item')
def toggle_shopping_item_purchased(user_id, item_id):
    """Flip an item's purchased flag; concurrent toggles never both apply."""
    require_user(user_id)
    item = (ShoppingListItem.query
            .join(ShoppingList, ShoppingListItem.shopping_list_id == ShoppingList.id)
            .filter(ShoppingListItem.id == item_id, ShoppingList.user_id == user_id)
            .first())
    if item is None:
        raise NotFound('Item not found')

    was_purchased = bool(item.is_purchased)
    purchased = not was_purchased
    result = db.session.execute(
        update(ShoppingListItem)
        .where(ShoppingListItem.id == item.id, ShoppingListItem.is_purchased == was_purchased)
        .values(is_purchased=purchased, purchased_at=utcnow() if purchased else None)
        .execution_options(synchronize_session=False)
    )
    db.session.commit()
    if result.rowcount == 0:
        logger.info("Shopping item %s changed concurrently; keeping current state", item.id)
    return item.to_dict()
