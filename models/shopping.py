"""
Shopping Models

Contains the ShoppingList and ShoppingListItem models. One shopping list
is created per generated meal plan.
"""

from .base import db, utcnow, isoformat


class ShoppingList(db.Model):
    """Shopping list for a meal plan's date range."""
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    meal_plan_id = db.Column(db.Integer, db.ForeignKey('meal_plan.id', ondelete='SET NULL'), nullable=True, index=True)
    name = db.Column(db.String(250), nullable=False)
    start_date = db.Column(db.Date, nullable=True)
    end_date = db.Column(db.Date, nullable=True)
    estimated_total_cost = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    items = db.relationship('ShoppingListItem', backref='shopping_list', lazy=True, cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'meal_plan_id': self.meal_plan_id,
            'name': self.name,
            'start_date': isoformat(self.start_date),
            'end_date': isoformat(self.end_date),
            'estimated_total_cost': self.estimated_total_cost,
            'created_at': isoformat(self.created_at),
        }


class ShoppingListItem(db.Model):
    """Aggregated ingredient line with purchase tracking."""
    id = db.Column(db.Integer, primary_key=True)
    shopping_list_id = db.Column(db.Integer, db.ForeignKey('shopping_list.id', ondelete='CASCADE'), nullable=False, index=True)
    ingredient_name = db.Column(db.String(200), nullable=False)
    quantity = db.Column(db.Float, default=0.0)
    unit = db.Column(db.String(30), default='')
    category = db.Column(db.String(50), default='Other', index=True)
    estimated_cost = db.Column(db.Float, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    # purchased_at is set if and only if is_purchased is true
    is_purchased = db.Column(db.Boolean, default=False)
    purchased_at = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'shopping_list_id': self.shopping_list_id,
            'ingredient_name': self.ingredient_name,
            'quantity': self.quantity,
            'unit': self.unit,
            'category': self.category,
            'estimated_cost': self.estimated_cost,
            'notes': self.notes,
            'is_purchased': bool(self.is_purchased),
            'purchased_at': isoformat(self.purchased_at),
        }
