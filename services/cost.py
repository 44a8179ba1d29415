"""
Cost Calculation Service

Functions for calculating recipe and shopping list costs.
"""


def cost_per_serving(estimated_cost, servings):
    """
    Cost of one serving, rounded to cents.

    Servings below 1 (or missing) count as 1, so the result is never a
    division by zero or a negative share.
    """
    if estimated_cost is None:
        return None
    try:
        servings = int(servings or 1)
    except (TypeError, ValueError):
        servings = 1
    if servings < 1:
        servings = 1
    return round(max(float(estimated_cost), 0.0) / servings, 2)


def sum_costs(costs):
    """Total of the known costs, rounded to cents; None when none are known."""
    known = [c for c in costs if c is not None]
    if not known:
        return None
    return round(sum(known), 2)
