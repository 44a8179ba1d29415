"""
Unit Constants

Fraction tables for quantity display and parsing, plus the unit aliases
used to normalize the free-form units returned by the meal plan generator.
"""

# Unit aliases (lowercase input -> display unit)
UNIT_ALIASES = {
    'gram': 'g', 'grams': 'g', 'gr': 'g', 'g': 'g',
    'kilogram': 'kg', 'kilograms': 'kg', 'kg': 'kg', 'kgs': 'kg',
    'milliliter': 'ml', 'milliliters': 'ml', 'millilitre': 'ml', 'ml': 'ml',
    'liter': 'l', 'liters': 'l', 'litre': 'l', 'l': 'l',
    'cup': 'cup', 'cups': 'cup', 'c': 'cup',
    'tablespoon': 'tbsp', 'tablespoons': 'tbsp', 'tbsp': 'tbsp', 'tbs': 'tbsp',
    'teaspoon': 'tsp', 'teaspoons': 'tsp', 'tsp': 'tsp',
    'ounce': 'oz', 'ounces': 'oz', 'oz': 'oz',
    'pound': 'lb', 'pounds': 'lb', 'lb': 'lb', 'lbs': 'lb',
    'piece': 'piece', 'pieces': 'piece', 'pc': 'piece', 'pcs': 'piece',
    'ea': 'piece', 'each': 'piece', 'whole': 'piece',
    'clove': 'clove', 'cloves': 'clove',
    'slice': 'slice', 'slices': 'slice',
    'can': 'can', 'cans': 'can',
    'bunch': 'bunch', 'bunches': 'bunch',
    'pinch': 'pinch', 'pinches': 'pinch',
    'package': 'package', 'packages': 'package', 'pkg': 'package',
}

# Common fractions for display (using precise values)
COMMON_FRACTIONS = {
    0.125: '1/8', 0.25: '1/4', 1/3: '1/3', 0.375: '3/8',
    0.5: '1/2', 0.625: '5/8', 2/3: '2/3', 0.75: '3/4', 0.875: '7/8'
}

# Unicode fraction characters mapping
UNICODE_FRACTIONS = {
    '\u00bd': 0.5,    # ½
    '\u2153': 1/3,    # ⅓
    '\u2154': 2/3,    # ⅔
    '\u00bc': 0.25,   # ¼
    '\u00be': 0.75,   # ¾
    '\u2155': 0.2,    # ⅕
    '\u2156': 0.4,    # ⅖
    '\u2157': 0.6,    # ⅗
    '\u2158': 0.8,    # ⅘
    '\u2159': 1/6,    # ⅙
    '\u215a': 5/6,    # ⅚
    '\u215b': 0.125,  # ⅛
    '\u215c': 0.375,  # ⅜
    '\u215d': 0.625,  # ⅝
    '\u215e': 0.875,  # ⅞
}
