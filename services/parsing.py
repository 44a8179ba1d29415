"""
Parsing Service

Functions for coercing loosely-typed values (form fields, generator output)
into numbers, and for formatting quantities as fractions for display.
"""

import math
import re
from datetime import date

from constants import UNICODE_FRACTIONS, COMMON_FRACTIONS


def round_half_up(value):
    """Round to the nearest integer with halves rounded up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def safe_float(value, default=0.0, min_val=None, max_val=None):
    """Safely parse a float value with optional bounds."""
    if isinstance(value, bool):
        return default
    try:
        result = parse_amount(value) if isinstance(value, str) else float(value)
    except (ValueError, TypeError):
        return default
    if result is None or math.isnan(result) or math.isinf(result):
        return default
    if min_val is not None:
        result = max(min_val, result)
    if max_val is not None:
        result = min(max_val, result)
    return result


def safe_int(value, default=1, min_val=None, max_val=None):
    """Safely parse an integer value with optional bounds."""
    result = safe_float(value, default=None)
    if result is None:
        return default
    result = round_half_up(result)
    if min_val is not None:
        result = max(min_val, result)
    if max_val is not None:
        result = min(max_val, result)
    return result


def optional_float(value, min_val=None, max_val=None):
    """Like safe_float, but None/blank stays None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return safe_float(value, default=None, min_val=min_val, max_val=max_val)


def normalize_fractions(text):
    """Replace Unicode fraction characters with decimal equivalents."""
    # First, normalize all whitespace (including non-breaking spaces) to regular spaces
    text = re.sub(r'[\s\u00a0\u2000-\u200b]+', ' ', text)

    for char, value in UNICODE_FRACTIONS.items():
        if char in text:
            # Check if preceded by a number (mixed fraction like "1½" or "1 ½")
            pattern = r'(\d+)\s*' + re.escape(char)
            match = re.search(pattern, text)
            if match:
                whole = float(match.group(1))
                replacement = str(whole + value)
                text = re.sub(pattern, replacement, text)
            else:
                text = text.replace(char, str(value))
    return text


def parse_amount(value):
    """
    Parse an amount like 2, '0.5', '1/2', '1 1/2' or '1½' into a float.

    Returns None when nothing numeric can be read.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)

    s = normalize_fractions(str(value)).strip()
    if not s:
        return None

    # Mixed fraction like "1 1/2"
    mixed_match = re.match(r'^(\d+(?:\.\d+)?)\s+(\d+)\s*/\s*(\d+)', s)
    if mixed_match:
        denom = float(mixed_match.group(3))
        if denom == 0:
            return None
        return float(mixed_match.group(1)) + float(mixed_match.group(2)) / denom

    # Simple fraction like "1/2"
    frac_match = re.match(r'^(\d+)\s*/\s*(\d+)', s)
    if frac_match:
        denom = float(frac_match.group(2))
        if denom == 0:
            return None
        return float(frac_match.group(1)) / denom

    # Leading number, possibly followed by a unit ("200 g")
    num_match = re.match(r'^-?\d+(?:\.\d+)?', s)
    if num_match:
        return float(num_match.group(0))
    return None


def parse_date(value):
    """Parse an ISO date string (or date) into a date, None if blank."""
    if value is None or value == '':
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}") from None


def float_to_fraction(value):
    """Convert float to fraction string for display."""
    if value is None or value == 0:
        return '0'
    # Check if it's a whole number
    if value == int(value):
        return str(int(value))
    # Split into whole and decimal parts
    whole = int(value)
    decimal = value - whole
    # Check common fractions (with tolerance)
    for dec, frac in COMMON_FRACTIONS.items():
        if abs(decimal - dec) < 0.02:
            if whole > 0:
                return f"{whole} {frac}"
            return frac
    # Fall back to decimal
    return f"{value:.2f}".rstrip('0').rstrip('.')
