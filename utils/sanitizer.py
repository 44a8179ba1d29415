"""
Input Sanitization Module

Cleans user input and externally generated text before it is stored.
Output is served as JSON, so text is normalized rather than HTML-escaped.
"""

import re
from urllib.parse import urlparse

from constants import UNIT_ALIASES

_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')


def sanitize_text(text, max_length=10000):
    """
    Sanitize free text: strip control characters and surrounding whitespace.

    Newlines are preserved.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = _CONTROL_CHARS.sub('', text).strip()

    # Truncate if too long
    if len(text) > max_length:
        text = text[:max_length].rstrip()

    return text


def sanitize_name(name, default='', max_length=200):
    """
    Sanitize a single-line name (recipe, ingredient, plan, food).

    Args:
        name: The name to sanitize
        default: Returned when nothing is left after cleaning
        max_length: Maximum allowed length (default 200)

    Returns:
        Sanitized name
    """
    if name is None or isinstance(name, (dict, list)):
        return default

    name = sanitize_text(name, max_length=max_length * 2)

    # Collapse whitespace, including newlines
    name = re.sub(r'\s+', ' ', name)

    if len(name) > max_length:
        name = name[:max_length - 3].rstrip() + '...'

    return name or default


def sanitize_string_list(values, max_items=50, max_length=100):
    """Clean a list of short strings, dropping blanks and duplicates (order kept)."""
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split(',')
    if not isinstance(values, (list, tuple, set)):
        return []

    cleaned = []
    seen = set()
    for value in values:
        item = sanitize_name(value, max_length=max_length)
        key = item.casefold()
        if item and key not in seen:
            seen.add(key)
            cleaned.append(item)
        if len(cleaned) >= max_items:
            break
    return cleaned


def sanitize_unit(unit, max_length=30):
    """Normalize a unit to its display form ('Grams' -> 'g'); unknown units are kept cleaned."""
    unit = sanitize_name(unit, max_length=max_length)
    return UNIT_ALIASES.get(unit.lower().rstrip('.'), unit.lower())


def sanitize_url(url):
    """
    Sanitize a URL by rejecting dangerous schemes.

    Prevents javascript:, data:, vbscript:, and other dangerous URL schemes
    from being stored as photo references.

    Args:
        url: The URL to validate (can be None)

    Returns:
        The URL if safe, empty string if unsafe or invalid
    """
    if not url:
        return ''

    if not isinstance(url, str):
        return ''

    url = url.strip()

    # Check for dangerous schemes (case-insensitive)
    dangerous_schemes = {
        'javascript', 'data', 'vbscript', 'file',
        'blob', 'about', 'chrome', 'moz-extension'
    }

    try:
        parsed = urlparse(url)
    except ValueError:
        return ''

    # Only allow absolute http and https
    if parsed.scheme.lower() not in ('http', 'https') or not parsed.netloc:
        return ''

    # Additional check for encoded javascript:
    url_lower = url.lower()
    for dangerous in dangerous_schemes:
        if dangerous + ':' in url_lower:
            return ''
        # Check for URL-encoded versions
        if dangerous.replace('a', '%61') in url_lower:
            return ''

    return url
