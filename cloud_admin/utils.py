"""
Helpers for turning command-line text into DynamoDB typed values.

Key arguments always become string attributes; a value for ``set-attr`` has
its type inferred from its text.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def parse_key_args(args: Iterable[str]) -> Dict[str, Dict[str, str]]:
    """Parse ``name=value`` arguments into a DynamoDB key.

    Each value is sent as a string attribute. The text is split on the first
    ``=`` so values may themselves contain ``=``. Arguments without ``=`` are
    skipped.

    Args:
        args: Raw ``name=value`` strings

    Returns:
        Key mapping such as ``{'pk': {'S': 'user#1'}}``

    Raises:
        ValidationError: If no usable ``name=value`` argument was given
    """
    key: Dict[str, Dict[str, str]] = {}
    for arg in args:
        name, sep, value = arg.partition('=')
        if not sep:
            logger.warning(f"Ignoring key argument without '=': {arg!r}")
            continue
        key[name] = {'S': value}

    if not key:
        raise ValidationError("No key provided")
    return key


def _is_number(text: str) -> bool:
    # float() also accepts surrounding whitespace, digit separators and
    # non-ASCII digits, none of which DynamoDB accepts as a number
    if not text.isascii() or text != text.strip() or '_' in text:
        return False
    try:
        value = float(text)
    except ValueError:
        return False
    # DynamoDB has no representation for inf or nan
    return math.isfinite(value)


def infer_attribute_value(text: str) -> Dict[str, Any]:
    """Infer a typed attribute value from its command-line text.

    Precedence:
        1. ``true``/``false`` in any case -> BOOL
        2. parses as a finite float -> N (original text preserved)
        3. anything else -> S

    Examples:
        >>> infer_attribute_value("TRUE")
        {'BOOL': True}
        >>> infer_attribute_value("42")
        {'N': '42'}
        >>> infer_attribute_value("42a")
        {'S': '42a'}
    """
    lowered = text.lower()
    if lowered in ('true', 'false'):
        return {'BOOL': lowered == 'true'}
    if _is_number(text):
        return {'N': text}
    return {'S': text}


def extract_key(item: Dict[str, Any], key_attributes: List[str]) -> Optional[Dict[str, Any]]:
    """Project an item onto its key attributes.

    Returns:
        The key mapping, or None if the item lacks any key attribute
    """
    key = {name: item[name] for name in key_attributes if name in item}
    if len(key) != len(key_attributes):
        return None
    return key
