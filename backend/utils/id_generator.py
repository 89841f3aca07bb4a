"""
Short prefixed ID generator for Element Variants entities.

Format: {prefix}_{base36_random}
- ws_xxxxxxxx  - website
- el_xxxxxxxx  - element
- vr_xxxxxxxx  - variant
- cd_xxxxxxxx  - condition

API keys use the same alphabet with a longer random part:
- ev_<32 base36 chars>

8 chars base36 = 36^8 = 2.8 trillion unique IDs per type
"""
import secrets
import re
from typing import Optional

# Base36 alphabet (lowercase letters + digits)
ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)  # 36

PREFIXES = {
    'website': 'ws',
    'element': 'el',
    'variant': 'vr',
    'condition': 'cd',
}

PREFIX_TO_TYPE = {v: k for k, v in PREFIXES.items()}

ID_PATTERN = re.compile(r'^(ws|el|vr|cd)_[0-9a-z]{8}$')

API_KEY_PREFIX = 'ev'
API_KEY_LENGTH = 32
API_KEY_PATTERN = re.compile(rf'^{API_KEY_PREFIX}_[0-9a-z]{{{API_KEY_LENGTH}}}$')


def _random_base36(length: int = 8) -> str:
    """Generate random base36 string"""
    result = []
    for _ in range(length):
        result.append(ALPHABET[secrets.randbelow(BASE)])
    return ''.join(result)


def generate_id(entity_type: str) -> str:
    """
    Generate a new short ID for the given entity type.

    Args:
        entity_type: One of 'website', 'element', 'variant', 'condition'

    Returns:
        Short ID like 'el_x5b8r2yj'

    Raises:
        ValueError: If entity_type is invalid
    """
    if entity_type not in PREFIXES:
        raise ValueError(f"Invalid entity type: {entity_type}. "
                        f"Must be one of: {list(PREFIXES.keys())}")

    prefix = PREFIXES[entity_type]
    return f"{prefix}_{_random_base36(8)}"


def validate_id(id_str: str) -> bool:
    """Check if a string is a valid short ID."""
    if not id_str or not isinstance(id_str, str):
        return False
    return bool(ID_PATTERN.match(id_str))


def get_id_type(id_str: str) -> Optional[str]:
    """
    Extract the entity type from an ID.

    Returns:
        Entity type ('website', 'element', etc.) or None if invalid
    """
    if not validate_id(id_str):
        return None
    return PREFIX_TO_TYPE.get(id_str[:2])


def generate_api_key() -> str:
    """Generate a new website API key (ev_ + 32 base36 chars)"""
    return f"{API_KEY_PREFIX}_{_random_base36(API_KEY_LENGTH)}"


def generate_website_id() -> str:
    return generate_id('website')


def generate_element_id() -> str:
    return generate_id('element')


def generate_variant_id() -> str:
    return generate_id('variant')


def generate_condition_id() -> str:
    return generate_id('condition')
