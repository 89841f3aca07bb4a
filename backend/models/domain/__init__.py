"""
Domain Models - Storage-agnostic data structures

These models represent the core domain entities independent of storage layer.
The resolver and API routers operate on these models, not raw database rows.

Architecture:
- Domain models are pure Python objects (dataclasses)
- Storage details (PostgreSQL) are abstracted via repositories
- A Website loaded with its Elements, Variants and Conditions is the
  immutable snapshot the resolver works on
"""

from .condition import (
    Condition,
    ConditionType,
    ConditionOperator,
    CONDITION_TYPES,
    OPERATORS,
    EXTRACTABLE_CONDITION_TYPES,
    EVALUATED_OPERATORS,
)
from .variant import Variant
from .element import Element, DEFAULT_VARIANT_NAME, DEFAULT_VARIANT_CONTENT
from .website import Website
from .visitor_context import VisitorContext

__all__ = [
    # Tenant graph
    'Website',
    'Element',
    'Variant',
    'Condition',

    # Shared enumerations
    'ConditionType',
    'ConditionOperator',
    'CONDITION_TYPES',
    'OPERATORS',
    'EXTRACTABLE_CONDITION_TYPES',
    'EVALUATED_OPERATORS',

    'DEFAULT_VARIANT_NAME',
    'DEFAULT_VARIANT_CONTENT',

    # Resolution input
    'VisitorContext',
]
