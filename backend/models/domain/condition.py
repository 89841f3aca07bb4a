"""
Condition domain model and the shared condition enumerations.

The same enumerations back the write-side validators (api models) and the
read-side resolver (services.variant_resolver). Accepted values and
implemented values are listed separately so the gap stays visible:
conditions using an accepted-but-unimplemented type or operator never match.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from enum import Enum

from utils.id_generator import generate_condition_id


class ConditionType(str, Enum):
    """Context dimensions a condition can target"""
    URL = "url"
    PATH = "path"
    REFERRER = "referrer"
    DEVICE = "device"
    BROWSER = "browser"
    OS = "os"
    SCREEN_SIZE = "screenSize"
    TIME = "time"
    DAY = "day"
    DATE = "date"
    COOKIES = "cookies"
    QUERY_PARAM = "queryParam"
    USER_ROLE = "userRole"
    LOGIN_STATUS = "loginStatus"
    LANGUAGE = "language"
    GEOLOCATION = "geolocation"
    CUSTOM = "custom"


class ConditionOperator(str, Enum):
    """Comparison kinds between the context value and the condition value"""
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    REGEX = "regex"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"


CONDITION_TYPES = [t.value for t in ConditionType]
OPERATORS = [o.value for o in ConditionOperator]

# Subsets the resolver actually implements
EXTRACTABLE_CONDITION_TYPES = frozenset({
    ConditionType.URL.value,
    ConditionType.PATH.value,
    ConditionType.REFERRER.value,
    ConditionType.LANGUAGE.value,
    ConditionType.DEVICE.value,
})

EVALUATED_OPERATORS = frozenset({
    ConditionOperator.EQUALS.value,
    ConditionOperator.NOT_EQUALS.value,
    ConditionOperator.CONTAINS.value,
    ConditionOperator.NOT_CONTAINS.value,
    ConditionOperator.STARTS_WITH.value,
    ConditionOperator.ENDS_WITH.value,
    ConditionOperator.REGEX.value,
})


@dataclass
class Condition:
    """
    Condition domain model - a single predicate attached to a variant

    Storage: PostgreSQL (conditions table)

    condition_type and operator are kept as plain strings: rows written
    before an enumeration change must still load (and simply never match).
    """
    id: str  # Short ID: cd_xxxxxxxx
    variant_id: str
    condition_type: str
    operator: str
    value: str
    priority: int = 0

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id:
            self.id = generate_condition_id()

    @property
    def is_implemented(self) -> bool:
        """True if the resolver can ever match this condition"""
        return (
            self.condition_type in EXTRACTABLE_CONDITION_TYPES
            and self.operator in EVALUATED_OPERATORS
        )
