"""
Pydantic models for the website/element/variant/condition management API

Wire format is camelCase (websiteId, isDefault, conditionType, ...) to match
what the dashboard and loader script send; Python attributes stay snake_case.
"""

import re
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional

from models.domain.condition import CONDITION_TYPES, OPERATORS

DOMAIN_PATTERN = re.compile(
    r'^(?:(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}|localhost)$'
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _require_text(value: str, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{field_name} is required")
    return str(value).strip()


def _check_domain(value: str) -> str:
    if not DOMAIN_PATTERN.match(value):
        raise ValueError("Invalid domain format")
    return value


def _check_condition_type(value: str) -> str:
    if value not in CONDITION_TYPES:
        raise ValueError(f"conditionType must be one of: {', '.join(CONDITION_TYPES)}")
    return value


def _check_operator(value: str) -> str:
    if value not in OPERATORS:
        raise ValueError(f"operator must be one of: {', '.join(OPERATORS)}")
    return value


# =============================================================================
# REQUEST MODELS
# =============================================================================

class WebsiteCreate(CamelModel):
    name: str
    domain: str

    @field_validator('name')
    @classmethod
    def name_required(cls, v):
        return _require_text(v, "name")

    @field_validator('domain')
    @classmethod
    def domain_format(cls, v):
        return _check_domain(v.strip())


class WebsiteUpdate(CamelModel):
    name: Optional[str] = None
    domain: Optional[str] = None
    active: Optional[bool] = None

    @field_validator('domain')
    @classmethod
    def domain_format(cls, v):
        if v is None or v == "":
            return None
        return _check_domain(v.strip())

    @property
    def is_empty(self) -> bool:
        return not self.name and not self.domain and self.active is None


class ElementCreate(CamelModel):
    website_id: str
    selector: str
    description: str = ""

    @field_validator('selector')
    @classmethod
    def selector_required(cls, v):
        return _require_text(v, "selector")


class ElementUpdate(CamelModel):
    selector: str
    description: Optional[str] = None

    @field_validator('selector')
    @classmethod
    def selector_required(cls, v):
        return _require_text(v, "selector")


class VariantCreate(CamelModel):
    element_id: str
    name: str
    content: str = ""
    is_default: bool = False

    @field_validator('name')
    @classmethod
    def name_required(cls, v):
        return _require_text(v, "name")


class VariantUpdate(CamelModel):
    name: str
    content: Optional[str] = None
    is_default: bool = False

    @field_validator('name')
    @classmethod
    def name_required(cls, v):
        return _require_text(v, "name")


class ConditionFields(CamelModel):
    condition_type: str
    operator: str
    value: Any
    priority: Optional[int] = Field(default=None, ge=0)

    @field_validator('condition_type')
    @classmethod
    def known_condition_type(cls, v):
        return _check_condition_type(v)

    @field_validator('operator')
    @classmethod
    def known_operator(cls, v):
        return _check_operator(v)

    @field_validator('value')
    @classmethod
    def value_as_string(cls, v):
        if v is None:
            raise ValueError("value is required")
        if isinstance(v, bool):
            return "true" if v else "false"
        return str(v)


class ConditionCreate(ConditionFields):
    variant_id: str


class ConditionUpdate(ConditionFields):
    pass


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class ConditionOut(CamelModel):
    id: str
    variant_id: str
    condition_type: str
    operator: str
    value: str
    priority: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class VariantOut(CamelModel):
    id: str
    element_id: str
    name: str
    content: str
    is_default: bool
    conditions: List[ConditionOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ElementOut(CamelModel):
    id: str
    website_id: str
    selector: str
    description: str
    variants: List[VariantOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WebsiteOut(CamelModel):
    id: str
    user_id: str
    name: str
    domain: str
    api_key: str
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WebsiteDetailOut(WebsiteOut):
    elements: List[ElementOut] = []


class WebsiteMessage(CamelModel):
    message: str
    website: Optional[WebsiteOut] = None


class ApiKeyOut(CamelModel):
    api_key: str
