"""
Element domain model
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from utils.id_generator import generate_element_id
from .variant import Variant

DEFAULT_VARIANT_NAME = "Default"
DEFAULT_VARIANT_CONTENT = "<!-- Default content -->"


@dataclass
class Element:
    """
    Element domain model - a CSS-selector-addressed target on a website

    Storage: PostgreSQL (elements table)

    Invariant (maintained by VariantRepository): exactly one variant
    has is_default set.
    """
    id: str  # Short ID: el_xxxxxxxx
    website_id: str
    selector: str
    description: str = ""
    variants: List[Variant] = field(default_factory=list)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id:
            self.id = generate_element_id()

    @property
    def default_variant(self) -> Optional[Variant]:
        """First variant flagged as default, if any"""
        for variant in self.variants:
            if variant.is_default:
                return variant
        return None
