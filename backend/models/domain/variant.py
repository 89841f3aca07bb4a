"""
Variant domain model
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from utils.id_generator import generate_variant_id
from .condition import Condition


@dataclass
class Variant:
    """
    Variant domain model - one candidate content payload for an element

    Storage: PostgreSQL (variants table)

    A variant with no conditions matches every visitor with priority 0.
    """
    id: str  # Short ID: vr_xxxxxxxx
    element_id: str
    name: str
    content: str = ""
    is_default: bool = False
    conditions: List[Condition] = field(default_factory=list)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id:
            self.id = generate_variant_id()
