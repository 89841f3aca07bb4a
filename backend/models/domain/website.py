"""
Website domain model
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from utils.id_generator import generate_website_id, generate_api_key
from .element import Element


@dataclass
class Website:
    """
    Website domain model - a tenant's registered site

    Storage: PostgreSQL (websites table)

    The API key authenticates the embedded loader script. Inactive websites
    are invisible to the integration endpoint.
    """
    id: str  # Short ID: ws_xxxxxxxx
    user_id: str  # Owner UUID
    name: str
    domain: str
    api_key: str = ""
    active: bool = True
    elements: List[Element] = field(default_factory=list)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id:
            self.id = generate_website_id()
        if not self.api_key:
            self.api_key = generate_api_key()
