"""
In-memory stand-ins for the asyncpg repositories.

Same method names and return types as repositories.*Repository, backed by
plain dicts that keep insertion (creation) order.
"""

from dataclasses import replace
from typing import Dict, List, Optional

from models.domain import (
    Condition,
    DEFAULT_VARIANT_CONTENT,
    DEFAULT_VARIANT_NAME,
    Element,
    Variant,
    Website,
)
from utils.id_generator import generate_api_key

OWNER_ID = "0b6f2d3c-8a51-4c1e-9d7a-2f4e5b6c7d80"
OTHER_USER_ID = "5e1a9c2b-3d4f-4a6b-8c7d-9e0f1a2b3c4d"


# =============================================================================
# IN-MEMORY STORAGE
# =============================================================================

class InMemoryStore:
    """Flat rows keyed by id; dicts keep insertion (creation) order."""

    def __init__(self):
        self.websites: Dict[str, Website] = {}
        self.elements: Dict[str, Element] = {}
        self.variants: Dict[str, Variant] = {}
        self.conditions: Dict[str, Condition] = {}

    # -- assembly ------------------------------------------------------------

    def conditions_of(self, variant_id: str) -> List[Condition]:
        return [replace(c) for c in self.conditions.values() if c.variant_id == variant_id]

    def variants_of(self, element_id: str) -> List[Variant]:
        return [
            replace(v, conditions=self.conditions_of(v.id))
            for v in self.variants.values() if v.element_id == element_id
        ]

    def elements_of(self, website_id: str) -> List[Element]:
        return [
            replace(e, variants=self.variants_of(e.id))
            for e in self.elements.values() if e.website_id == website_id
        ]

    def website_owner(self, website_id: str) -> Optional[str]:
        website = self.websites.get(website_id)
        return website.user_id if website else None

    def element_owner(self, element_id: str) -> Optional[str]:
        element = self.elements.get(element_id)
        return self.website_owner(element.website_id) if element else None

    def variant_owner(self, variant_id: str) -> Optional[str]:
        variant = self.variants.get(variant_id)
        return self.element_owner(variant.element_id) if variant else None

    # -- cascades ------------------------------------------------------------

    def delete_variant(self, variant_id: str) -> None:
        self.variants.pop(variant_id, None)
        for cid in [c.id for c in self.conditions.values() if c.variant_id == variant_id]:
            del self.conditions[cid]

    def delete_element(self, element_id: str) -> None:
        self.elements.pop(element_id, None)
        for vid in [v.id for v in self.variants.values() if v.element_id == element_id]:
            self.delete_variant(vid)

    def delete_website(self, website_id: str) -> None:
        self.websites.pop(website_id, None)
        for eid in [e.id for e in self.elements.values() if e.website_id == website_id]:
            self.delete_element(eid)

    # -- seeding helpers -----------------------------------------------------

    def add_website(self, user_id: str = OWNER_ID, domain: str = "example.com",
                    active: bool = True, api_key: str = "") -> Website:
        website = Website(id="", user_id=user_id, name=domain, domain=domain,
                          api_key=api_key or generate_api_key(), active=active)
        self.websites[website.id] = website
        return website

    def add_element(self, website: Website, selector: str,
                    default_content: Optional[str] = DEFAULT_VARIANT_CONTENT) -> Element:
        element = Element(id="", website_id=website.id, selector=selector)
        self.elements[element.id] = element
        if default_content is not None:
            self.add_variant(element, DEFAULT_VARIANT_NAME, default_content, is_default=True)
        return element

    def add_variant(self, element: Element, name: str, content: str,
                    is_default: bool = False, conditions=()) -> Variant:
        variant = Variant(id="", element_id=element.id, name=name,
                          content=content, is_default=is_default)
        self.variants[variant.id] = variant
        for condition_type, operator, value, priority in conditions:
            condition = Condition(id="", variant_id=variant.id, condition_type=condition_type,
                                  operator=operator, value=value, priority=priority)
            self.conditions[condition.id] = condition
        return variant


class FakeWebsiteRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def find_active_by_api_key(self, api_key: str) -> Optional[Website]:
        for website in self.store.websites.values():
            if website.api_key == api_key and website.active:
                return replace(website, elements=self.store.elements_of(website.id))
        return None

    async def get_by_id(self, website_id: str) -> Optional[Website]:
        website = self.store.websites.get(website_id)
        return replace(website) if website else None

    async def get_with_elements(self, website_id: str) -> Optional[Website]:
        website = self.store.websites.get(website_id)
        if not website:
            return None
        return replace(website, elements=self.store.elements_of(website_id))

    async def list_by_user(self, user_id: str) -> List[Website]:
        owned = [replace(w) for w in self.store.websites.values() if w.user_id == user_id]
        return list(reversed(owned))

    async def domain_exists(self, user_id: str, domain: str, exclude_id: Optional[str] = None) -> bool:
        return any(
            w.user_id == user_id and w.domain == domain and w.id != exclude_id
            for w in self.store.websites.values()
        )

    async def create(self, website: Website) -> Website:
        self.store.websites[website.id] = replace(website)
        return website

    async def update(self, website: Website) -> Website:
        self.store.websites[website.id] = replace(website, elements=[])
        return website

    async def regenerate_api_key(self, website_id: str) -> str:
        api_key = generate_api_key()
        self.store.websites[website_id].api_key = api_key
        return api_key

    async def delete(self, website_id: str) -> None:
        self.store.delete_website(website_id)


class FakeElementRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_for_user(self, element_id: str, user_id: str) -> Optional[Element]:
        if self.store.element_owner(element_id) != user_id:
            return None
        element = self.store.elements[element_id]
        return replace(element, variants=self.store.variants_of(element_id))

    async def list_by_website(self, website_id: str) -> List[Element]:
        return list(reversed(self.store.elements_of(website_id)))

    async def create_with_default_variant(self, element: Element) -> Element:
        self.store.elements[element.id] = replace(element, variants=[])
        default = Variant(id="", element_id=element.id, name=DEFAULT_VARIANT_NAME,
                          content=DEFAULT_VARIANT_CONTENT, is_default=True)
        self.store.variants[default.id] = default
        element.variants = [replace(default)]
        return element

    async def update(self, element: Element) -> Element:
        self.store.elements[element.id] = replace(element, variants=[])
        return element

    async def delete(self, element_id: str) -> None:
        self.store.delete_element(element_id)


class FakeVariantRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    def _clear_default(self, element_id: str, keep_id: Optional[str] = None) -> None:
        for variant in self.store.variants.values():
            if variant.element_id == element_id and variant.id != keep_id:
                variant.is_default = False

    async def get_for_user(self, variant_id: str, user_id: str) -> Optional[Variant]:
        if self.store.variant_owner(variant_id) != user_id:
            return None
        variant = self.store.variants[variant_id]
        return replace(variant, conditions=self.store.conditions_of(variant_id))

    async def list_by_element(self, element_id: str) -> List[Variant]:
        return sorted(self.store.variants_of(element_id), key=lambda v: not v.is_default)

    async def count_by_element(self, element_id: str) -> int:
        return len(self.store.variants_of(element_id))

    async def create(self, variant: Variant) -> Variant:
        if variant.is_default:
            self._clear_default(variant.element_id)
        self.store.variants[variant.id] = replace(variant, conditions=[])
        return variant

    async def update(self, variant: Variant, make_default: bool = False) -> Variant:
        if make_default:
            self._clear_default(variant.element_id, keep_id=variant.id)
            variant.is_default = True
        self.store.variants[variant.id] = replace(variant, conditions=[])
        return variant

    async def delete(self, variant_id: str) -> None:
        self.store.delete_variant(variant_id)


class FakeConditionRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_for_user(self, condition_id: str, user_id: str) -> Optional[Condition]:
        condition = self.store.conditions.get(condition_id)
        if not condition or self.store.variant_owner(condition.variant_id) != user_id:
            return None
        return replace(condition)

    async def list_by_variant(self, variant_id: str) -> List[Condition]:
        return sorted(self.store.conditions_of(variant_id), key=lambda c: c.priority)

    async def create(self, condition: Condition) -> Condition:
        self.store.conditions[condition.id] = replace(condition)
        return condition

    async def update(self, condition: Condition) -> Condition:
        self.store.conditions[condition.id] = replace(condition)
        return condition

    async def delete(self, condition_id: str) -> None:
        self.store.conditions.pop(condition_id, None)
