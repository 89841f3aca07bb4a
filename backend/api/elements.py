"""
Elements API router

Endpoints:
- GET    /api/elements?websiteId=  - list a website's elements
- POST   /api/elements             - create element (plus its default variant)
- GET    /api/elements/{id}
- PUT    /api/elements/{id}
- DELETE /api/elements/{id}        - delete (variants/conditions cascade)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_element_repository, get_website_repository
from middleware.auth import UserPublic, get_current_user
from models.api.tenant import ElementCreate, ElementOut, ElementUpdate
from models.domain.element import Element
from repositories import ElementRepository, WebsiteRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/elements", tags=["elements"])

NOT_FOUND = "Element not found or not owned by user"


async def _require_owned_website(website_id: str, current_user: UserPublic,
                                 websites: WebsiteRepository) -> None:
    website = await websites.get_by_id(website_id)
    if not website or website.user_id != current_user.user_id:
        raise HTTPException(status_code=404, detail="Website not found or not owned by user")


@router.get("", response_model=List[ElementOut])
async def list_elements(
    website_id: str = Query(..., alias="websiteId"),
    current_user: UserPublic = Depends(get_current_user),
    websites: WebsiteRepository = Depends(get_website_repository),
    elements: ElementRepository = Depends(get_element_repository),
):
    await _require_owned_website(website_id, current_user, websites)
    return await elements.list_by_website(website_id)


@router.post("", response_model=ElementOut, status_code=status.HTTP_201_CREATED)
async def create_element(
    data: ElementCreate,
    current_user: UserPublic = Depends(get_current_user),
    websites: WebsiteRepository = Depends(get_website_repository),
    elements: ElementRepository = Depends(get_element_repository),
):
    """
    Create an element. A placeholder default variant is created with it so
    the element always has something to serve.
    """
    await _require_owned_website(data.website_id, current_user, websites)

    element = Element(
        id="",
        website_id=data.website_id,
        selector=data.selector,
        description=data.description or "",
    )
    return await elements.create_with_default_variant(element)


@router.get("/{element_id}", response_model=ElementOut)
async def get_element(
    element_id: str,
    current_user: UserPublic = Depends(get_current_user),
    elements: ElementRepository = Depends(get_element_repository),
):
    element = await elements.get_for_user(element_id, current_user.user_id)
    if not element:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return element


@router.put("/{element_id}", response_model=ElementOut)
async def update_element(
    element_id: str,
    data: ElementUpdate,
    current_user: UserPublic = Depends(get_current_user),
    elements: ElementRepository = Depends(get_element_repository),
):
    element = await elements.get_for_user(element_id, current_user.user_id)
    if not element:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    element.selector = data.selector
    element.description = data.description or ""
    return await elements.update(element)


@router.delete("/{element_id}")
async def delete_element(
    element_id: str,
    current_user: UserPublic = Depends(get_current_user),
    elements: ElementRepository = Depends(get_element_repository),
):
    element = await elements.get_for_user(element_id, current_user.user_id)
    if not element:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    await elements.delete(element_id)
    return {"message": "Element deleted successfully"}
