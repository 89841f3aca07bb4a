"""
Websites API router

Endpoints:
- GET    /api/websites                      - list the owner's websites
- POST   /api/websites                      - register a website (API key issued)
- GET    /api/websites/{id}                 - website with elements/variants/conditions
- PUT    /api/websites/{id}                 - update name/domain/active
- POST   /api/websites/{id}/regenerate-key  - issue a new API key
- DELETE /api/websites/{id}                 - delete (cascades)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_website_repository
from middleware.auth import UserPublic, get_current_user
from models.api.tenant import (
    ApiKeyOut,
    WebsiteCreate,
    WebsiteDetailOut,
    WebsiteMessage,
    WebsiteOut,
    WebsiteUpdate,
)
from models.domain.website import Website
from repositories import WebsiteRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/websites", tags=["websites"])


async def _get_owned_website(
    website_id: str,
    current_user: UserPublic,
    websites: WebsiteRepository,
) -> Website:
    website = await websites.get_by_id(website_id)
    if not website:
        raise HTTPException(status_code=404, detail="Website not found")
    if website.user_id != current_user.user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    return website


@router.get("", response_model=List[WebsiteOut])
async def list_websites(
    current_user: UserPublic = Depends(get_current_user),
    websites: WebsiteRepository = Depends(get_website_repository),
):
    return await websites.list_by_user(current_user.user_id)


@router.post("", response_model=WebsiteMessage, status_code=status.HTTP_201_CREATED)
async def create_website(
    data: WebsiteCreate,
    current_user: UserPublic = Depends(get_current_user),
    websites: WebsiteRepository = Depends(get_website_repository),
):
    """
    Register a website for the current user.

    The domain must be unique per owner.
    """
    if await websites.domain_exists(current_user.user_id, data.domain):
        raise HTTPException(status_code=409, detail="Domain already registered")

    website = Website(
        id="",
        user_id=current_user.user_id,
        name=data.name,
        domain=data.domain,
    )
    website = await websites.create(website)

    return {"message": "Website created successfully", "website": website}


@router.get("/{website_id}", response_model=WebsiteDetailOut)
async def get_website(
    website_id: str,
    current_user: UserPublic = Depends(get_current_user),
    websites: WebsiteRepository = Depends(get_website_repository),
):
    await _get_owned_website(website_id, current_user, websites)
    return await websites.get_with_elements(website_id)


@router.put("/{website_id}", response_model=WebsiteMessage)
async def update_website(
    website_id: str,
    data: WebsiteUpdate,
    current_user: UserPublic = Depends(get_current_user),
    websites: WebsiteRepository = Depends(get_website_repository),
):
    """
    Update a website. Setting active=false makes the integration endpoint
    reject its API key.
    """
    if data.is_empty:
        raise HTTPException(status_code=400, detail="No update data provided")

    website = await _get_owned_website(website_id, current_user, websites)

    if data.domain and data.domain != website.domain:
        if await websites.domain_exists(current_user.user_id, data.domain, exclude_id=website_id):
            raise HTTPException(status_code=409, detail="Domain already registered")

    if data.name:
        website.name = data.name
    if data.domain:
        website.domain = data.domain
    if data.active is not None:
        website.active = data.active

    website = await websites.update(website)
    return {"message": "Website updated successfully", "website": website}


@router.post("/{website_id}/regenerate-key", response_model=ApiKeyOut)
async def regenerate_api_key(
    website_id: str,
    current_user: UserPublic = Depends(get_current_user),
    websites: WebsiteRepository = Depends(get_website_repository),
):
    await _get_owned_website(website_id, current_user, websites)
    api_key = await websites.regenerate_api_key(website_id)
    return {"api_key": api_key}


@router.delete("/{website_id}", response_model=WebsiteMessage)
async def delete_website(
    website_id: str,
    current_user: UserPublic = Depends(get_current_user),
    websites: WebsiteRepository = Depends(get_website_repository),
):
    await _get_owned_website(website_id, current_user, websites)
    await websites.delete(website_id)
    return {"message": "Website deleted successfully"}
