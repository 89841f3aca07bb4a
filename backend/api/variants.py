"""
Variants API router

Endpoints:
- GET    /api/variants?elementId=  - list an element's variants (default first)
- POST   /api/variants             - create variant
- GET    /api/variants/{id}
- PUT    /api/variants/{id}
- DELETE /api/variants/{id}        - refused for the default or only variant

Setting isDefault moves the element's default in one transaction, so the
one-default-per-element invariant holds for the resolver.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_element_repository, get_variant_repository
from middleware.auth import UserPublic, get_current_user
from models.api.tenant import VariantCreate, VariantOut, VariantUpdate
from models.domain.variant import Variant
from repositories import ElementRepository, VariantRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/variants", tags=["variants"])

NOT_FOUND = "Variant not found or not owned by user"


async def _require_owned_element(element_id: str, current_user: UserPublic,
                                 elements: ElementRepository) -> None:
    element = await elements.get_for_user(element_id, current_user.user_id)
    if not element:
        raise HTTPException(status_code=404, detail="Element not found or not owned by user")


@router.get("", response_model=List[VariantOut])
async def list_variants(
    element_id: str = Query(..., alias="elementId"),
    current_user: UserPublic = Depends(get_current_user),
    elements: ElementRepository = Depends(get_element_repository),
    variants: VariantRepository = Depends(get_variant_repository),
):
    await _require_owned_element(element_id, current_user, elements)
    return await variants.list_by_element(element_id)


@router.post("", response_model=VariantOut, status_code=status.HTTP_201_CREATED)
async def create_variant(
    data: VariantCreate,
    current_user: UserPublic = Depends(get_current_user),
    elements: ElementRepository = Depends(get_element_repository),
    variants: VariantRepository = Depends(get_variant_repository),
):
    await _require_owned_element(data.element_id, current_user, elements)

    variant = Variant(
        id="",
        element_id=data.element_id,
        name=data.name,
        content=data.content or "",
        is_default=data.is_default,
    )
    return await variants.create(variant)


@router.get("/{variant_id}", response_model=VariantOut)
async def get_variant(
    variant_id: str,
    current_user: UserPublic = Depends(get_current_user),
    variants: VariantRepository = Depends(get_variant_repository),
):
    variant = await variants.get_for_user(variant_id, current_user.user_id)
    if not variant:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return variant


@router.put("/{variant_id}", response_model=VariantOut)
async def update_variant(
    variant_id: str,
    data: VariantUpdate,
    current_user: UserPublic = Depends(get_current_user),
    variants: VariantRepository = Depends(get_variant_repository),
):
    """
    Update a variant. isDefault=true makes it the element's default;
    isDefault=false on the current default is ignored (an element always
    keeps one default).
    """
    variant = await variants.get_for_user(variant_id, current_user.user_id)
    if not variant:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    variant.name = data.name
    if data.content is not None:
        variant.content = data.content

    make_default = data.is_default and not variant.is_default
    return await variants.update(variant, make_default=make_default)


@router.delete("/{variant_id}")
async def delete_variant(
    variant_id: str,
    current_user: UserPublic = Depends(get_current_user),
    variants: VariantRepository = Depends(get_variant_repository),
):
    variant = await variants.get_for_user(variant_id, current_user.user_id)
    if not variant:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    if await variants.count_by_element(variant.element_id) <= 1:
        raise HTTPException(
            status_code=400,
            detail="Cannot delete the only variant. Elements must have at least one variant."
        )

    if variant.is_default:
        raise HTTPException(
            status_code=400,
            detail="Cannot delete the default variant. Please set another variant as default first."
        )

    await variants.delete(variant_id)
    return {"message": "Variant deleted successfully"}
