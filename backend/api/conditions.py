"""
Conditions API router

Endpoints:
- GET    /api/conditions?variantId=  - list a variant's conditions (priority asc)
- POST   /api/conditions             - create condition
- GET    /api/conditions/{id}
- PUT    /api/conditions/{id}
- DELETE /api/conditions/{id}

conditionType and operator are validated against models.domain.condition,
the same enumerations the resolver reads.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_condition_repository, get_variant_repository
from middleware.auth import UserPublic, get_current_user
from models.api.tenant import ConditionCreate, ConditionOut, ConditionUpdate
from models.domain.condition import Condition
from repositories import ConditionRepository, VariantRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/conditions", tags=["conditions"])

NOT_FOUND = "Condition not found or not owned by user"


async def _require_owned_variant(variant_id: str, current_user: UserPublic,
                                 variants: VariantRepository) -> None:
    variant = await variants.get_for_user(variant_id, current_user.user_id)
    if not variant:
        raise HTTPException(status_code=404, detail="Variant not found or not owned by user")


@router.get("", response_model=List[ConditionOut])
async def list_conditions(
    variant_id: str = Query(..., alias="variantId"),
    current_user: UserPublic = Depends(get_current_user),
    variants: VariantRepository = Depends(get_variant_repository),
    conditions: ConditionRepository = Depends(get_condition_repository),
):
    await _require_owned_variant(variant_id, current_user, variants)
    return await conditions.list_by_variant(variant_id)


@router.post("", response_model=ConditionOut, status_code=status.HTTP_201_CREATED)
async def create_condition(
    data: ConditionCreate,
    current_user: UserPublic = Depends(get_current_user),
    variants: VariantRepository = Depends(get_variant_repository),
    conditions: ConditionRepository = Depends(get_condition_repository),
):
    await _require_owned_variant(data.variant_id, current_user, variants)

    condition = Condition(
        id="",
        variant_id=data.variant_id,
        condition_type=data.condition_type,
        operator=data.operator,
        value=data.value,
        priority=data.priority or 0,
    )
    if not condition.is_implemented:
        logger.info(
            f"Condition {condition.id} uses {condition.condition_type}/{condition.operator}, "
            f"which the resolver does not evaluate; it will never match"
        )
    return await conditions.create(condition)


@router.get("/{condition_id}", response_model=ConditionOut)
async def get_condition(
    condition_id: str,
    current_user: UserPublic = Depends(get_current_user),
    conditions: ConditionRepository = Depends(get_condition_repository),
):
    condition = await conditions.get_for_user(condition_id, current_user.user_id)
    if not condition:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return condition


@router.put("/{condition_id}", response_model=ConditionOut)
async def update_condition(
    condition_id: str,
    data: ConditionUpdate,
    current_user: UserPublic = Depends(get_current_user),
    conditions: ConditionRepository = Depends(get_condition_repository),
):
    """Update a condition; an omitted priority keeps the stored one."""
    condition = await conditions.get_for_user(condition_id, current_user.user_id)
    if not condition:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    condition.condition_type = data.condition_type
    condition.operator = data.operator
    condition.value = data.value
    if data.priority is not None:
        condition.priority = data.priority

    return await conditions.update(condition)


@router.delete("/{condition_id}")
async def delete_condition(
    condition_id: str,
    current_user: UserPublic = Depends(get_current_user),
    conditions: ConditionRepository = Depends(get_condition_repository),
):
    condition = await conditions.get_for_user(condition_id, current_user.user_id)
    if not condition:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    await conditions.delete(condition_id)
    return {"success": True}
