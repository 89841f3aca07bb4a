"""
Variant Resolver
================

Chooses, per element, which variant's content to serve for a visitor.

Pipeline per element:
1. extract_context_value: condition type -> scalar from the visitor context
2. evaluate_condition: scalar vs condition value under an operator
3. resolve_element: AND-match each non-default variant's conditions, score
   by the sum of condition priorities, keep the highest (earliest on ties),
   fall back to the default variant

Everything here is pure and synchronous: it runs over a snapshot that the
caller has already loaded.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from models.domain import (
    ConditionOperator,
    ConditionType,
    Element,
    Variant,
    VisitorContext,
    Website,
)
from services.errors import ElementResolutionError

logger = logging.getLogger(__name__)

MOBILE_UA_PATTERN = re.compile(
    r'mobile|android|iphone|ipad|ipod|blackberry|iemobile|opera mini',
    re.IGNORECASE
)
TABLET_MIN_WIDTH = 768  # strictly wider than this is a tablet

DEVICE_MOBILE = "mobile"
DEVICE_TABLET = "tablet"
DEVICE_DESKTOP = "desktop"


@dataclass(frozen=True)
class ResolvedVariant:
    """One entry of the integration response"""
    selector: str
    content: str

    def to_dict(self) -> dict:
        return {"selector": self.selector, "content": self.content}


@dataclass(frozen=True)
class ElementResolution:
    """Outcome of resolving one element: a value, nothing, or an error"""
    element_id: str
    variant: Optional[ResolvedVariant] = None
    error: Optional[ElementResolutionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# =============================================================================
# CONTEXT EXTRACTION
# =============================================================================

def detect_device(user_agent: str, screen_width: int) -> str:
    """Classify the visitor as mobile, tablet or desktop"""
    if MOBILE_UA_PATTERN.search(user_agent or ""):
        return DEVICE_TABLET if (screen_width or 0) > TABLET_MIN_WIDTH else DEVICE_MOBILE
    return DEVICE_DESKTOP


def extract_context_value(context: VisitorContext, condition_type: str) -> str:
    """
    Map a condition type to the context value it compares against.

    Unrecognized or not-yet-extractable types give "" so they fail every
    positive comparison deterministically.
    """
    if condition_type == ConditionType.URL:
        return context.url or ""
    if condition_type == ConditionType.PATH:
        return context.path or ""
    if condition_type == ConditionType.REFERRER:
        return context.referrer or ""
    if condition_type == ConditionType.LANGUAGE:
        return context.language or ""
    if condition_type == ConditionType.DEVICE:
        return detect_device(context.user_agent, context.screen_width)
    return ""


# =============================================================================
# CONDITION EVALUATION
# =============================================================================

def evaluate_condition(actual: str, operator: str, expected: str) -> bool:
    """
    Compare a context value against a condition value.

    Comparison is case-insensitive except for regex, which applies the
    pattern as written to the original-case actual value. An invalid pattern
    never matches. Unimplemented operators (greater_than, less_than, exists,
    not_exists) never match.
    """
    actual = actual or ""
    expected = expected or ""

    if operator == ConditionOperator.REGEX:
        try:
            return re.search(expected, actual) is not None
        except re.error as e:
            logger.warning(f"Invalid regex in condition value {expected!r}: {e}")
            return False

    value = actual.lower()
    target = expected.lower()

    if operator == ConditionOperator.EQUALS:
        return value == target
    if operator == ConditionOperator.NOT_EQUALS:
        return value != target
    if operator == ConditionOperator.CONTAINS:
        return target in value
    if operator == ConditionOperator.NOT_CONTAINS:
        return target not in value
    if operator == ConditionOperator.STARTS_WITH:
        return value.startswith(target)
    if operator == ConditionOperator.ENDS_WITH:
        return value.endswith(target)
    return False


# =============================================================================
# RESOLUTION
# =============================================================================

def score_variant(variant: Variant, context: VisitorContext) -> Optional[int]:
    """
    Score a non-default variant against the context.

    Returns:
        Sum of condition priorities if every condition matches (0 for a
        variant without conditions), None on the first failed condition
    """
    total = 0
    for condition in variant.conditions:
        actual = extract_context_value(context, condition.condition_type)
        if not evaluate_condition(actual, condition.operator, condition.value):
            return None
        total += condition.priority
    return total


def resolve_element(element: Element, context: VisitorContext) -> Optional[ResolvedVariant]:
    """
    Pick the variant to serve for one element.

    Ties keep the variant seen first, in stored order.
    """
    best_variant: Optional[Variant] = None
    best_priority = -1

    for variant in element.variants:
        if variant.is_default:
            continue
        score = score_variant(variant, context)
        if score is not None and score > best_priority:
            best_priority = score
            best_variant = variant

    if best_variant is None:
        best_variant = element.default_variant

    if best_variant is None:
        return None
    return ResolvedVariant(selector=element.selector, content=best_variant.content)


def try_resolve_element(element: Element, context: VisitorContext) -> ElementResolution:
    """Resolve one element, capturing any failure as a result value"""
    try:
        return ElementResolution(element_id=element.id, variant=resolve_element(element, context))
    except Exception as e:
        return ElementResolution(
            element_id=element.id,
            error=ElementResolutionError(element.id, e),
        )


def resolve_website(website: Website, context: VisitorContext) -> List[ResolvedVariant]:
    """
    Resolve every element of a website snapshot, in element order.

    Elements with nothing to serve are omitted. A failing element is logged
    and omitted; it never aborts the rest of the batch.
    """
    resolved: List[ResolvedVariant] = []
    for element in website.elements:
        outcome = try_resolve_element(element, context)
        if not outcome.ok:
            logger.error(
                f"Skipping element {outcome.element_id} of website {website.id}: {outcome.error}",
                exc_info=outcome.error.cause,
            )
            continue
        if outcome.variant is not None:
            resolved.append(outcome.variant)
    return resolved
