"""Classification rules API routes."""

from fastapi import APIRouter, Depends

from taxsort.api.deps import get_current_user_id, get_rule_cache, get_rule_store
from taxsort.schemas.classification_rule import Rule, RuleCreate, RuleStats, RuleUpdate
from taxsort.services.rule_cache import RuleCache
from taxsort.services.rule_service import RuleService
from taxsort.services.rule_store import RuleStore

router = APIRouter()


@router.get("", response_model=list[Rule])
async def list_rules(
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
):
    """List the current user's own rules, active and inactive."""
    service = RuleService(store, cache)
    return await service.list_rules(user_id)


@router.post("", response_model=Rule, status_code=201)
async def create_rule(
    data: RuleCreate,
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
):
    """Create a manual classification rule."""
    service = RuleService(store, cache)
    return await service.create_rule(data, user_id)


@router.get("/stats", response_model=RuleStats)
async def rule_stats(
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
):
    service = RuleService(store, cache)
    return await service.get_stats(user_id)


@router.patch("/{rule_id}", response_model=Rule)
async def update_rule(
    rule_id: int,
    data: RuleUpdate,
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
):
    """Update one of the current user's rules."""
    service = RuleService(store, cache)
    return await service.update_rule(rule_id, data, user_id)


@router.delete("/{rule_id}", status_code=204)
async def delete_rule(
    rule_id: int,
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
):
    service = RuleService(store, cache)
    await service.delete_rule(rule_id, user_id)


@router.post("/{rule_id}/hits", status_code=204)
async def record_rule_hit(
    rule_id: int,
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
):
    """Record that a rule's suggestion was applied (raises its priority)."""
    service = RuleService(store, cache)
    await service.record_match(rule_id, user_id)
