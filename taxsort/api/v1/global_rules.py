"""Global (shared) rules API routes: master switch and per-rule opt-out."""

from fastapi import APIRouter, Depends

from taxsort.api.deps import get_current_user_id, get_rule_cache, get_rule_store
from taxsort.schemas.classification_rule import GlobalRuleSettings, GlobalRuleStatus
from taxsort.services.rule_cache import RuleCache
from taxsort.services.rule_service import RuleService
from taxsort.services.rule_store import RuleStore

router = APIRouter()


@router.get("", response_model=list[GlobalRuleStatus])
async def list_global_rules(
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
):
    """List active global rules with the current user's enabled flag."""
    service = RuleService(store, cache)
    return await service.list_global_rules_with_status(user_id)


@router.get("/settings", response_model=GlobalRuleSettings)
async def get_settings(
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
):
    service = RuleService(store, cache)
    return await service.get_global_settings(user_id)


@router.put("/settings", response_model=GlobalRuleSettings)
async def update_settings(
    data: GlobalRuleSettings,
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
):
    """Turn global rules on or off for the current user."""
    service = RuleService(store, cache)
    return await service.toggle_global_rules(user_id, data.use_global_rules)


@router.post("/{rule_id}/disable", status_code=204)
async def disable_global_rule(
    rule_id: int,
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
):
    service = RuleService(store, cache)
    await service.disable_global_rule(user_id, rule_id)


@router.post("/{rule_id}/enable", status_code=204)
async def enable_global_rule(
    rule_id: int,
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
):
    service = RuleService(store, cache)
    await service.enable_global_rule(user_id, rule_id)
