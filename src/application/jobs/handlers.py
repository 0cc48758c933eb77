"""
Job bodies.

Each body takes the job context, the user id and the trigger payload, and
returns a result dict that is stored on the job run. A `skipped` key marks
a run that had nothing to do.
"""

from dataclasses import replace
from typing import Any, Dict, List

import structlog

from src.core.metrics import record_transactions_synced
from src.domain.entities import InsightType, Transaction
from src.domain.exceptions import DomainException
from src.service.finance import apply_rules

from .context import JobContext

logger = structlog.get_logger(__name__)


def _latest_per_external_id(transactions: List[Transaction]) -> List[Transaction]:
    """Keep the last record for each external id; records without one pass through."""
    latest: Dict[Any, Transaction] = {}
    for index, txn in enumerate(transactions):
        latest[txn.external_id or index] = txn
    return list(latest.values())


async def sync_transactions(ctx: JobContext, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Pull the feed, categorize and upsert by external id.

    Already-synced rows keep their id and creation time. A category the
    user set by hand survives the sync.
    """
    log = logger.bind(user_id=user_id)

    fetched = await ctx.feed_client.fetch_transactions(user_id)
    if not fetched:
        log.info("transactions_sync_empty")
        return {"skipped": "feed returned no transactions", "fetched": 0}

    rules = await ctx.rule_repository.list(user_id)
    categorized = _latest_per_external_id(apply_rules(fetched, rules))

    external_ids = [t.external_id for t in categorized if t.external_id]
    existing = await ctx.transaction_repository.get_by_external_ids(user_id, external_ids)

    to_save: List[Transaction] = []
    created = 0
    for txn in categorized:
        current = existing.get(txn.external_id) if txn.external_id else None
        if current is None:
            to_save.append(replace(txn, user_id=user_id))
            created += 1
            continue

        changes: Dict[str, Any] = {
            "id": current.id,
            "user_id": user_id,
            "created_at": current.created_at,
        }
        if current.category_override:
            changes["category"] = current.category
            changes["category_override"] = True
        if current.nwi_override is not None:
            changes["nwi_override"] = current.nwi_override
        to_save.append(replace(txn, **changes))

    await ctx.transaction_repository.save_many(to_save)
    record_transactions_synced(len(to_save))

    log.info(
        "transactions_synced",
        fetched=len(fetched),
        created=created,
        updated=len(to_save) - created,
    )
    return {"fetched": len(fetched), "created": created, "updated": len(to_save) - created}


async def refresh_prices(ctx: JobContext, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    return await ctx.investment_service.refresh_prices(user_id)


async def generate_insights(ctx: JobContext, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Regenerate each requested insight type.

    `payload["types"]` limits the run to those types; by default every
    type is regenerated. A failing type does not stop the others.
    """
    requested = payload.get("types") or [t.value for t in InsightType]

    generated: List[str] = []
    failed: Dict[str, str] = {}
    for value in requested:
        try:
            insight_type = InsightType(value)
        except ValueError:
            failed[value] = "Unknown insight type"
            continue

        try:
            await ctx.insight_service.regenerate(user_id, insight_type)
        except DomainException as e:
            failed[value] = e.message
            logger.warning(
                "insight_job_type_failed",
                user_id=user_id,
                insight_type=value,
                error=e.message,
            )
            continue

        generated.append(value)

    return {"generated": generated, "failed": failed}


async def budget_breach_check(ctx: JobContext, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    created = await ctx.notification_service.check_budget_breaches(user_id)
    return {"notifications": len(created)}


async def renewal_alert(ctx: JobContext, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    created = await ctx.notification_service.send_renewal_alerts(user_id)
    return {"notifications": len(created)}


async def weekly_digest(ctx: JobContext, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    digest = await ctx.notification_service.send_weekly_digest(user_id)
    if digest is None:
        return {"skipped": "digest already sent this week"}
    return {"notification_id": str(digest.id)}
