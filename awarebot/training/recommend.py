from __future__ import annotations

from typing import Collection, List, Optional, Sequence

from flask import current_app

from awarebot.models import TrainingModule
from awarebot.training.ledger import completed_module_ids


def select_recommendations(catalog: Sequence[TrainingModule], completed_ids: Collection[int],
                           limit: int) -> List[TrainingModule]:
    """First `limit` uncompleted modules in authored order (order, then id)."""
    if limit <= 0:
        return []
    remaining = [m for m in catalog if m.id not in completed_ids]
    remaining.sort(key=lambda m: (m.order, m.id))
    return remaining[:limit]


def recommend(user_id: int, limit: Optional[int] = None) -> List[TrainingModule]:
    if limit is None:
        limit = current_app.config.get("RECOMMENDATION_LIMIT", 2)
    catalog = TrainingModule.query.order_by(TrainingModule.order.asc(), TrainingModule.id.asc()).all()
    return select_recommendations(catalog, completed_module_ids(user_id), limit)
