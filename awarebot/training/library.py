"""
awarebot/training/library.py

Read-only reference material beside the modules: threat scenarios and
organization policies. A limit of None returns everything; a non-positive
limit returns nothing, as for recommendations.
"""
from __future__ import annotations

from typing import List, Optional

from awarebot.models import OrganizationPolicy, ThreatScenario


def threat_scenarios(limit: Optional[int] = None) -> List[ThreatScenario]:
    """New first, then trending, then most recently added."""
    if limit is not None and limit <= 0:
        return []
    query = ThreatScenario.query.order_by(
        ThreatScenario.is_new.desc(),
        ThreatScenario.is_trending.desc(),
        ThreatScenario.created_at.desc(),
        ThreatScenario.id.desc(),
    )
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def organization_policies(limit: Optional[int] = None) -> List[OrganizationPolicy]:
    if limit is not None and limit <= 0:
        return []
    query = OrganizationPolicy.query.order_by(
        OrganizationPolicy.title.asc(), OrganizationPolicy.id.asc()
    )
    if limit is not None:
        query = query.limit(limit)
    return query.all()
