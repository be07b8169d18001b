"""
awarebot/training/achievements.py
Which achievements a user holds. Deciding when to grant one is up to the
caller; this module only stores grants and filters the catalogue by them.
"""
from __future__ import annotations

import logging
from typing import Collection, List, Sequence

from sqlalchemy.exc import IntegrityError

from awarebot import db
from awarebot.models import Achievement, User, UserAchievement
from awarebot.training.errors import UnknownRecordError

logger = logging.getLogger(__name__)


def filter_held(catalog: Sequence[Achievement], granted_ids: Collection[int]) -> List[Achievement]:
    return [a for a in catalog if a.id in granted_ids]


def achievements_held(user_id: int) -> List[Achievement]:
    granted = {ua.achievement_id for ua in UserAchievement.query.filter_by(user_id=user_id).all()}
    catalog = Achievement.query.order_by(Achievement.id.asc()).all()
    return filter_held(catalog, granted)


def grant_achievement(user_id: int, achievement_id: int) -> UserAchievement:
    """Store a grant; granting twice returns the existing row."""
    if db.session.get(User, user_id) is None:
        raise UnknownRecordError(f"User {user_id} not found")
    if db.session.get(Achievement, achievement_id) is None:
        raise UnknownRecordError(f"Achievement {achievement_id} not found")

    existing = UserAchievement.query.filter_by(
        user_id=user_id, achievement_id=achievement_id
    ).first()
    if existing:
        return existing

    grant = UserAchievement(user_id=user_id, achievement_id=achievement_id)
    db.session.add(grant)
    try:
        db.session.commit()
    except IntegrityError:
        # lost a race with a concurrent grant
        db.session.rollback()
        return UserAchievement.query.filter_by(
            user_id=user_id, achievement_id=achievement_id
        ).one()

    logger.info("Granted achievement %s to user %s", achievement_id, user_id)
    return grant
