"""
awarebot/training/ledger.py

The progress ledger: one UserProgress row per completion submission, and
the XP update that goes with it, committed together.

Repeat completions of an already-completed module are governed by the
REPEAT_COMPLETION_POLICY setting:
    record – store the attempt (keeps score history) but award no more XP
    reject – refuse the submission with DuplicateCompletionError
    reward – award the module's XP again on every completion

The first completion of a module claims it through a partial unique index
on UserProgress (first_completion). Two submissions that both see no
earlier completion collide on that index; the loser rolls back and is
replayed as a repeat. XP is added with a single UPDATE ... SET xp_points =
xp_points + n, so concurrent rewarded submissions never overwrite each
other. The user row is also read FOR UPDATE, which PostgreSQL honours and
SQLite ignores.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import List, Optional, Set

from flask import current_app
from sqlalchemy.exc import IntegrityError

from awarebot import db
from awarebot.models import TrainingModule, User, UserProgress
from awarebot.training.errors import (
    DuplicateCompletionError, ProgressError, UnknownRecordError,
)
from awarebot.training.leveling import XpState, apply_completion, derive_level, replay_xp

logger = logging.getLogger(__name__)

POLICY_RECORD = "record"
POLICY_REJECT = "reject"
POLICY_REWARD = "reward"
REPEAT_POLICIES = (POLICY_RECORD, POLICY_REJECT, POLICY_REWARD)


def _validate_score(score) -> Optional[float]:
    if score is None:
        return None
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ProgressError("Score must be a number between 0 and 100")
    if not math.isfinite(score) or not 0 <= score <= 100:
        raise ProgressError("Score must be a number between 0 and 100")
    return float(score)


def _has_completed(user_id: int, module_id: int) -> bool:
    return UserProgress.query.filter_by(
        user_id=user_id, module_id=module_id, completed=True
    ).first() is not None


def _write_completion(user_id: int, module_id: int, score: Optional[float],
                      completed: bool, policy: str) -> UserProgress:
    module = db.session.get(TrainingModule, module_id)
    if module is None:
        raise UnknownRecordError(f"Training module {module_id} not found")
    if module.xp_reward is None or module.xp_reward < 0:
        raise ProgressError(f"Training module {module_id} has an invalid XP reward")

    user = db.session.execute(
        db.select(User).filter_by(id=user_id).with_for_update()
    ).scalar_one_or_none()
    if user is None:
        raise UnknownRecordError(f"User {user_id} not found")

    repeat = completed and _has_completed(user_id, module_id)
    if repeat and policy == POLICY_REJECT:
        raise DuplicateCompletionError(f"Module {module_id} is already completed")

    record = UserProgress(
        user_id=user_id,
        module_id=module_id,
        completed=completed,
        score=score,
        first_completion=completed and not repeat,
        completed_at=datetime.now(timezone.utc) if completed else None,
    )

    if completed and (not repeat or policy == POLICY_REWARD):
        gained = apply_completion(XpState(), module.xp_reward)
        db.session.execute(
            db.update(User)
            .where(User.id == user_id)
            .values(
                xp_points=User.xp_points + gained.xp_points,
                completed_modules=User.completed_modules + gained.completed_modules,
            )
            .execution_options(synchronize_session=False)
        )
        record.xp_awarded = gained.xp_points
        record.rewarded = True

    db.session.add(record)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(
        "Recorded progress user=%s module=%s completed=%s repeat=%s xp_awarded=%s",
        user_id, module_id, completed, repeat, record.xp_awarded,
    )
    return record


def record_completion(user_id: int, module_id: int, score=None,
                      completed: bool = True, policy: Optional[str] = None) -> UserProgress:
    policy = policy or current_app.config.get("REPEAT_COMPLETION_POLICY", POLICY_RECORD)
    if policy not in REPEAT_POLICIES:
        raise ValueError(f"Unknown repeat completion policy: {policy!r}")

    score = _validate_score(score)

    try:
        return _write_completion(user_id, module_id, score, completed, policy)
    except IntegrityError:
        # another submission claimed the first completion since we checked
        logger.info("Concurrent first completion user=%s module=%s, retrying as repeat",
                    user_id, module_id)
        return _write_completion(user_id, module_id, score, completed, policy)


def get_progress(user_id: int) -> List[UserProgress]:
    return (
        UserProgress.query
        .filter_by(user_id=user_id)
        .order_by(UserProgress.id.asc())
        .all()
    )


def completed_module_ids(user_id: int) -> Set[int]:
    """Return set of module ids the user has completed at least once."""
    rows = UserProgress.query.filter_by(user_id=user_id, completed=True).all()
    return {r.module_id for r in rows}


def replay_user_xp(user_id: int) -> XpState:
    """Recompute a user's XP totals from the ledger; should equal the stored ones."""
    rows = (
        UserProgress.query
        .filter_by(user_id=user_id, rewarded=True)
        .order_by(UserProgress.id.asc())
        .all()
    )
    return replay_xp(r.xp_awarded for r in rows)


def progress_summary(user: User) -> dict:
    completed = len(completed_module_ids(user.id))
    total = TrainingModule.query.count()
    level = derive_level(user.xp_points)
    return {
        "completedModules":   completed,
        "totalModules":       total,
        "progressPercentage": round(completed / total * 100) if total else 0,
        "currentLevel":       level.tier,
        "xpPoints":           user.xp_points,
        "xpToNextLevel":      level.xp_to_next_level,
        "xpProgress":         level.xp_progress_percent,
    }
