from flask import current_app, jsonify, request
from flask_login import current_user, login_required

from awarebot import db
from awarebot.models import OrganizationPolicy, ThreatScenario, TrainingModule
from awarebot.training import training
from awarebot.training.achievements import achievements_held
from awarebot.training.errors import (
    DuplicateCompletionError, ProgressError, UnknownRecordError,
)
from awarebot.training.ledger import get_progress, progress_summary, record_completion
from awarebot.training.library import organization_policies, threat_scenarios
from awarebot.training.recommend import recommend

DASHBOARD_THREATS = 2
DASHBOARD_POLICIES = 3


def _limit_arg(default=None):
    """?limit= as an int (non-positive means none), or the default when absent/invalid."""
    limit = request.args.get('limit', type=int)
    if limit is None:
        return default
    return limit


# ── Catalog ───────────────────────────────────────────────────────────────────

@training.route('/api/training-modules')
@login_required
def list_modules():
    modules = TrainingModule.query.order_by(
        TrainingModule.order.asc(), TrainingModule.id.asc()
    ).all()
    return jsonify([m.to_dict() for m in modules])


@training.route('/api/training-modules/<int:module_id>')
@login_required
def get_module(module_id):
    module = db.session.get(TrainingModule, module_id)
    if not module:
        return jsonify({"error": "Training module not found"}), 404
    return jsonify(module.to_dict())


# ── Progress ──────────────────────────────────────────────────────────────────

@training.route('/api/user-progress', methods=['POST'])
@login_required
def submit_progress():
    """
    Body: {"moduleId": int, "completed": bool (default true), "score": 0-100 | null}
    The score is computed by the client against the parsed quiz.
    """
    data = request.get_json(silent=True) or {}
    module_id = data.get('moduleId')
    if not isinstance(module_id, int) or isinstance(module_id, bool):
        return jsonify({"error": "moduleId must be an integer"}), 400
    completed = data.get('completed', True)
    if not isinstance(completed, bool):
        return jsonify({"error": "completed must be a boolean"}), 400

    try:
        record = record_completion(
            current_user.id, module_id, score=data.get('score'), completed=completed
        )
    except UnknownRecordError as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 404
    except DuplicateCompletionError as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 409
    except ProgressError as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 400

    current_app.logger.debug("Progress %s stored for user %s", record.id, current_user.id)
    return jsonify(record.to_dict()), 201


@training.route('/api/user-progress')
@login_required
def list_progress():
    return jsonify([p.to_dict() for p in get_progress(current_user.id)])


# ── Dashboard ─────────────────────────────────────────────────────────────────

@training.route('/api/dashboard')
@login_required
def dashboard():
    return jsonify({
        "userProgress":       progress_summary(current_user),
        "recommendedModules": [m.to_dict(include_content=False) for m in recommend(current_user.id)],
        "latestThreats":      [t.to_dict() for t in threat_scenarios(DASHBOARD_THREATS)],
        "policies":           [p.to_dict() for p in organization_policies(DASHBOARD_POLICIES)],
        "achievements":       [a.to_dict() for a in achievements_held(current_user.id)],
    })


@training.route('/api/recommendations')
@login_required
def recommendations():
    modules = recommend(current_user.id, _limit_arg())
    return jsonify([m.to_dict(include_content=False) for m in modules])


@training.route('/api/achievements')
@login_required
def achievements():
    return jsonify([a.to_dict() for a in achievements_held(current_user.id)])


# ── Threats & policies ────────────────────────────────────────────────────────

@training.route('/api/threat-scenarios')
@login_required
def list_threat_scenarios():
    return jsonify([t.to_dict() for t in threat_scenarios(_limit_arg())])


@training.route('/api/threat-scenarios/<int:scenario_id>')
@login_required
def get_threat_scenario(scenario_id):
    scenario = db.session.get(ThreatScenario, scenario_id)
    if not scenario:
        return jsonify({"error": "Threat scenario not found"}), 404
    return jsonify(scenario.to_dict())


@training.route('/api/organization-policies')
@login_required
def list_organization_policies():
    return jsonify([p.to_dict() for p in organization_policies(_limit_arg())])


@training.route('/api/organization-policies/<int:policy_id>')
@login_required
def get_organization_policy(policy_id):
    policy = db.session.get(OrganizationPolicy, policy_id)
    if not policy:
        return jsonify({"error": "Organization policy not found"}), 404
    return jsonify(policy.to_dict())
