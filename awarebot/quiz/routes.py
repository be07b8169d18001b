from flask import current_app, jsonify
from flask_login import login_required

from awarebot import db
from awarebot.models import TrainingModule
from awarebot.quiz import quiz
from awarebot.quiz.parser import parse_quiz


@quiz.route('/api/training-modules/<int:module_id>/quiz')
@login_required
def module_quiz(module_id):
    """
    Parsed quiz for a module. Unparsable content is not an HTTP error:
    the client shows its "could not load quiz" state when contentError is set.
    """
    module = db.session.get(TrainingModule, module_id)
    if not module:
        return jsonify({"error": "Training module not found"}), 404
    if not module.is_quiz:
        return jsonify({"error": "Training module is not a quiz"}), 400

    result = parse_quiz(module.content)
    if not result.ok:
        current_app.logger.warning("Quiz content for module %s could not be parsed", module.id)

    return jsonify({
        "moduleId":     module.id,
        "title":        module.title,
        "introduction": result.display_introduction,
        "format":       result.strategy,
        "questions":    [q.to_dict() for q in result.questions],
        "contentError": not result.ok,
    })
