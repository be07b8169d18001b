from flask import jsonify, request
from flask_login import current_user, login_required

from awarebot import db
from awarebot.models import ChatMessage
from awarebot.assistant import assistant
from awarebot.assistant.utils import get_completion

MAX_MESSAGE_LENGTH = 2000
DEFAULT_HISTORY_LIMIT = 50


@assistant.route('/api/chat-messages')
@login_required
def chat_history():
    limit = request.args.get('limit', DEFAULT_HISTORY_LIMIT, type=int)
    if limit is None or limit <= 0:
        limit = DEFAULT_HISTORY_LIMIT
    rows = (
        ChatMessage.query
        .filter_by(user_id=current_user.id)
        .order_by(ChatMessage.id.desc())
        .limit(limit)
        .all()
    )
    return jsonify([m.to_dict() for m in reversed(rows)])


@assistant.route('/api/chat', methods=['POST'])
@login_required
def chat():
    data = request.get_json(silent=True) or {}
    message = data.get('message')
    if not isinstance(message, str) or not message.strip():
        return jsonify({"error": "message must be a non-empty string"}), 400
    if len(message) > MAX_MESSAGE_LENGTH:
        return jsonify({"error": f"message is limited to {MAX_MESSAGE_LENGTH} characters"}), 400

    db.session.add(ChatMessage(user_id=current_user.id, content=message.strip(), is_bot=False))
    reply = ChatMessage(user_id=current_user.id, content=get_completion(message.strip()), is_bot=True)
    db.session.add(reply)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    return jsonify(reply.to_dict())
