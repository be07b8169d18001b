from flask import Blueprint

assistant = Blueprint('assistant', __name__)

from awarebot.assistant import routes  # noqa: E402,F401
