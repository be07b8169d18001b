from flask import Blueprint

training = Blueprint('training', __name__)

from awarebot.training import routes  # noqa: E402,F401
