import logging

from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from awarebot.config import Config


db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)

    from awarebot.training import training
    from awarebot.quiz import quiz
    from awarebot.assistant import assistant
    from awarebot.training.catalog import register_commands

    app.register_blueprint(training)
    app.register_blueprint(quiz)
    app.register_blueprint(assistant)
    register_commands(app)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Authentication required"}), 401

    return app
