import os

from awarebot import create_app, db
from flask_migrate import upgrade, init, migrate
from sqlalchemy import inspect

app = create_app()


def setup_database():
    """Initialize and run migrations if needed"""
    with app.app_context():
        inspector = inspect(db.engine)
        tables = inspector.get_table_names()
        app.logger.info("Found tables: %s", tables)

        if not tables:
            try:
                if not os.path.exists('migrations'):
                    app.logger.info("Initializing migrations...")
                    init()
                migrate(message="Initial migration")
                upgrade()
                app.logger.info("Tables now: %s", inspect(db.engine).get_table_names())
            except Exception:
                # let the app try to run anyway
                app.logger.exception("Database setup failed")
        else:
            try:
                upgrade()
            except Exception:
                app.logger.exception("Migration failed")


if os.environ.get('RENDER') or os.environ.get('DATABASE_URL'):
    setup_database()

if __name__ == '__main__':
    app.run(debug=True)
