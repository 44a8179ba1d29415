"""
NutriPlan application factory.

Run locally with: python app.py
"""

import logging
import sqlite3

from flask import Flask, jsonify
from sqlalchemy import event

from config import get_config
from extensions import bcrypt, login_manager, migrate
from models import db, User


def configure_logging(app):
    """Configure root logging once from LOG_LEVEL."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    app.logger.setLevel(level)


def _configure_sqlite(engine):
    """
    Enable SQLite foreign key enforcement and let SQLAlchemy drive
    transactions, so SAVEPOINTs work with the pysqlite driver.
    """
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        if isinstance(dbapi_connection, sqlite3.Connection):
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def _error(message, status):
    return jsonify({'success': False, 'error': message}), status


def register_error_handlers(app):
    @app.errorhandler(400)
    def bad_request(e):
        return _error('Bad request', 400)

    @app.errorhandler(401)
    def unauthorized(e):
        return _error('Not authenticated', 401)

    @app.errorhandler(404)
    def not_found(e):
        return _error('Not found', 404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return _error('Method not allowed', 405)

    @app.errorhandler(413)
    def too_large(e):
        return _error('Upload too large', 413)

    @app.errorhandler(500)
    def server_error(e):
        return _error('Internal server error', 500)


def create_app(config_name=None):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return _error('Not authenticated', 401)

    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite'):
        with app.app_context():
            _configure_sqlite(db.engine)

    from views import api
    app.register_blueprint(api)
    register_error_handlers(app)

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    return app


def init_db(app):
    """Create all tables (development helper; production uses flask db upgrade)."""
    with app.app_context():
        db.create_all()


if __name__ == '__main__':
    app = create_app()
    init_db(app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
