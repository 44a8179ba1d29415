"""
Flask Extensions

Extension instances shared by the app factory, models and views.
Kept separate from app.py to avoid circular imports.
"""

from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_migrate import Migrate

bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
