"""
Flask extension instances, bound to the app in create_app().
"""
from flask_login import LoginManager
from flask_migrate import Migrate

login_manager = LoginManager()
migrate = Migrate()
