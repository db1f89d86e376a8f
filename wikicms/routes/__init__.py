"""Routes package - Blueprint registration."""
from wikicms.routes.main import main_bp
from wikicms.routes.auth import auth_bp
from wikicms.routes.articles import articles_bp
from wikicms.routes.users import users_bp


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(articles_bp)
    app.register_blueprint(users_bp)
