"""
Wiki CMS - Application Factory
"""
import os

import click
from flask import Flask, current_app, request, has_request_context
from dotenv import load_dotenv

from wikicms.errors import register_error_handlers
from wikicms.extensions import db, babel
from wikicms.roles import Role, required_rank
from wikicms.routes import register_blueprints
from wikicms.settings import config


def get_locale():
    """Determine the best locale for the user."""
    if not has_request_context():
        return None
    languages = current_app.config['LANGUAGES']
    lang = request.cookies.get('babel_translation')
    if lang in languages:
        return lang
    return request.accept_languages.best_match(languages)


def create_app(config_name=None):
    """Application Factory."""
    load_dotenv()

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))
    app.logger.setLevel(app.config['LOG_LEVEL'])

    check_update_guard(app)

    # Initialize extensions
    db.init_app(app)
    babel.init_app(app, locale_selector=get_locale)

    # Context processor for templates
    @app.context_processor
    def inject_conf_var():
        return dict(get_locale=get_locale)

    register_error_handlers(app)
    register_blueprints(app)
    register_cli_commands(app)

    if app.config.get('AUTO_CREATE_SCHEMA'):
        with app.app_context():
            db.create_all()

    return app


def check_update_guard(app):
    """Validate the configured minimum role for article updates."""
    if required_rank(app.config['ARTICLE_UPDATE_MIN_ROLE']) == Role.VISITOR:
        app.logger.warning('POST /update_article is not guarded: any caller may edit articles')


def register_cli_commands(app):
    """Register CLI commands."""

    @app.cli.command("init-db")
    def init_db_command():
        """Creates database tables."""
        db.create_all()
        click.echo("Initialized the database.")

    @app.cli.command("create-admin")
    @click.option('--mail', required=True)
    @click.option('--password', required=True)
    @click.option('--first-name', default='')
    @click.option('--last-name', default='')
    def create_admin_command(mail, password, first_name, last_name):
        """Creates an administrator account."""
        from wikicms.models import User

        if User.query.filter_by(mail=mail).first() is not None:
            raise click.ClickException(f'User {mail} already exists.')

        user = User(mail=mail, first_name=first_name, last_name=last_name, role='Admin')
        user.password = password
        db.session.add(user)
        db.session.commit()
        click.echo(f"Created administrator {mail}.")
