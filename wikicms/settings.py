"""Configuration objects, selected by name in the application factory."""
import os


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev_key_please_change')

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///wiki.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {'hide_parameters': True}
    AUTO_CREATE_SCHEMA = True

    # Sessions
    SESSION_COOKIE_NAME = 'wiki_session'
    SESSION_COOKIE_HTTPONLY = True

    # i18n
    BABEL_DEFAULT_LOCALE = 'en'
    LANGUAGES = ['en', 'es']

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Minimum role for POST /update_article. Create, edit and delete all
    # require Editor; set to 'Visitor' to leave the route unguarded.
    ARTICLE_UPDATE_MIN_ROLE = os.environ.get('ARTICLE_UPDATE_MIN_ROLE', 'Editor')

    LATEST_ARTICLES_LIMIT = 5


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    AUTO_CREATE_SCHEMA = False
    ARTICLE_UPDATE_MIN_ROLE = 'Editor'


class ProductionConfig(Config):
    SESSION_COOKIE_SECURE = True


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}
