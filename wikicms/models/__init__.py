"""Models package - Re-exports all models for convenient importing."""
from wikicms.extensions import db
from wikicms.models.user import User
from wikicms.models.article import Article

__all__ = ['db', 'User', 'Article']
