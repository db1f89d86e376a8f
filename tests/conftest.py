from datetime import datetime, timedelta

import pytest

from wikicms import create_app
from wikicms.extensions import db
from wikicms.models import Article, User


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(mail='member@example.org', role='Member', password='Secret123!', **kwargs):
        user = User(mail=mail, role=role, **kwargs)
        user.password = password
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def make_article(app):
    base = datetime(2024, 1, 1, 12, 0)

    def _make_article(title='Title', category='General', private=0, minutes=0, **kwargs):
        kwargs.setdefault('summary', f'{title} summary')
        kwargs.setdefault('content', f'{title} content')
        article = Article(
            title=title,
            category=category,
            private=private,
            created_at=base + timedelta(minutes=minutes),
            **kwargs
        )
        db.session.add(article)
        db.session.commit()
        return article
    return _make_article


@pytest.fixture
def login_as(client):
    """Put a user id straight into the client's session."""
    def _login_as(user):
        with client.session_transaction() as sess:
            sess['user_id'] = user.id
    return _login_as
