import pytest

from wikicms import create_app
from wikicms.extensions import db
from wikicms.forms import PRIVACY_SELECTOR
from wikicms.models import Article, User


# ==================== Gate ====================

GUARDED = [
    ('get', '/form_article', 'Editor'),
    ('post', '/create_article', 'Editor'),
    ('get', '/users', 'Admin'),
]


@pytest.mark.parametrize('method,path,required', GUARDED)
def test_guarded_routes_reject_anonymous(client, method, path, required):
    response = getattr(client, method)(path)
    assert response.status_code == 401
    assert response.get_json() == {'error': 'unauthorized', 'message': 'Unauthorized: Please login'}


def test_stale_session_is_unauthorized_on_guarded_routes(client, login_as, make_user):
    user = make_user(role='Admin')
    login_as(user)
    db.session.delete(user)
    db.session.commit()
    response = client.get('/users')
    assert response.status_code == 401
    assert 'Invalid session' in response.get_json()['message']


@pytest.mark.parametrize('role,status', [
    ('Member', 403), ('Editor', 200), ('EditorInChief', 200), ('Admin', 200),
])
def test_editor_gate(client, login_as, make_user, role, status):
    login_as(make_user(role=role))
    assert client.get('/form_article').status_code == status


@pytest.mark.parametrize('role,status', [
    ('Member', 403), ('Editor', 403), ('EditorInChief', 403), ('Admin', 200),
])
def test_admin_gate(client, login_as, make_user, role, status):
    login_as(make_user(role=role))
    response = client.get('/users')
    assert response.status_code == status
    if status == 403:
        assert response.get_json()['error'] == 'forbidden'


# ==================== Login / registration ====================

def test_login_and_logout(client, make_user):
    make_user(mail='ada@example.org', password='Lovelace1!')
    response = client.post('/login', data={'email': 'ada@example.org', 'password': 'Lovelace1!'})
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/articles')
    with client.session_transaction() as sess:
        assert 'user_id' in sess

    response = client.get('/logout')
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/login')
    with client.session_transaction() as sess:
        assert 'user_id' not in sess


def test_login_with_bad_credentials(client, make_user):
    make_user(mail='ada@example.org', password='Lovelace1!')
    response = client.post('/login', data={'email': 'ada@example.org', 'password': 'nope'})
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Invalid credentials'


def test_registration_form_hides_role(client):
    response = client.get('/form_user')
    assert response.status_code == 200
    assert b'name="role_requested"' in response.data
    assert b'name="role"' not in response.data


def test_self_registration_as_admin_becomes_member(client):
    response = client.post('/create_user', data={
        'mail': 'mallory@example.org',
        'password': 'Sneaky123!',
        'role': 'Admin',
        'role_requested': 'Admin',
    })
    assert response.status_code == 200
    user = User.query.filter_by(mail='mallory@example.org').one()
    assert user.role == 'Member'
    assert user.role_requested == 'Admin'


def test_registration_with_taken_mail(client, make_user):
    make_user(mail='ada@example.org')
    response = client.post('/create_user', data={'mail': 'ada@example.org', 'password': 'x'})
    assert response.status_code == 400
    assert User.query.count() == 1


# ==================== Articles ====================

def test_anonymous_listing_hides_private_articles(client, make_article):
    make_article(title='Public page')
    make_article(title='Hidden page', private=1)
    response = client.get('/articles')
    assert response.status_code == 200
    assert b'Public page' in response.data
    assert b'Hidden page' not in response.data


def test_dangling_session_lists_like_a_visitor(client, login_as, make_user, make_article):
    user = make_user()
    login_as(user)
    db.session.delete(user)
    db.session.commit()
    make_article(title='Hidden page', private=1)
    response = client.get('/articles')
    assert response.status_code == 200
    assert b'Hidden page' not in response.data


def test_member_listing_includes_private_articles(client, login_as, make_user, make_article):
    make_article(title='Hidden page', private=1)
    login_as(make_user())
    assert b'Hidden page' in client.get('/articles').data


def test_search(client, make_article):
    make_article(title='Wiki markup')
    make_article(title='Gardening')
    response = client.get('/articles?search=markup')
    assert b'Wiki markup' in response.data
    assert b'Gardening' not in response.data


def test_article_detail(client, make_article):
    public = make_article(title='Public page')
    hidden = make_article(title='Hidden page', private=1)
    assert client.get(f'/article/{public.id}').status_code == 200
    assert client.get(f'/article/{hidden.id}').status_code == 404
    assert client.get('/article/999').status_code == 404


def test_search_categories_returns_json(client, make_article):
    make_article(category='Science')
    make_article(category='Sports')
    make_article(category='Art')
    assert client.get('/search_categories?q=s').get_json() == ['Science', 'Sports']
    assert client.get('/search_categories').get_json() == ['Art', 'Science', 'Sports']


def test_create_article(client, login_as, make_user):
    editor = make_user(role='Editor')
    login_as(editor)
    response = client.post('/create_article', data={
        'title': 'Fresh',
        'summary': 'S',
        'content': 'C',
        'category': 'Old',
        'new_category': 'New',
        PRIVACY_SELECTOR: '1',
    })
    assert response.status_code == 200
    article = Article.query.filter_by(title='Fresh').one()
    assert article.category == 'New'
    assert article.private == 1
    assert article.author_id == editor.id


def test_edit_form_is_prefilled(client, login_as, make_user, make_article):
    article = make_article(title='Existing page', private=1)
    login_as(make_user(role='Editor'))
    response = client.get(f'/edit_article/{article.id}')
    assert response.status_code == 200
    assert b'value="Existing page"' in response.data
    assert f'name="id" value="{article.id}"'.encode() in response.data


def test_update_article(client, login_as, make_user, make_article):
    article = make_article(title='Before', private=1)
    login_as(make_user(role='Editor'))
    response = client.post('/update_article', data={'id': str(article.id), 'title': 'After'})
    assert response.status_code == 302
    assert response.headers['Location'].endswith(f'/article/{article.id}')
    stored = db.session.get(Article, article.id)
    assert stored.title == 'After'
    assert stored.private == 0


def test_update_article_requires_editor_by_default(client, make_article):
    article = make_article(title='Before')
    response = client.post('/update_article', data={'id': str(article.id), 'title': 'After'})
    assert response.status_code == 401
    assert db.session.get(Article, article.id).title == 'Before'


def test_update_article_status_codes(client, login_as, make_user):
    login_as(make_user(role='Editor'))
    assert client.post('/update_article', data={'title': 'x'}).status_code == 400
    assert client.post('/update_article', data={'id': '555', 'title': 'x'}).status_code == 404


def test_delete_article(client, login_as, make_user, make_article):
    article = make_article()
    login_as(make_user(role='Editor'))
    response = client.post(f'/delete_article/{article.id}')
    assert response.status_code == 302
    assert client.get(f'/article/{article.id}').status_code == 404
    assert client.post(f'/delete_article/{article.id}').status_code == 404


def test_member_cannot_delete(client, login_as, make_user, make_article):
    article = make_article()
    login_as(make_user())
    assert client.post(f'/delete_article/{article.id}').status_code == 403
    assert db.session.get(Article, article.id) is not None


# ==================== Promotion ====================

def test_promoted_user_passes_the_gate(client, login_as, make_user):
    admin = make_user(mail='admin@example.org', role='Admin')
    member = make_user(mail='member@example.org')

    login_as(member)
    assert client.get('/form_article').status_code == 403

    login_as(admin)
    response = client.post(f'/promote_user/{member.id}', data={'new_role': 'Editor'})
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/users')

    login_as(member)
    assert client.get('/form_article').status_code == 200


def test_promote_requires_admin(client, login_as, make_user):
    editor = make_user(role='Editor')
    login_as(editor)
    response = client.post(f'/promote_user/{editor.id}', data={'new_role': 'Admin'})
    assert response.status_code == 403
    assert db.session.get(User, editor.id).role == 'Editor'


def test_promote_invalid_role(client, login_as, make_user):
    member = make_user(mail='member@example.org')
    login_as(make_user(mail='admin@example.org', role='Admin'))
    assert client.post(f'/promote_user/{member.id}', data={'new_role': 'God'}).status_code == 400
    assert client.post('/promote_user/999', data={'new_role': 'Editor'}).status_code == 404


# ==================== Configuration ====================

def test_open_update_route_when_configured(app, client, make_article):
    app.config['ARTICLE_UPDATE_MIN_ROLE'] = 'Visitor'
    article = make_article(title='Before')
    response = client.post('/update_article', data={'id': str(article.id), 'title': 'After'})
    assert response.status_code == 302
    assert db.session.get(Article, article.id).title == 'After'


def test_unknown_update_guard_is_rejected(monkeypatch):
    monkeypatch.setattr('wikicms.settings.TestingConfig.ARTICLE_UPDATE_MIN_ROLE', 'Wizard')
    with pytest.raises(ValueError):
        create_app('testing')


def test_home_page(client):
    assert client.get('/').status_code == 200


def test_set_language_cookie(client):
    response = client.get('/set_language/es')
    assert response.status_code == 302
    assert 'babel_translation=es' in response.headers['Set-Cookie']

    response = client.get('/set_language/xx')
    assert 'babel_translation=en' in response.headers['Set-Cookie']


@pytest.mark.parametrize('role,status', [(None, 401), ('Editor', 403), ('Admin', 302)])
def test_mistyped_update_guard_fails_closed(app, client, login_as, make_user, make_article, role, status):
    app.config['ARTICLE_UPDATE_MIN_ROLE'] = 'editor'
    article = make_article(title='Before')
    if role is not None:
        login_as(make_user(role=role))
    response = client.post('/update_article', data={'id': str(article.id), 'title': 'After'})
    assert response.status_code == status
    expected = 'After' if status == 302 else 'Before'
    assert db.session.get(Article, article.id).title == expected


@pytest.mark.parametrize('role,can_edit', [('Member', False), ('Editor', True), ('Admin', True)])
def test_article_page_shows_edit_controls_by_rank(client, login_as, make_user, make_article, role, can_edit):
    article = make_article()
    login_as(make_user(role=role))
    response = client.get(f'/article/{article.id}')
    assert (f'/edit_article/{article.id}'.encode() in response.data) == can_edit


@pytest.mark.parametrize('role,is_admin', [('EditorInChief', False), ('Admin', True)])
def test_users_link_only_for_admins(client, login_as, make_user, role, is_admin):
    login_as(make_user(role=role))
    assert (b'href="/users"' in client.get('/').data) == is_admin
