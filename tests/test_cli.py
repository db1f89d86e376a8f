from wikicms.models import User


def test_create_admin(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-admin', '--mail', 'root@example.org', '--password', 'Root123!'])
    assert result.exit_code == 0
    assert 'Created administrator root@example.org.' in result.output

    admin = User.query.filter_by(mail='root@example.org').one()
    assert admin.role == 'Admin'
    assert admin.check_password('Root123!')


def test_create_admin_refuses_existing_mail(app, make_user):
    make_user(mail='root@example.org')
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-admin', '--mail', 'root@example.org', '--password', 'x'])
    assert result.exit_code != 0
    assert User.query.filter_by(mail='root@example.org').one().role == 'Member'


def test_init_db(app):
    result = app.test_cli_runner().invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Initialized the database.' in result.output
