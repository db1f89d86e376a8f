"""User model."""
from datetime import datetime

from werkzeug.security import generate_password_hash, check_password_hash

from wikicms.errors import BindingError
from wikicms.extensions import db
from wikicms.forms import FormEntity, FormField
from wikicms.roles import DEFAULT_ROLE


class User(db.Model, FormEntity):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    pseudonym = db.Column(db.String(100))
    mail = db.Column(db.String(120), unique=True, nullable=False)  # Login key
    role_requested = db.Column(db.String(20))  # Advisory only, never checked
    role = db.Column(db.String(20), nullable=False, default=DEFAULT_ROLE)
    password_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    articles = db.relationship('Article', backref='author', lazy=True)

    __form__ = (
        FormField('id', hidden=True),
        FormField('first_name', label='First Name'),
        FormField('last_name', label='Last Name'),
        FormField('pseudonym', label='Pseudonym'),
        FormField('mail', label='Email Address'),
        FormField('role_requested', label='User Role (Requested)'),
        FormField('role', label='User Role (Attributed)'),
        FormField('password', label='Password'),
    )

    @property
    def password(self):
        raise AttributeError('password is write-only')

    @password.setter
    def password(self, raw):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw):
        if not self.password_hash or raw is None:
            return False
        return check_password_hash(self.password_hash, raw)

    @property
    def display_name(self):
        full = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return self.pseudonym or full or self.mail

    def apply_create_defaults(self, form, actor=None):
        # Open registration: whatever was submitted, a new account is a Member.
        self.role = DEFAULT_ROLE
        if not self.mail:
            raise BindingError('Email address is required.')
        if not form.get('password') or not self.password_hash:
            raise BindingError('Password is required.')

    def apply_update_defaults(self, form, actor=None):
        # Role is deliberately not reset here; any route exposing a generic
        # user update must be gated at Admin.
        pass

    def __repr__(self):
        return f'<User {self.id} {self.mail} {self.role}>'
