"""Article model."""
from datetime import datetime

from wikicms.extensions import db
from wikicms.forms import FormEntity, FormField, PRIVACY_SELECTOR


class Article(db.Model, FormEntity):
    __tablename__ = 'articles'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False, default='')
    summary = db.Column(db.Text, default='')
    content = db.Column(db.Text, default='')
    category = db.Column(db.String(100), default='')  # Free text, shared by suggestions
    private = db.Column(db.Integer, nullable=False, default=0)  # 1 hides it from visitors
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __form__ = (
        FormField('id', hidden=True),
        FormField('title', label='Title'),
        FormField('summary', widget='textarea', label='Summary'),
        FormField('content', widget='textarea', label='Content'),
        FormField('category', label='Category'),
        FormField('private', name=PRIVACY_SELECTOR, widget='select', label='Private',
                  python_type=int, bind=False),
        FormField('author_id', hidden=True),
    )

    @property
    def is_private(self):
        return self.private == 1

    def apply_form_controls(self, form):
        """Derive the privacy flag and category from the form controls."""
        self.private = 1 if form.get(PRIVACY_SELECTOR) == '1' else 0

        new_category = (form.get('new_category') or '').strip()
        if new_category:
            self.category = new_category

    def apply_create_defaults(self, form, actor=None):
        self.apply_form_controls(form)
        if actor is not None:
            self.author_id = actor.id

    def apply_update_defaults(self, form, actor=None):
        self.apply_form_controls(form)

    def __repr__(self):
        return f'<Article {self.id} {self.title!r}>'
