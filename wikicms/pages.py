"""Typed page contexts handed to the templates."""
from dataclasses import dataclass, field

from flask import render_template
from jinja2 import TemplateError

from wikicms.errors import RenderError
from wikicms.roles import Role, meets, rank


@dataclass
class Page:
    current_user: object = None

    @property
    def current_rank(self):
        if self.current_user is None:
            return Role.VISITOR
        return rank(self.current_user.role)

    @property
    def can_edit(self):
        return meets(self.current_rank, Role.EDITOR)

    @property
    def is_admin(self):
        return meets(self.current_rank, Role.ADMIN)


@dataclass
class HomePage(Page):
    pass


@dataclass
class LoginPage(Page):
    pass


@dataclass
class ArticleListPage(Page):
    grouped_articles: dict = field(default_factory=dict)
    latest_articles: list = field(default_factory=list)
    search_query: str = ''


@dataclass
class ArticlePage(Page):
    article: object = None


@dataclass
class RecordFormPage(Page):
    type_name: str = ''
    fields: list = field(default_factory=list)
    categories: list = field(default_factory=list)
    is_edit: bool = False
    record_id: int = None
    private_select: str = '0'


@dataclass
class RecordSuccessPage(Page):
    type_name: str = ''
    record: object = None


@dataclass
class UserListPage(Page):
    users: list = field(default_factory=list)
    roles: tuple = ()


def render_page(template, page):
    """Render ``template`` with ``page`` as its only context value."""
    try:
        return render_template(template, page=page)
    except TemplateError as exc:
        raise RenderError(f'Template error in {template}: {exc}')
