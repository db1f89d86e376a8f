"""Article listing, search and category suggestions."""
from dataclasses import dataclass, field

from flask import current_app
from sqlalchemy import func, or_

from wikicms.errors import NotFoundError
from wikicms.extensions import db
from wikicms.models import Article
from wikicms.roles import Role


@dataclass
class ArticleListing:
    grouped: dict = field(default_factory=dict)
    latest: list = field(default_factory=list)


def visible_articles(caller_rank):
    """Base query restricted to what a caller of ``caller_rank`` may read."""
    query = Article.query
    if caller_rank == Role.VISITOR:
        query = query.filter(Article.private == 0)
    return query


def group_by_category(articles):
    grouped = {}
    for article in articles:
        grouped.setdefault(article.category, []).append(article)
    return grouped


def list_articles(caller_rank, search=None):
    """Articles grouped by category, plus the latest ones when not searching."""
    query = visible_articles(caller_rank).order_by(
        func.lower(Article.category).asc(), Article.created_at.desc()
    )

    if search:
        query = query.filter(or_(
            Article.title.contains(search, autoescape=True),
            Article.summary.contains(search, autoescape=True),
            Article.content.contains(search, autoescape=True),
        ))

    listing = ArticleListing(grouped=group_by_category(query.all()))

    if not search:
        limit = current_app.config.get('LATEST_ARTICLES_LIMIT', 5)
        listing.latest = (
            visible_articles(caller_rank)
            .order_by(Article.created_at.desc())
            .limit(limit)
            .all()
        )
    return listing


def get_article(caller_rank, article_id):
    """Single article lookup; private articles do not exist for visitors."""
    article = db.session.get(Article, article_id)
    if article is None or (caller_rank == Role.VISITOR and article.is_private):
        raise NotFoundError('Article not found')
    return article


def suggest_categories(term=None):
    """Distinct existing categories, optionally filtered by a substring."""
    query = (
        db.session.query(Article.category)
        .filter(Article.category.isnot(None), Article.category != '')
        .distinct()
    )
    if term:
        query = query.filter(func.lower(Article.category).contains(term.lower(), autoescape=True))
    return [category for (category,) in query.order_by(Article.category)]
