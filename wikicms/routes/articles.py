"""Article routes - listing, reading and editing articles."""
from flask import Blueprint, g, jsonify, redirect, request, session, url_for, current_app

from wikicms.models import Article
from wikicms.pages import ArticleListPage, ArticlePage, RecordFormPage, RecordSuccessPage, render_page
from wikicms.roles import Role, required_rank
from wikicms.routes.auth import editor_required
from wikicms.services import crud, identity, listing

articles_bp = Blueprint('articles', __name__)


# ========================================
# READING
# ========================================

@articles_bp.route('/articles')
def article_list():
    search = request.args.get('search', '').strip()
    result = listing.list_articles(identity.caller_rank(g.current_user), search)
    page = ArticleListPage(
        current_user=g.current_user,
        grouped_articles=result.grouped,
        latest_articles=result.latest,
        search_query=search,
    )
    return render_page('articles.html', page)


@articles_bp.route('/article/<int:article_id>')
def article_detail(article_id):
    article = listing.get_article(identity.caller_rank(g.current_user), article_id)
    return render_page('article.html', ArticlePage(current_user=g.current_user, article=article))


@articles_bp.route('/search_categories')
def search_categories():
    """Category autocomplete, as a JSON list of strings."""
    term = request.args.get('q', '').strip()
    categories = listing.suggest_categories(term)
    current_app.logger.debug('Category suggestions for %r: %s', term, categories)
    return jsonify(categories)


# ========================================
# EDITING
# ========================================

@articles_bp.route('/form_article')
@editor_required
def article_form():
    page = RecordFormPage(
        current_user=g.current_user,
        type_name='Article',
        fields=crud.new_form(Article),
        categories=listing.suggest_categories(),
    )
    return render_page('record_form.html', page)


@articles_bp.route('/create_article', methods=['POST'])
@editor_required
def create_article():
    article = crud.create_record(Article, request.form, actor=g.current_user)
    page = RecordSuccessPage(current_user=g.current_user, type_name='Article', record=article)
    return render_page('record_success.html', page)


@articles_bp.route('/edit_article/<int:article_id>')
@editor_required
def edit_article(article_id):
    article, fields = crud.edit_form(Article, article_id)
    page = RecordFormPage(
        current_user=g.current_user,
        type_name='Article',
        fields=fields,
        categories=listing.suggest_categories(),
        is_edit=True,
        record_id=article.id,
        private_select=str(article.private),
    )
    return render_page('record_form.html', page)


@articles_bp.route('/update_article', methods=['POST'])
def update_article():
    try:
        required = required_rank(current_app.config['ARTICLE_UPDATE_MIN_ROLE'])
    except ValueError as exc:
        current_app.logger.error('%s; guarding update_article at Admin', exc)
        required = Role.ADMIN
    if required > Role.VISITOR:
        g.current_user = identity.authorize(session, required)

    article = crud.update_record(Article, request.form, actor=g.current_user)
    return redirect(url_for('articles.article_detail', article_id=article.id))


@articles_bp.route('/delete_article/<int:article_id>', methods=['POST'])
@editor_required
def delete_article(article_id):
    crud.delete_record(Article, article_id)
    return redirect(url_for('articles.article_list'))
