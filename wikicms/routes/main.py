"""Main routes - Index, language switching."""
from flask import Blueprint, g, request, redirect, make_response, current_app

from wikicms.pages import HomePage, render_page

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    return render_page('home.html', HomePage(current_user=g.current_user))


@main_bp.route('/set_language/<lang>')
def set_language(lang):
    if lang not in current_app.config['LANGUAGES']:
        lang = current_app.config['BABEL_DEFAULT_LOCALE']
    resp = make_response(redirect(request.referrer or '/'))
    resp.set_cookie('babel_translation', lang)
    return resp
