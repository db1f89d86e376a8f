"""Error taxonomy and the handler that turns it into HTTP responses."""
from flask import jsonify


class WikiError(Exception):
    """Base class for errors that end a request with a terminal response."""
    status_code = 500
    code = 'internal_error'

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.code, 'message': self.message}


class BindingError(WikiError):
    """Form payload cannot populate the target entity."""
    status_code = 400
    code = 'bad_request'


class AuthenticationError(WikiError):
    status_code = 401
    code = 'unauthorized'


class AuthorizationError(WikiError):
    status_code = 403
    code = 'forbidden'


class NotFoundError(WikiError):
    status_code = 404
    code = 'not_found'


class PersistenceError(WikiError):
    """Storage create/save/delete failure."""
    status_code = 500
    code = 'persistence_error'


class RenderError(WikiError):
    status_code = 500
    code = 'render_error'


def register_error_handlers(app):
    """Convert every :class:`WikiError` into a JSON error response."""

    @app.errorhandler(WikiError)
    def handle_wiki_error(error):
        if error.status_code >= 500:
            app.logger.error('%s: %s', error.code, error.message)
        else:
            app.logger.warning('%s: %s', error.code, error.message)
        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response
