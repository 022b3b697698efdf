"""JSON error responses."""
from flask import jsonify
from flask_wtf.csrf import CSRFError

from bullionquote import login_manager
from bullionquote.errors import QuoteServiceError, ValidationError


def form_error(form):
    """400 response listing the first error per field."""
    errors = {name: messages[0] for name, messages in form.errors.items() if messages}
    return jsonify({'error': 'validation_error', 'message': 'Invalid input.', 'fields': errors}), 400


def register_error_handlers(app):
    @app.errorhandler(QuoteServiceError)
    def handle_service_error(e):
        payload = {'error': type(e).__name__, 'message': e.message}
        if isinstance(e, ValidationError) and e.field:
            payload['field'] = e.field
        return jsonify(payload), e.status_code

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        return jsonify({'error': 'csrf_error', 'message': e.description}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'not_found', 'message': 'Not found.'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'error': 'method_not_allowed', 'message': 'Method not allowed.'}), 405

    @app.errorhandler(500)
    def server_error(e):
        app.logger.error('Unhandled error: %s', e)
        return jsonify({'error': 'server_error', 'message': 'Something broke!'}), 500

    @login_manager.unauthorized_handler
    def staff_unauthorized():
        response = jsonify({'error': 'unauthorized', 'message': 'Staff credentials required.'})
        response.status_code = 401
        response.headers['WWW-Authenticate'] = 'Basic realm="QuoteAdmin"'
        return response
