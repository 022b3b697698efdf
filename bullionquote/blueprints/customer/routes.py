"""Customer-facing quote access, keyed by short id."""
from flask import jsonify, session

from bullionquote.blueprints.customer import customer_bp
from bullionquote.blueprints.errors import form_error
from bullionquote.decorators import CUSTOMER_SESSION_KEY, customer_required
from bullionquote.errors import NotFoundError
from bullionquote.forms import CustomerLoginForm
from bullionquote.projections import customer_projection
from bullionquote.services import QuoteService


@customer_bp.route('/<short_id>/login', methods=['POST'])
def login(short_id):
    form = CustomerLoginForm()
    if not form.validate_on_submit():
        return form_error(form)
    quote = QuoteService.authenticate_customer(short_id, form.credential.data)
    session[CUSTOMER_SESSION_KEY] = quote.short_id
    return jsonify({'short_id': quote.short_id, 'quote_number': quote.quote_number})


@customer_bp.route('/<short_id>/logout', methods=['POST'])
def logout(short_id):
    if session.get(CUSTOMER_SESSION_KEY) == short_id:
        session.pop(CUSTOMER_SESSION_KEY)
    return jsonify({'message': 'Logged out.'})


@customer_bp.route('/<short_id>')
@customer_required
def view(short_id):
    quote = QuoteService.get_quote_by_short_id(short_id)
    if quote is None:
        raise NotFoundError()
    return jsonify({'quote': customer_projection(quote)})
