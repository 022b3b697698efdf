"""Staff routes: dashboard, quote create/edit, pricing and expiry."""
from flask import jsonify, request

from bullionquote.blueprints.admin import admin_bp
from bullionquote.blueprints.errors import form_error
from bullionquote.decorators import staff_required
from bullionquote.errors import NotFoundError
from bullionquote.forms import CreateQuoteForm, QuoteForm, ItemsForm, DisplaySettingForm
from bullionquote.models import Quote
from bullionquote.projections import admin_projection, staff_edit_projection, dashboard_row
from bullionquote.services import QuoteService, SettingsService, SpotPriceService
from bullionquote.utils import money_str
from bullionquote.weights import weight_options


def _quote_or_404(quote_id):
    quote = QuoteService.get_quote_by_id(quote_id)
    if quote is None:
        raise NotFoundError()
    return quote


def _admin_response(quote, status=200):
    return jsonify({
        'quote': admin_projection(quote),
        'customer_url': QuoteService.customer_url(quote),
    }), status


@admin_bp.route('/')
@staff_required
def dashboard():
    status = request.args.get('status', '')
    if status and status not in Quote.STATUSES:
        status = ''
    quotes = QuoteService.list_quotes(status=status or None)
    return jsonify({
        'quotes': [dashboard_row(q) for q in quotes],
        'spot_normalisation_offset': str(SettingsService.get_spot_normalisation_offset()),
    })


@admin_bp.route('/live-prices')
@staff_required
def live_prices():
    prices = SpotPriceService.all_prices(SpotPriceService.fetch_spot_prices())
    return jsonify({key: money_str(value) for key, value in prices.items()})


@admin_bp.route('/weight-options')
@staff_required
def list_weight_options():
    return jsonify({'weight_options': weight_options()})


@admin_bp.route('/quotes', methods=['POST'])
@staff_required
def create_quote():
    form = CreateQuoteForm()
    if not form.validate_on_submit():
        return form_error(form)
    quote = QuoteService.create_quote(
        form.customer_details(),
        form.items_data(),
        form.spot_prices(),
        show_quoted_rate=form.show_quoted_rate.data,
    )
    return _admin_response(quote, 201)


@admin_bp.route('/quotes/<quote_id>')
@staff_required
def detail(quote_id):
    return _admin_response(_quote_or_404(quote_id))


@admin_bp.route('/quotes/<quote_id>/in-person')
@staff_required
def in_person(quote_id):
    return jsonify({'quote': staff_edit_projection(_quote_or_404(quote_id))})


@admin_bp.route('/quotes/<quote_id>', methods=['POST'])
@staff_required
def update(quote_id):
    _quote_or_404(quote_id)
    form = QuoteForm()
    if not form.validate_on_submit():
        return form_error(form)
    quote = QuoteService.update_customer_details_and_items(
        quote_id, form.customer_details(), form.items_data(), show_quoted_rate=form.show_quoted_rate.data
    )
    return _admin_response(quote)


@admin_bp.route('/quotes/<quote_id>/items', methods=['POST'])
@staff_required
def replace_items(quote_id):
    form = ItemsForm()
    if not form.validate_on_submit():
        return form_error(form)
    quote = QuoteService.replace_items(quote_id, form.items_data())
    return jsonify({'quote': staff_edit_projection(quote)})


@admin_bp.route('/quotes/<quote_id>/refresh-prices', methods=['POST'])
@staff_required
def refresh_prices(quote_id):
    quote = QuoteService.refresh_prices(quote_id)
    return jsonify({'quote': staff_edit_projection(quote)})


@admin_bp.route('/quotes/<quote_id>/display', methods=['POST'])
@staff_required
def display_setting(quote_id):
    form = DisplaySettingForm()
    if not form.validate_on_submit():
        return form_error(form)
    quote = QuoteService.set_display_setting(quote_id, form.show_quoted_rate.data)
    return jsonify({'quote': staff_edit_projection(quote)})


@admin_bp.route('/quotes/<quote_id>/expire', methods=['POST'])
@staff_required
def expire(quote_id):
    quote = QuoteService.expire(quote_id)
    return _admin_response(quote)
