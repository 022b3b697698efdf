"""Role-shaped views of a quote.

Each viewer gets a dict built from an explicit allow-list, so a field that is
not listed for a role can never reach that role's response. Money values are
rounded to cents here and nowhere earlier.

    customer          no PII, no CRM id; rates only when show_quoted_rate is set
    staff in-person   no PII, no CRM id; all pricing detail
    staff admin       everything
"""
from bullionquote.services.valuation_service import ValuationService
from bullionquote.utils import isoformat, money_str

QUOTE_FIELDS = ('short_id', 'quote_number', 'status', 'show_quoted_rate')
TIMESTAMP_FIELDS = ('created_at', 'updated_at', 'spot_price_updated_at')
SPOT_PRICE_FIELDS = (
    'spot_price_gold_gram',
    'spot_price_silver_gram',
    'spot_price_gold_ounce',
    'spot_price_silver_ounce',
)
CUSTOMER_PII_FIELDS = ('customer_first_name', 'customer_surname', 'customer_mobile', 'customer_email')

ITEM_FIELDS = ('item_name', 'metal_type', 'weight_denomination_label', 'quantity')
ITEM_RATE_FIELDS = ('percent',)


def _item(item, prices, show_rate):
    data = {name: getattr(item, name) for name in ITEM_FIELDS}
    data['weight_grams'] = str(item.weight_grams) if item.weight_grams is not None else None
    data['final_price'] = money_str(ValuationService.item_final_price(item, prices))
    if show_rate:
        for name in ITEM_RATE_FIELDS:
            value = getattr(item, name)
            data[name] = str(value) if value is not None else None
        data['base_price'] = money_str(ValuationService.item_base_price(item, prices))
    return data


def _base(quote, show_rate):
    prices = quote.gram_prices
    data = {name: getattr(quote, name) for name in QUOTE_FIELDS}
    for name in TIMESTAMP_FIELDS:
        data[name] = isoformat(getattr(quote, name))
    data['grand_total'] = money_str(quote.grand_total)
    if show_rate:
        for name in SPOT_PRICE_FIELDS:
            data[name] = money_str(getattr(quote, name))
    data['items'] = [_item(item, prices, show_rate) for item in quote.items]
    return data


def customer_projection(quote):
    return _base(quote, show_rate=bool(quote.show_quoted_rate))


def staff_edit_projection(quote):
    return _base(quote, show_rate=True)


def admin_projection(quote):
    data = _base(quote, show_rate=True)
    for name in CUSTOMER_PII_FIELDS:
        data[name] = getattr(quote, name)
    data['id'] = quote.id
    data['external_crm_id'] = quote.external_crm_id
    data['customer_viewed_at'] = isoformat(quote.customer_viewed_at)
    return data


def dashboard_row(quote):
    """One line of the staff dashboard list."""
    return {
        'id': quote.id,
        'quote_number': quote.quote_number,
        'status': quote.status,
        'customer_first_name': quote.customer_first_name,
        'customer_surname': quote.customer_surname,
        'customer_mobile': quote.customer_mobile,
        'customer_email': quote.customer_email,
        'created_at': isoformat(quote.created_at),
        'items': ', '.join(item.item_name for item in quote.items),
        'grand_total': money_str(quote.grand_total),
    }
