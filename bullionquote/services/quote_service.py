"""Quote lifecycle: creation, edits, pricing refresh, expiry and customer access."""
import hmac

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from bullionquote import db
from bullionquote.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    UpstreamUnavailable,
    ValidationError,
)
from bullionquote.models import Quote, QuoteItem
from bullionquote.models.quote import PERCENT_SCALE, PRICE_SCALE, WEIGHT_SCALE
from bullionquote.services.numbering_service import NumberingService
from bullionquote.services.spot_price_service import SpotPriceService
from bullionquote.services.unit_of_work import unit_of_work
from bullionquote.services.valuation_service import ValuationService
from bullionquote.utils import quantize, to_decimal, utcnow
from bullionquote.weights import resolve_denomination

CUSTOMER_FIELDS = {
    'first_name': 'customer_first_name',
    'surname': 'customer_surname',
    'mobile': 'customer_mobile',
    'email': 'customer_email',
    'external_crm_id': 'external_crm_id',
}

CREATE_ATTEMPTS = 2
# Largest magnitudes the Numeric columns hold.
WEIGHT_LIMIT = 1000000
PERCENT_LIMIT = 100000
PRICE_LIMIT = 1000000


class QuoteService:
    # --- input normalisation -------------------------------------------------

    @staticmethod
    def normalise_customer_details(details):
        details = details or {}
        cleaned = {}
        for key, column in CUSTOMER_FIELDS.items():
            value = details.get(key)
            value = str(value).strip() if value is not None else ''
            cleaned[column] = value or None
        if not cleaned['customer_mobile'] and not cleaned['customer_email']:
            raise ValidationError('Provide at least one contact method (mobile or email).', field='mobile')
        return cleaned

    @staticmethod
    def normalise_items(items_data):
        """Validate raw item dicts and turn them into QuoteItem column values.

        Rows with a blank name are dropped. The weight stored is always grams:
        a known denomination label wins over any typed weight.
        """
        if items_data is None:
            items_data = []
        if not isinstance(items_data, (list, tuple)):
            raise ValidationError('Items must be a list.', field='items')

        rows = []
        for index, raw in enumerate(items_data, start=1):
            if not isinstance(raw, dict):
                raise ValidationError(f'Item {index} is not an object.', field='items')
            name = str(raw.get('name') or raw.get('item_name') or '').strip()
            if not name:
                continue

            metal_type = str(raw.get('metal_type') or '').strip().lower()
            if metal_type not in QuoteItem.METAL_TYPES:
                raise ValidationError(f'Item {index}: metal type must be gold or silver.', field='metal_type')

            label = str(raw.get('weight_type') or raw.get('weight_denomination_label') or '').strip() or None
            weight = resolve_denomination(label)
            if weight is None:
                weight = to_decimal(raw.get('weight') if 'weight' in raw else raw.get('weight_grams'))
            if weight is not None and 0 < weight < WEIGHT_LIMIT:
                weight = quantize(weight, WEIGHT_SCALE)
            else:
                weight = None
            if not weight:
                raise ValidationError(f'Item {index}: weight must be a positive number of grams.', field='weight')

            quantity = raw.get('quantity')
            if quantity in (None, ''):
                quantity = 1
            try:
                quantity = int(str(quantity).strip())
            except ValueError:
                raise ValidationError(f'Item {index}: quantity must be a whole number.', field='quantity')
            if quantity < 1:
                raise ValidationError(f'Item {index}: quantity must be at least 1.', field='quantity')

            percent = raw.get('percent')
            if percent in (None, ''):
                percent = 0
            percent = to_decimal(percent)
            if percent is None:
                raise ValidationError(f'Item {index}: percent must be a number.', field='percent')
            if abs(percent) >= PERCENT_LIMIT:
                raise ValidationError(f'Item {index}: percent is out of range.', field='percent')
            percent = quantize(percent, PERCENT_SCALE)

            rows.append({
                'item_name': name,
                'metal_type': metal_type,
                'percent': percent,
                'weight_grams': weight,
                'weight_denomination_label': label,
                'quantity': quantity,
            })

        max_items = current_app.config['MAX_QUOTE_ITEMS']
        if len(rows) > max_items:
            raise ValidationError(f'A quote can hold at most {max_items} items.', field='items')
        for position, row in enumerate(rows):
            row['position'] = position
        return rows

    @staticmethod
    def normalise_spot_prices(spot_prices):
        spot_prices = spot_prices or {}
        prices = {}
        for key in ('gold_gram', 'silver_gram'):
            value = to_decimal(spot_prices.get(key))
            if value is None or value < 0 or value >= PRICE_LIMIT:
                raise ValidationError(f'{key} spot price must be a non-negative number.', field=key)
            prices[key] = value
        return QuoteService.snapshot_prices(prices)

    @staticmethod
    def snapshot_prices(gram_prices):
        """Gram and ounce prices rounded to the scale the quote stores them at."""
        grams = {key: quantize(gram_prices[key], PRICE_SCALE) for key in ('gold_gram', 'silver_gram')}
        return {key: quantize(value, PRICE_SCALE) for key, value in SpotPriceService.all_prices(grams).items()}

    # --- reads ---------------------------------------------------------------

    @staticmethod
    def get_quote_by_id(quote_id):
        return db.session.get(Quote, quote_id)

    @staticmethod
    def get_quote_by_short_id(short_id):
        if not short_id:
            return None
        return Quote.query.filter_by(short_id=short_id).first()

    @staticmethod
    def list_quotes(status=None):
        query = Quote.query.options(selectinload(Quote.items))
        if status:
            query = query.filter(Quote.status == status)
        return query.order_by(Quote.created_at.desc()).all()

    @staticmethod
    def customer_url(quote):
        base = current_app.config['PUBLIC_BASE_URL'].rstrip('/')
        return f'{base}/quote/{quote.short_id}'

    # --- writes --------------------------------------------------------------

    @staticmethod
    def create_quote(customer_details, items, spot_prices, show_quoted_rate=False):
        details = QuoteService.normalise_customer_details(customer_details)
        rows = QuoteService.normalise_items(items)
        prices = QuoteService.normalise_spot_prices(spot_prices)

        for attempt in range(1, CREATE_ATTEMPTS + 1):
            try:
                with unit_of_work('create_quote'):
                    # Allocated inside the insert's transaction; a rollback returns both.
                    quote_number = NumberingService.next_quote_number()
                    short_id = NumberingService.ensure_unique_short_id()
                    quote = Quote(
                        quote_number=quote_number,
                        short_id=short_id,
                        show_quoted_rate=bool(show_quoted_rate),
                        status=Quote.STATUS_ACTIVE,
                        **details,
                    )
                    QuoteService._apply_prices(quote, prices)
                    quote.items = [QuoteItem(**row) for row in rows]
                    quote.grand_total = QuoteService._total(quote.items, prices)
                    db.session.add(quote)
                    db.session.flush()
            except IntegrityError as e:
                if attempt == CREATE_ATTEMPTS:
                    raise ConflictError() from e
                current_app.logger.warning('create_quote hit a unique constraint; retrying once')
                continue
            current_app.logger.info('Quote %s created (id=%s, items=%d)', quote.quote_number, quote.id, len(rows))
            return quote

    @staticmethod
    def refresh_prices(quote_id):
        """Re-fetch live prices into the quote's snapshot. Items are not touched."""
        quote = QuoteService._get_or_404(quote_id)
        QuoteService._require_active(quote, 'refresh prices')
        try:
            gram_prices = SpotPriceService.fetch_spot_prices()
        except UpstreamUnavailable:
            current_app.logger.warning('refresh_prices failed for quote %s: spot feed unavailable', quote_id)
            raise

        with unit_of_work('refresh_prices', quote_id):
            quote = QuoteService._get_locked(quote_id)
            QuoteService._require_active(quote, 'refresh prices')
            prices = QuoteService.snapshot_prices(gram_prices)
            QuoteService._apply_prices(quote, prices)
            quote.grand_total = QuoteService._total(quote.items, prices)
            quote.updated_at = utcnow()
        current_app.logger.info('Prices refreshed for quote %s', quote.quote_number)
        return quote

    @staticmethod
    def replace_items(quote_id, items):
        rows = QuoteService.normalise_items(items)
        with unit_of_work('replace_items', quote_id):
            quote = QuoteService._get_locked(quote_id)
            QuoteService._require_active(quote, 'edit items')
            QuoteService._replace_items(quote, rows)
            quote.updated_at = utcnow()
        return quote

    @staticmethod
    def update_customer_details_and_items(quote_id, customer_details, items, show_quoted_rate=None):
        """Replace contact details and items together; also sets the display flag when given."""
        details = QuoteService.normalise_customer_details(customer_details)
        rows = QuoteService.normalise_items(items)
        with unit_of_work('update_quote_details', quote_id):
            quote = QuoteService._get_locked(quote_id)
            QuoteService._require_active(quote, 'edit details')
            for column, value in details.items():
                setattr(quote, column, value)
            QuoteService._replace_items(quote, rows)
            if show_quoted_rate is not None:
                quote.show_quoted_rate = bool(show_quoted_rate)
            quote.updated_at = utcnow()
        current_app.logger.info('Quote %s details and items updated', quote.quote_number)
        return quote

    @staticmethod
    def set_display_setting(quote_id, show_quoted_rate):
        with unit_of_work('set_display_setting', quote_id):
            quote = QuoteService._get_locked(quote_id)
            quote.show_quoted_rate = bool(show_quoted_rate)
            quote.updated_at = utcnow()
        return quote

    @staticmethod
    def expire(quote_id):
        """active -> expired. There is no way back."""
        with unit_of_work('expire_quote', quote_id):
            quote = QuoteService._get_locked(quote_id)
            if quote.status == Quote.STATUS_EXPIRED:
                return quote
            quote.status = Quote.STATUS_EXPIRED
            quote.updated_at = utcnow()
        current_app.logger.info('Quote %s marked as expired by staff', quote.quote_number)
        return quote

    # --- customer access -----------------------------------------------------

    @staticmethod
    def is_staff_override(credential):
        secret = current_app.config.get('STAFF_OVERRIDE_SECRET')
        if not credential or not secret:
            return False
        return hmac.compare_digest(str(credential).encode('utf-8'), str(secret).encode('utf-8'))

    @staticmethod
    def matches_customer(quote, credential):
        # Exact string match; no trimming, case folding or phone formatting.
        if not credential:
            return False
        return any(stored is not None and stored == credential
                   for stored in (quote.customer_mobile, quote.customer_email))

    @staticmethod
    def validate_customer_credential(quote_id, credential):
        if QuoteService.is_staff_override(credential):
            return True
        quote = QuoteService.get_quote_by_id(quote_id)
        if quote is None:
            return False
        return QuoteService.matches_customer(quote, credential)

    @staticmethod
    def authenticate_customer(short_id, credential):
        """Return the quote for a valid login, else raise AuthorizationError.

        Unknown short ids and wrong credentials raise the same error.
        """
        quote = QuoteService.get_quote_by_short_id(short_id)
        if quote is None:
            raise AuthorizationError(f'unknown short id {short_id}')
        is_customer = QuoteService.matches_customer(quote, credential)
        if not is_customer and not QuoteService.is_staff_override(credential):
            current_app.logger.info('Customer login rejected for quote %s', quote.quote_number)
            raise AuthorizationError('credential mismatch')
        if is_customer:
            QuoteService._record_customer_view(quote)
        return quote

    # --- helpers -------------------------------------------------------------

    @staticmethod
    def _record_customer_view(quote):
        with unit_of_work('record_customer_view', quote.id):
            db.session.execute(
                update(Quote)
                .where(Quote.id == quote.id)
                .values(customer_viewed_at=utcnow(), updated_at=Quote.updated_at)
                .execution_options(synchronize_session=False)
            )
        db.session.expire(quote, ['customer_viewed_at'])

    @staticmethod
    def _get_or_404(quote_id):
        quote = QuoteService.get_quote_by_id(quote_id)
        if quote is None:
            raise NotFoundError()
        return quote

    @staticmethod
    def _get_locked(quote_id):
        quote = db.session.get(Quote, quote_id, with_for_update=True)
        if quote is None:
            raise NotFoundError()
        return quote

    @staticmethod
    def _require_active(quote, action):
        if quote.status != Quote.STATUS_ACTIVE:
            raise ValidationError(f'Quote {quote.quote_number} has expired; cannot {action}.', field='status')

    @staticmethod
    def _apply_prices(quote, prices):
        quote.spot_price_gold_gram = prices['gold_gram']
        quote.spot_price_silver_gram = prices['silver_gram']
        quote.spot_price_gold_ounce = prices['gold_ounce']
        quote.spot_price_silver_ounce = prices['silver_ounce']
        quote.spot_price_updated_at = utcnow()

    @staticmethod
    def _replace_items(quote, rows):
        """Delete every existing item, then insert the new set. No diffing."""
        quote.items.clear()
        db.session.flush()
        quote.items.extend(QuoteItem(**row) for row in rows)
        quote.grand_total = QuoteService._total(quote.items, quote.gram_prices)

    @staticmethod
    def _total(items, prices):
        return quantize(ValuationService.quote_total(items, prices), PRICE_SCALE)
