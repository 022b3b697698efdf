"""Per-item and per-quote pricing."""
from decimal import Decimal

from bullionquote.utils import to_decimal

ZERO = Decimal('0')


def _field(item, name, default=None):
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


class ValuationService:
    """Pure pricing functions. Items may be QuoteItem rows or plain dicts with
    ``metal_type``, ``weight_grams``, ``quantity`` and ``percent``; prices are
    a dict with ``gold_gram`` and ``silver_gram``.
    """

    @staticmethod
    def gram_price_for_metal(metal_type, prices):
        # Unknown metals price at zero; input handling rejects them before storage.
        key = f"{(metal_type or '').strip().lower()}_gram"
        if key not in ('gold_gram', 'silver_gram'):
            return ZERO
        return to_decimal(prices.get(key), ZERO)

    @staticmethod
    def item_base_price(item, prices):
        weight = to_decimal(_field(item, 'weight_grams'), ZERO)
        quantity = to_decimal(_field(item, 'quantity'), Decimal('1'))
        return weight * quantity * ValuationService.gram_price_for_metal(_field(item, 'metal_type'), prices)

    @staticmethod
    def item_final_price(item, prices):
        percent = to_decimal(_field(item, 'percent'), ZERO)
        final = ValuationService.item_base_price(item, prices) * (1 - percent / 100)
        return max(ZERO, final)

    @staticmethod
    def quote_total(items, prices):
        return sum((ValuationService.item_final_price(item, prices) for item in items), ZERO)
