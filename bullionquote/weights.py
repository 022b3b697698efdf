"""Weight denominations offered on the quote form.

Every denomination resolves to a gram value before it is stored or priced.
The same table feeds the entry form and the valuation code.
"""
from decimal import Decimal

TROY_OUNCE_GRAMS = Decimal('31.1035')

METRIC = 'Metric'
IMPERIAL = 'Imperial/Other'

# Sovereigns are priced on fine gold content (22ct, 7.98805 g gross).
SOVEREIGN_GRAMS = Decimal('7.3224')

WEIGHT_OPTIONS = (
    ('1g', Decimal('1'), METRIC),
    ('5g', Decimal('5'), METRIC),
    ('10g', Decimal('10'), METRIC),
    ('20g', Decimal('20'), METRIC),
    ('50g', Decimal('50'), METRIC),
    ('100g', Decimal('100'), METRIC),
    ('500g', Decimal('500'), METRIC),
    ('1 Kgs', Decimal('1000'), METRIC),
    ('Half Sovereign', SOVEREIGN_GRAMS / 2, IMPERIAL),
    ('Sovereign', SOVEREIGN_GRAMS, IMPERIAL),
    ('1/20 oz', TROY_OUNCE_GRAMS / 20, IMPERIAL),
    ('1/10 oz', TROY_OUNCE_GRAMS / 10, IMPERIAL),
    ('1/4 oz', TROY_OUNCE_GRAMS / 4, IMPERIAL),
    ('1/2 oz', TROY_OUNCE_GRAMS / 2, IMPERIAL),
    ('1 oz', TROY_OUNCE_GRAMS, IMPERIAL),
    ('2 oz', TROY_OUNCE_GRAMS * 2, IMPERIAL),
    ('5 oz', TROY_OUNCE_GRAMS * 5, IMPERIAL),
    ('10 oz', TROY_OUNCE_GRAMS * 10, IMPERIAL),
)

_GRAMS_BY_LABEL = {label.lower(): grams for label, grams, _ in WEIGHT_OPTIONS}


def resolve_denomination(label):
    """Gram equivalent for a denomination label, or None if it is not in the table."""
    if not label:
        return None
    return _GRAMS_BY_LABEL.get(str(label).strip().lower())


def weight_options():
    """Denominations grouped for a select box."""
    groups = {}
    for label, grams, group in WEIGHT_OPTIONS:
        groups.setdefault(group, []).append({'label': label, 'grams': str(grams)})
    return [{'group': name, 'options': options} for name, options in groups.items()]
