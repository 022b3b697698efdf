"""Quote and QuoteItem models."""
import uuid
from decimal import Decimal

from bullionquote import db
from bullionquote.utils import utcnow

# Decimal places kept by the Numeric columns below.
PRICE_SCALE = 6
WEIGHT_SCALE = 6
PERCENT_SCALE = 2


class Quote(db.Model):
    __tablename__ = 'quotes'

    STATUS_ACTIVE = 'active'
    STATUS_EXPIRED = 'expired'
    STATUSES = [STATUS_ACTIVE, STATUS_EXPIRED]

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    short_id = db.Column(db.String(8), unique=True, nullable=False, index=True)
    quote_number = db.Column(db.String(30), unique=True, nullable=False, index=True)

    customer_first_name = db.Column(db.String(255), nullable=True)
    customer_surname = db.Column(db.String(255), nullable=True)
    customer_mobile = db.Column(db.String(255), nullable=True, index=True)
    customer_email = db.Column(db.String(255), nullable=True)
    external_crm_id = db.Column(db.String(255), nullable=True)

    spot_price_gold_gram = db.Column(db.Numeric(14, PRICE_SCALE), nullable=True)
    spot_price_silver_gram = db.Column(db.Numeric(14, PRICE_SCALE), nullable=True)
    spot_price_gold_ounce = db.Column(db.Numeric(14, PRICE_SCALE), nullable=True)
    spot_price_silver_ounce = db.Column(db.Numeric(14, PRICE_SCALE), nullable=True)
    spot_price_updated_at = db.Column(db.DateTime, nullable=True)

    grand_total = db.Column(db.Numeric(16, PRICE_SCALE), default=0, nullable=False)
    show_quoted_rate = db.Column(db.Boolean, default=False, nullable=False)
    status = db.Column(
        db.Enum(*STATUSES, name='quote_status', native_enum=False, validate_strings=True),
        default=STATUS_ACTIVE,
        nullable=False,
        index=True,
    )
    customer_viewed_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    items = db.relationship(
        'QuoteItem',
        backref='quote',
        order_by='QuoteItem.position',
        cascade='all, delete-orphan',
    )

    @property
    def is_active(self):
        return self.status == self.STATUS_ACTIVE

    @property
    def gram_prices(self):
        return {
            'gold_gram': self.spot_price_gold_gram or Decimal('0'),
            'silver_gram': self.spot_price_silver_gram or Decimal('0'),
        }

    def __repr__(self):
        return f'<Quote {self.quote_number}>'


class QuoteItem(db.Model):
    __tablename__ = 'quote_items'

    METAL_GOLD = 'gold'
    METAL_SILVER = 'silver'
    METAL_TYPES = [METAL_GOLD, METAL_SILVER]

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    quote_id = db.Column(
        db.String(36), db.ForeignKey('quotes.id', ondelete='CASCADE'), nullable=False, index=True
    )
    position = db.Column(db.Integer, nullable=False, default=0)
    item_name = db.Column(db.Text, nullable=False)
    metal_type = db.Column(db.String(50), nullable=False)
    percent = db.Column(db.Numeric(7, PERCENT_SCALE), default=0, nullable=False)
    weight_grams = db.Column(db.Numeric(12, WEIGHT_SCALE), nullable=False)
    weight_denomination_label = db.Column(db.String(50), nullable=True)
    quantity = db.Column(db.Integer, default=1, nullable=False)

    def __repr__(self):
        return f'<QuoteItem {self.item_name} x {self.quantity}>'
