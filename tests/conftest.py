"""Shared fixtures."""
import base64
from datetime import timedelta
from decimal import Decimal

import pytest

from bullionquote import create_app, db
from bullionquote.models import Quote
from bullionquote.services import QuoteService


@pytest.fixture
def app():
    app = create_app('testing')
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def db_ctx(app, app_ctx):
    db.create_all()
    yield
    db.session.remove()
    db.drop_all()


@pytest.fixture
def staff_headers(app):
    token = base64.b64encode(
        f"{app.config['ADMIN_USERNAME']}:{app.config['ADMIN_PASSWORD']}".encode()
    ).decode()
    return {'Authorization': f'Basic {token}'}


GOLD_OUNCE_ITEM = {'name': '1oz Gold Maple', 'metal_type': 'gold', 'weight_type': '1 oz', 'quantity': 1, 'percent': 0}
SILVER_BAR_ITEM = {'name': 'Silver bar', 'metal_type': 'silver', 'weight': '100', 'quantity': 2, 'percent': 5}
PRICES = {'gold_gram': Decimal('115.00'), 'silver_gram': Decimal('1.50')}
CUSTOMER = {
    'first_name': 'Sam',
    'surname': 'Taylor',
    'mobile': '0211234567',
    'email': 'sam@example.com',
    'external_crm_id': 'CRM-42',
}


@pytest.fixture
def make_quote(db_ctx):
    def _make(items=None, customer=None, prices=None, age_days=0, **kwargs):
        quote = QuoteService.create_quote(
            customer or CUSTOMER,
            [GOLD_OUNCE_ITEM] if items is None else items,
            prices or PRICES,
            **kwargs,
        )
        if age_days:
            quote.created_at = quote.created_at - timedelta(days=age_days)
            db.session.commit()
        return db.session.get(Quote, quote.id)
    return _make
