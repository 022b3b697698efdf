"""Basic model and auth tests."""
from decimal import Decimal

from bullionquote import db
from bullionquote.models import Quote, QuoteItem, Setting, StaffUser


def test_quote_defaults(db_ctx):
    quote = Quote(short_id='abcd1234', quote_number='SBQ-000001', customer_mobile='021')
    db.session.add(quote)
    db.session.commit()
    assert quote.id
    assert quote.status == Quote.STATUS_ACTIVE
    assert quote.is_active
    assert quote.show_quoted_rate is False
    assert quote.grand_total == 0
    assert quote.created_at is not None
    assert quote.gram_prices == {'gold_gram': Decimal('0'), 'silver_gram': Decimal('0')}


def test_deleting_quote_deletes_items(db_ctx):
    quote = Quote(short_id='abcd1234', quote_number='SBQ-000001', customer_mobile='021')
    quote.items = [
        QuoteItem(item_name='bar', metal_type='silver', weight_grams=Decimal('100'), position=1),
        QuoteItem(item_name='coin', metal_type='gold', weight_grams=Decimal('31.1035'), position=0),
    ]
    db.session.add(quote)
    db.session.commit()
    assert [i.item_name for i in db.session.get(Quote, quote.id).items] == ['coin', 'bar']

    db.session.delete(quote)
    db.session.commit()
    assert QuoteItem.query.count() == 0


def test_setting_get_set(db_ctx):
    assert Setting.get('missing') is None
    assert Setting.get('missing', '7') == '7'
    Setting.set('spot_normalisation_offset', 3)
    Setting.set('spot_normalisation_offset', '4.5')
    db.session.commit()
    assert Setting.get('spot_normalisation_offset') == '4.5'
    assert list(Setting.all()) == ['spot_normalisation_offset']


def test_staff_user_authenticate(app_ctx):
    assert StaffUser.authenticate('staff', 'staff-secret').username == 'staff'
    assert StaffUser.authenticate('staff', 'wrong') is None
    assert StaffUser.authenticate('Staff', 'staff-secret') is None
    assert StaffUser.authenticate(None, None) is None
    assert StaffUser.get('staff').is_authenticated
    assert StaffUser.get('someone') is None
