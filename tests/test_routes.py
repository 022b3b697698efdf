"""HTTP surface: staff auth, quote endpoints, customer access and settings."""
import base64
import json
from unittest.mock import MagicMock, patch

import requests

from bullionquote.models import Quote
from tests.conftest import CUSTOMER, GOLD_OUNCE_ITEM, SILVER_BAR_ITEM

FEED = 'bullionquote.services.spot_price_service.requests.get'


def _quote_form(items=None, **overrides):
    data = dict(CUSTOMER)
    data.update({
        'gold_gram': '115.00',
        'silver_gram': '1.50',
        'items_json': json.dumps([GOLD_OUNCE_ITEM, SILVER_BAR_ITEM] if items is None else items),
    })
    data.update(overrides)
    return data


def _feed_response(gold=100, silver=1.25):
    response = MagicMock()
    response.json.return_value = {'status': 'success', 'metals': {'gold': gold, 'silver': silver}}
    return response


def test_staff_routes_require_auth(db_ctx, client):
    for path in ('/admin/', '/admin/live-prices', '/admin/settings/', '/admin/weight-options'):
        response = client.get(path)
        assert response.status_code == 401
        assert response.headers['WWW-Authenticate'].startswith('Basic')
    assert client.post('/admin/quotes', data=_quote_form()).status_code == 401
    assert Quote.query.count() == 0


def test_wrong_basic_credentials_are_rejected(db_ctx, client):
    token = base64.b64encode(b'staff:wrong').decode()
    response = client.get('/admin/', headers={'Authorization': f'Basic {token}'})
    assert response.status_code == 401


def test_staff_session_login(db_ctx, client):
    response = client.post('/auth/login', data={'username': 'staff', 'password': 'staff-secret'})
    assert response.status_code == 200
    assert client.get('/auth/me').get_json() == {'staff': True, 'username': 'staff'}
    assert client.get('/admin/').status_code == 200

    client.post('/auth/logout')
    assert client.get('/admin/').status_code == 401


def test_staff_login_rejects_bad_password(db_ctx, client):
    response = client.post('/auth/login', data={'username': 'staff', 'password': 'nope'})
    assert response.status_code == 401


def test_create_quote(db_ctx, client, staff_headers):
    response = client.post('/admin/quotes', data=_quote_form(show_quoted_rate='y'), headers=staff_headers)
    assert response.status_code == 201
    body = response.get_json()
    quote = body['quote']
    assert quote['quote_number'] == 'SBQ-000284'
    assert quote['customer_mobile'] == CUSTOMER['mobile']
    assert quote['show_quoted_rate'] is True
    assert quote['grand_total'] == '3861.90'
    assert len(quote['items']) == 2
    assert body['customer_url'] == f"https://quotes.example.test/quote/{quote['short_id']}"


def test_create_quote_requires_contact(db_ctx, client, staff_headers):
    response = client.post('/admin/quotes', data=_quote_form(mobile='', email=''), headers=staff_headers)
    assert response.status_code == 400
    assert 'mobile' in response.get_json()['fields']
    assert Quote.query.count() == 0


def test_create_quote_rejects_too_many_items(db_ctx, client, staff_headers):
    items = [dict(GOLD_OUNCE_ITEM, name=f'coin {n}') for n in range(9)]
    response = client.post('/admin/quotes', data=_quote_form(items=items), headers=staff_headers)
    assert response.status_code == 400
    body = response.get_json()
    assert body['error'] == 'ValidationError'
    assert body['field'] == 'items'


def test_create_quote_rejects_unreadable_items(db_ctx, client, staff_headers):
    response = client.post('/admin/quotes', data=_quote_form(items_json='{not json'), headers=staff_headers)
    assert response.status_code == 400
    assert response.get_json()['field'] == 'items_json'


def test_dashboard_lists_quotes(make_quote, client, staff_headers):
    make_quote()
    expired = make_quote()
    client.post(f'/admin/quotes/{expired.id}/expire', headers=staff_headers)

    rows = client.get('/admin/', headers=staff_headers).get_json()['quotes']
    assert len(rows) == 2
    rows = client.get('/admin/?status=expired', headers=staff_headers).get_json()['quotes']
    assert [r['id'] for r in rows] == [expired.id]


def test_quote_detail_and_in_person_views(make_quote, client, staff_headers):
    quote = make_quote()
    detail = client.get(f'/admin/quotes/{quote.id}', headers=staff_headers).get_json()['quote']
    assert detail['customer_email'] == CUSTOMER['email']

    in_person = client.get(f'/admin/quotes/{quote.id}/in-person', headers=staff_headers).get_json()['quote']
    assert 'customer_email' not in in_person
    assert in_person['items'][0]['percent'] == '0.00'

    assert client.get('/admin/quotes/missing', headers=staff_headers).status_code == 404


def test_update_quote(make_quote, client, staff_headers):
    quote = make_quote()
    response = client.post(
        f'/admin/quotes/{quote.id}',
        data={'first_name': 'Robin', 'mobile': '0270000000', 'items_json': json.dumps([SILVER_BAR_ITEM]),
              'show_quoted_rate': 'y'},
        headers=staff_headers,
    )
    assert response.status_code == 200
    body = response.get_json()['quote']
    assert body['customer_first_name'] == 'Robin'
    assert body['show_quoted_rate'] is True
    assert [i['item_name'] for i in body['items']] == ['Silver bar']


def test_replace_items_and_display_routes(make_quote, client, staff_headers):
    quote = make_quote()
    response = client.post(f'/admin/quotes/{quote.id}/items',
                           data={'items_json': json.dumps([SILVER_BAR_ITEM])}, headers=staff_headers)
    assert response.get_json()['quote']['grand_total'] == '285.00'

    response = client.post(f'/admin/quotes/{quote.id}/display', data={'show_quoted_rate': 'y'},
                           headers=staff_headers)
    assert response.get_json()['quote']['show_quoted_rate'] is True


def test_expired_quote_cannot_be_edited(make_quote, client, staff_headers):
    quote = make_quote()
    response = client.post(f'/admin/quotes/{quote.id}/expire', headers=staff_headers)
    assert response.get_json()['quote']['status'] == 'expired'

    response = client.post(f'/admin/quotes/{quote.id}/items',
                           data={'items_json': json.dumps([SILVER_BAR_ITEM])}, headers=staff_headers)
    assert response.status_code == 400
    assert response.get_json()['field'] == 'status'


def test_live_prices(db_ctx, client, staff_headers):
    with patch(FEED, return_value=_feed_response(gold=100, silver=1.25)):
        body = client.get('/admin/live-prices', headers=staff_headers).get_json()
    assert body['gold_gram'] == '100.00'
    assert body['silver_gram'] == '1.25'
    assert body['gold_ounce'] == '3110.35'


def test_live_prices_unavailable(db_ctx, client, staff_headers):
    with patch(FEED, side_effect=requests.ConnectionError('down')):
        response = client.get('/admin/live-prices', headers=staff_headers)
    assert response.status_code == 503
    assert response.get_json()['error'] == 'UpstreamUnavailable'


def test_refresh_prices_route(make_quote, client, staff_headers):
    quote = make_quote()
    with patch(FEED, return_value=_feed_response(gold=120, silver=2)):
        response = client.post(f'/admin/quotes/{quote.id}/refresh-prices', headers=staff_headers)
    assert response.status_code == 200
    assert response.get_json()['quote']['spot_price_gold_gram'] == '120.00'

    with patch(FEED, side_effect=requests.Timeout('slow')):
        response = client.post(f'/admin/quotes/{quote.id}/refresh-prices', headers=staff_headers)
    assert response.status_code == 503


def test_weight_options_route(db_ctx, client, staff_headers):
    groups = client.get('/admin/weight-options', headers=staff_headers).get_json()['weight_options']
    labels = [o['label'] for g in groups for o in g['options']]
    assert '1 oz' in labels and 'Sovereign' in labels


def test_customer_login_and_view(make_quote, client):
    quote = make_quote()
    assert client.get(f'/quote/{quote.short_id}').status_code == 401

    response = client.post(f'/quote/{quote.short_id}/login', data={'credential': CUSTOMER['mobile']})
    assert response.status_code == 200

    body = client.get(f'/quote/{quote.short_id}').get_json()['quote']
    assert body['quote_number'] == quote.quote_number
    assert 'customer_mobile' not in body
    assert 'percent' not in body['items'][0]

    client.post(f'/quote/{quote.short_id}/logout')
    assert client.get(f'/quote/{quote.short_id}').status_code == 401


def test_customer_session_is_tied_to_one_quote(make_quote, client):
    first = make_quote()
    second = make_quote()
    client.post(f'/quote/{first.short_id}/login', data={'credential': CUSTOMER['email']})
    assert client.get(f'/quote/{second.short_id}').status_code == 401


def test_customer_login_failures_look_the_same(make_quote, client):
    quote = make_quote()
    wrong = client.post(f'/quote/{quote.short_id}/login', data={'credential': 'sam@EXAMPLE.com'})
    unknown = client.post('/quote/zzzzzzzz/login', data={'credential': CUSTOMER['mobile']})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json() == unknown.get_json()


def test_settings_offset(db_ctx, client, staff_headers):
    response = client.post('/admin/settings/spot-offset', data={'spot_normalisation_offset': '150'},
                           headers=staff_headers)
    assert response.status_code == 400

    response = client.post('/admin/settings/spot-offset', data={'spot_normalisation_offset': '5'},
                           headers=staff_headers)
    assert response.get_json()['success'] is True

    body = client.get('/admin/settings/', headers=staff_headers).get_json()
    assert body['spot_normalisation_offset'] == '5'
    assert body['settings']['spot_normalisation_offset']['value'] == '5'


def test_unknown_route_is_json_404(db_ctx, client):
    response = client.get('/nowhere')
    assert response.status_code == 404
    assert response.get_json()['error'] == 'not_found'
