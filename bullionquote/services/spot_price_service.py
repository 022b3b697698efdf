"""Live gold/silver spot prices from the external metals feed."""
from decimal import Decimal

import requests
from flask import current_app

from bullionquote.errors import UpstreamUnavailable
from bullionquote.services.settings_service import SettingsService
from bullionquote.utils import to_decimal
from bullionquote.weights import TROY_OUNCE_GRAMS

METALS = ('gold', 'silver')


class SpotPriceService:
    @staticmethod
    def apply_normalisation_offset(price, offset_percent):
        return price * (1 - Decimal(offset_percent) / 100)

    @staticmethod
    def fetch_spot_prices(currency=None):
        """Gram prices for gold and silver with the normalisation offset applied.

        Raises UpstreamUnavailable on any feed failure. There is no fallback
        here; callers decide what to do without live prices.
        """
        cfg = current_app.config
        currency = currency or cfg['SPOT_PRICE_CURRENCY']
        current_app.logger.info('Fetching live spot prices (%s)', currency)
        try:
            response = requests.get(
                cfg['SPOT_PRICE_API_URL'],
                params={'api_key': cfg['SPOT_PRICE_API_KEY'], 'currency': currency, 'unit': 'g'},
                timeout=cfg['SPOT_PRICE_TIMEOUT'],
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            current_app.logger.error('Spot price feed request failed: %s', e)
            raise UpstreamUnavailable() from e
        except ValueError as e:
            current_app.logger.error('Spot price feed returned a non-JSON body')
            raise UpstreamUnavailable() from e

        raw = SpotPriceService._parse_rates(payload)
        offset = SettingsService.get_spot_normalisation_offset()
        prices = {
            f'{metal}_gram': SpotPriceService.apply_normalisation_offset(raw[metal], offset)
            for metal in METALS
        }
        current_app.logger.info(
            'Spot prices fetched: gold=%s silver=%s per gram (offset %s%%)',
            prices['gold_gram'], prices['silver_gram'], offset,
        )
        return prices

    @staticmethod
    def _parse_rates(payload):
        if not isinstance(payload, dict):
            raise UpstreamUnavailable('Spot price feed response was not an object.')
        if payload.get('status', 'success') != 'success':
            current_app.logger.error('Spot price feed reported status %r', payload.get('status'))
            raise UpstreamUnavailable()
        metals = payload.get('metals')
        if not isinstance(metals, dict):
            current_app.logger.error('Spot price feed response has no metals block')
            raise UpstreamUnavailable()
        rates = {}
        for metal in METALS:
            value = metals.get(metal)
            rate = to_decimal(value) if isinstance(value, (int, float, str)) else None
            if rate is None or rate <= 0:
                current_app.logger.error('Spot price feed rate for %s is unusable: %r', metal, value)
                raise UpstreamUnavailable()
            rates[metal] = rate
        return rates

    @staticmethod
    def to_ounce_prices(gram_prices):
        return {
            'gold_ounce': Decimal(gram_prices['gold_gram']) * TROY_OUNCE_GRAMS,
            'silver_ounce': Decimal(gram_prices['silver_gram']) * TROY_OUNCE_GRAMS,
        }

    @staticmethod
    def all_prices(gram_prices):
        """Gram prices plus their troy-ounce equivalents."""
        prices = {
            'gold_gram': Decimal(gram_prices['gold_gram']),
            'silver_gram': Decimal(gram_prices['silver_gram']),
        }
        prices.update(SpotPriceService.to_ounce_prices(prices))
        return prices
