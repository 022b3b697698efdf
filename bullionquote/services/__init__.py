"""Business logic services."""
from bullionquote.services.quote_service import QuoteService
from bullionquote.services.numbering_service import NumberingService
from bullionquote.services.valuation_service import ValuationService
from bullionquote.services.spot_price_service import SpotPriceService
from bullionquote.services.settings_service import SettingsService
from bullionquote.services.expiry_service import ExpiryService

__all__ = [
    'QuoteService',
    'NumberingService',
    'ValuationService',
    'SpotPriceService',
    'SettingsService',
    'ExpiryService',
]
