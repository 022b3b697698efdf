"""Flask-WTF forms."""
from bullionquote.forms.auth import LoginForm, CustomerLoginForm
from bullionquote.forms.quote import QuoteForm, CreateQuoteForm, ItemsForm, DisplaySettingForm
from bullionquote.forms.settings import SpotOffsetForm

__all__ = [
    'LoginForm',
    'CustomerLoginForm',
    'QuoteForm',
    'CreateQuoteForm',
    'ItemsForm',
    'DisplaySettingForm',
    'SpotOffsetForm',
]
