"""Database models."""
from bullionquote.models.quote import Quote, QuoteItem
from bullionquote.models.settings import Setting
from bullionquote.models.sequence import Sequence
from bullionquote.models.user import StaffUser

__all__ = [
    'Quote',
    'QuoteItem',
    'Setting',
    'Sequence',
    'StaffUser',
]
