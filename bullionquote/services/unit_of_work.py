"""Transaction boundary shared by the services."""
from contextlib import contextmanager

from flask import current_app

from bullionquote import db
from bullionquote.errors import QuoteServiceError


@contextmanager
def unit_of_work(operation, quote_ref=None):
    """Commit everything done inside the block, or roll all of it back.

    Errors are logged with the operation name and quote reference and then
    re-raised to the caller.
    """
    try:
        yield db.session
        db.session.commit()
    except QuoteServiceError as e:
        db.session.rollback()
        current_app.logger.warning('%s rejected (quote=%s): %s', operation, quote_ref, e)
        raise
    except Exception:
        db.session.rollback()
        current_app.logger.exception('%s failed (quote=%s); transaction rolled back', operation, quote_ref)
        raise
