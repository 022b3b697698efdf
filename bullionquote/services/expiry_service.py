"""Retention sweep that expires old active quotes."""
from datetime import timedelta

from flask import current_app
from sqlalchemy import update

from bullionquote.models import Quote
from bullionquote.services.unit_of_work import unit_of_work
from bullionquote.utils import utcnow


class ExpiryService:
    @staticmethod
    def expire_stale_quotes(retention_days=None, now=None):
        """Expire every active quote created before the retention window.

        Safe to re-run: quotes that are already expired are not touched.
        Returns the number of quotes expired by this run.
        """
        if retention_days is None:
            retention_days = current_app.config['QUOTE_RETENTION_DAYS']
        now = now or utcnow()
        cutoff = now - timedelta(days=retention_days)
        with unit_of_work('expire_stale_quotes') as session:
            result = session.execute(
                update(Quote)
                .where(Quote.status == Quote.STATUS_ACTIVE, Quote.created_at < cutoff)
                .values(status=Quote.STATUS_EXPIRED, updated_at=now)
                .execution_options(synchronize_session=False)
            )
        count = result.rowcount
        current_app.logger.info('Expired %d quotes created before %s', count, cutoff.isoformat())
        return count
