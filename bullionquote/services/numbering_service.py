"""Quote number and short id generation."""
import secrets
import string

from flask import current_app
from sqlalchemy import update

from bullionquote import db
from bullionquote.models import Quote, Sequence

SHORT_ID_ALPHABET = string.ascii_lowercase + string.digits
SHORT_ID_LENGTH = 8


class NumberingService:
    @staticmethod
    def _increment(name):
        stmt = (
            update(Sequence)
            .where(Sequence.name == name)
            .values(value=Sequence.value + 1)
            .returning(Sequence.value)
            .execution_options(synchronize_session=False)
        )
        return db.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def next_sequence_value(name, start=0):
        """Increment-and-read a named counter in the current transaction.

        The row is seeded at ``start`` the first time it is used, so the
        first value handed out is ``start + 1``. Nothing is committed here:
        rolling back the caller's transaction gives the number back.
        """
        value = NumberingService._increment(name)
        if value is None:
            db.session.add(Sequence(name=name, value=start))
            db.session.flush()
            value = NumberingService._increment(name)
        return value

    @staticmethod
    def format_quote_number(value, prefix=None):
        prefix = prefix or current_app.config['QUOTE_NUMBER_PREFIX']
        return f"{prefix}-{value:06d}"

    @staticmethod
    def next_quote_number():
        cfg = current_app.config
        value = NumberingService.next_sequence_value(
            cfg['QUOTE_NUMBER_SEQUENCE'], start=cfg['QUOTE_NUMBER_START']
        )
        return NumberingService.format_quote_number(value)

    @staticmethod
    def generate_short_id(rng=None):
        choice = rng.choice if rng is not None else secrets.choice
        return ''.join(choice(SHORT_ID_ALPHABET) for _ in range(SHORT_ID_LENGTH))

    @staticmethod
    def short_id_exists(short_id):
        return db.session.query(Quote.id).filter(Quote.short_id == short_id).first() is not None

    @staticmethod
    def ensure_unique_short_id(exists=None, rng=None):
        """Resample until ``exists`` reports the id as unused."""
        exists = exists or NumberingService.short_id_exists
        while True:
            short_id = NumberingService.generate_short_id(rng)
            if not exists(short_id):
                return short_id
            current_app.logger.debug('Short id collision on %s, resampling', short_id)
