"""Tunable settings used by pricing."""
from decimal import Decimal

from flask import current_app

from bullionquote.errors import ValidationError
from bullionquote.models import Setting
from bullionquote.services.unit_of_work import unit_of_work
from bullionquote.utils import to_decimal

SPOT_NORMALISATION_OFFSET = 'spot_normalisation_offset'


class SettingsService:
    @staticmethod
    def get_spot_normalisation_offset():
        """Offset percentage applied to raw spot prices. Read fresh on every call."""
        default = Decimal(current_app.config['DEFAULT_SPOT_NORMALISATION_OFFSET'])
        raw = Setting.get(SPOT_NORMALISATION_OFFSET)
        if raw is None:
            return default
        value = to_decimal(raw)
        if value is None:
            current_app.logger.warning(
                'Stored %s %r is not a number; using %s', SPOT_NORMALISATION_OFFSET, raw, default
            )
            return default
        return value

    @staticmethod
    def update_spot_normalisation_offset(value):
        offset = to_decimal(value)
        if offset is None or offset < 0 or offset > 100:
            raise ValidationError(
                'Spot normalisation offset must be a number between 0 and 100.',
                field=SPOT_NORMALISATION_OFFSET,
            )
        with unit_of_work('update_spot_offset'):
            Setting.set(SPOT_NORMALISATION_OFFSET, offset)
        current_app.logger.info('Spot normalisation offset updated to %s%%', offset)
        return offset

    @staticmethod
    def all_settings():
        return Setting.all()
