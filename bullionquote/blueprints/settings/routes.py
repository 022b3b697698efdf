"""Settings routes (spot normalisation offset)."""
from flask import jsonify

from bullionquote.blueprints.errors import form_error
from bullionquote.blueprints.settings import settings_bp
from bullionquote.decorators import staff_required
from bullionquote.forms import SpotOffsetForm
from bullionquote.services import SettingsService
from bullionquote.utils import isoformat


@settings_bp.route('/')
@staff_required
def index():
    settings = {
        key: {'value': entry['value'], 'updated_at': isoformat(entry['updated_at'])}
        for key, entry in SettingsService.all_settings().items()
    }
    return jsonify({
        'settings': settings,
        'spot_normalisation_offset': str(SettingsService.get_spot_normalisation_offset()),
    })


@settings_bp.route('/spot-offset', methods=['POST'])
@staff_required
def update_spot_offset():
    form = SpotOffsetForm()
    if not form.validate_on_submit():
        return form_error(form)
    offset = SettingsService.update_spot_normalisation_offset(form.spot_normalisation_offset.data)
    return jsonify({
        'success': True,
        'message': 'Spot normalisation offset updated successfully.',
        'spot_normalisation_offset': str(offset),
    })
