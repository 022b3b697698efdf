"""Settings forms."""
from flask_wtf import FlaskForm
from wtforms import DecimalField
from wtforms.validators import InputRequired, NumberRange


class SpotOffsetForm(FlaskForm):
    spot_normalisation_offset = DecimalField(
        'Spot normalisation offset (%)',
        places=None,
        validators=[
            InputRequired(),
            NumberRange(min=0, max=100, message='Invalid offset value. Must be between 0 and 100.'),
        ],
    )
