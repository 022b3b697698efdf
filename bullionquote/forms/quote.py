"""Quote forms."""
import json

from flask_wtf import FlaskForm
from wtforms import StringField, DecimalField, BooleanField, HiddenField
from wtforms.validators import Optional, Email, Length, InputRequired, NumberRange

from bullionquote.errors import ValidationError


class ItemsForm(FlaskForm):
    """Items travel as a JSON array in ``items_json``, one object per row."""
    items_json = HiddenField('Items', default='[]')

    def items_data(self):
        raw = self.items_json.data
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except (TypeError, ValueError):
            raise ValidationError('Items could not be read.', field='items_json')
        if not isinstance(items, list):
            raise ValidationError('Items must be a list.', field='items_json')
        return items


class QuoteForm(ItemsForm):
    first_name = StringField('First Name', validators=[Optional(), Length(max=255)])
    surname = StringField('Surname', validators=[Optional(), Length(max=255)])
    mobile = StringField('Mobile', validators=[Optional(), Length(max=255)])
    email = StringField('Email', validators=[Optional(), Email(), Length(max=255)])
    external_crm_id = StringField('CRM ID', validators=[Optional(), Length(max=255)])
    show_quoted_rate = BooleanField('Show quoted rate to customer', default=False)

    def validate(self, extra_validators=None):
        if not super().validate(extra_validators=extra_validators):
            return False
        if not (self.mobile.data or '').strip() and not (self.email.data or '').strip():
            message = 'Please provide at least one contact method'
            self.mobile.errors.append(message)
            self.email.errors.append(message)
            return False
        return True

    def customer_details(self):
        return {
            'first_name': self.first_name.data,
            'surname': self.surname.data,
            'mobile': self.mobile.data,
            'email': self.email.data,
            'external_crm_id': self.external_crm_id.data,
        }


class CreateQuoteForm(QuoteForm):
    gold_gram = DecimalField('Gold per gram', places=None,
                             validators=[InputRequired(), NumberRange(min=0)])
    silver_gram = DecimalField('Silver per gram', places=None,
                               validators=[InputRequired(), NumberRange(min=0)])

    def spot_prices(self):
        return {'gold_gram': self.gold_gram.data, 'silver_gram': self.silver_gram.data}


class DisplaySettingForm(FlaskForm):
    show_quoted_rate = BooleanField('Show quoted rate to customer', default=False)
