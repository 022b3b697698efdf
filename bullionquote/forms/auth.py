"""Authentication forms."""
from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Length


class LoginForm(FlaskForm):
    username = StringField('Username *', validators=[DataRequired(), Length(1, 80)])
    password = PasswordField('Password *', validators=[DataRequired()])
    remember_me = BooleanField('Remember Me', default=False)


class CustomerLoginForm(FlaskForm):
    credential = StringField('Mobile number or email *', validators=[DataRequired(), Length(max=255)])
