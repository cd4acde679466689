from flask_wtf import FlaskForm
from wtforms import SelectField
from wtforms.validators import DataRequired, Email, Length, Optional

from forms.fields import StrictStringField
from models.user import ROLES


class RegisterForm(FlaskForm):
    name = StrictStringField('Name', validators=[DataRequired(), Length(max=100)])
    email = StrictStringField('Email', validators=[DataRequired(), Email(), Length(max=255)])
    password = StrictStringField('Password', validators=[DataRequired(), Length(min=6)])
    role = SelectField('Role', choices=[(r, r) for r in ROLES], validators=[Optional()])


class LoginForm(FlaskForm):
    email = StrictStringField('Email', validators=[DataRequired()])
    password = StrictStringField('Password', validators=[DataRequired()])
