from flask_wtf import FlaskForm
from wtforms import SelectField
from wtforms.validators import InputRequired

from forms.fields import NullableIntegerField
from models.user import ROLES


class RoleForm(FlaskForm):
    id = NullableIntegerField('User', validators=[InputRequired()])
    role = SelectField('Role', choices=[(r, r) for r in ROLES], validators=[InputRequired()])
