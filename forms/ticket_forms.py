from flask_wtf import FlaskForm
from wtforms import SelectField
from wtforms.validators import DataRequired, InputRequired, Length, Optional, ValidationError

from forms.fields import NullableIntegerField, StrictStringField, provided
from models.ticket import STATUSES, PRIORITIES

STATUS_CHOICES = [(s, s) for s in STATUSES]
PRIORITY_CHOICES = [(p, p) for p in PRIORITIES]


class TicketForm(FlaskForm):
    title = StrictStringField('Title', validators=[DataRequired(), Length(max=200)])
    description = StrictStringField('Description', validators=[DataRequired()])
    priority = SelectField('Priority', choices=PRIORITY_CHOICES, validators=[Optional()])


class EditTicketForm(FlaskForm):
    """Partial update: only keys present in the payload are applied."""
    title = StrictStringField('Title', validators=[Length(max=200)])
    description = StrictStringField('Description')
    status = SelectField('Status', choices=STATUS_CHOICES, validators=[Optional()])
    priority = SelectField('Priority', choices=PRIORITY_CHOICES, validators=[Optional()])
    assigned_to = NullableIntegerField('Assignee', validators=[Optional()])

    def validate_title(self, field):
        _not_blank(field)

    def validate_description(self, field):
        _not_blank(field)

    def patch(self):
        return provided(self, 'title', 'description', 'status', 'priority', 'assigned_to')


class AssignForm(FlaskForm):
    user_id = NullableIntegerField('User', validators=[InputRequired()])


class StatusForm(FlaskForm):
    status = SelectField('Status', choices=STATUS_CHOICES, validators=[InputRequired()])


def _not_blank(field):
    if field.raw_data and not (isinstance(field.data, str) and field.data.strip()):
        raise ValidationError('This field cannot be blank.')
