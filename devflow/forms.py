from flask_wtf import FlaskForm
from wtforms import FieldList, StringField, TextAreaField
from wtforms.validators import DataRequired, Email, Length, Regexp

from devflow.errors import ValidationError


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _lower(value):
    return value.lower() if isinstance(value, str) else value


class JsonForm(FlaskForm):
    """Forms filled from parsed JSON through ``data=``, never from request.form."""

    class Meta:
        csrf = False

    def __init__(self, **data):
        super().__init__(formdata=None, data=data)

    def check(self):
        if not self.validate():
            raise ValidationError(first_error(self.errors))
        return self


def first_error(errors) -> str:
    # FieldList errors nest one list per entry, blank for entries that passed
    for messages in errors.values() if isinstance(errors, dict) else [errors]:
        for message in messages:
            if isinstance(message, (list, dict)):
                if message:
                    return first_error(message)
            elif message:
                return message
    return "Invalid input."


class QuestionEditForm(JsonForm):
    title = StringField('Title', filters=[_strip], validators=[
        DataRequired('Title is required.'),
        Length(min=5, max=130, message='Title must be 5-130 characters.'),
    ])
    content = TextAreaField('Content', filters=[_strip], validators=[
        DataRequired('Content is required.'),
        Length(min=20, message='Content must be at least 20 characters.'),
    ])


class QuestionForm(QuestionEditForm):
    tags = FieldList(
        StringField('Tag', filters=[_strip], validators=[
            DataRequired('Tag names must not be empty.'),
            Length(max=15, message='Tags must be at most 15 characters.'),
        ]),
        validators=[Length(min=1, max=3, message='Add 1 to 3 tags.')],
    )


class AnswerForm(JsonForm):
    content = TextAreaField('Content', filters=[_strip], validators=[
        DataRequired('Answer is required.'),
        Length(min=20, message='Answer must be at least 20 characters.'),
    ])


class UserForm(JsonForm):
    username = StringField('Username', filters=[_strip], validators=[
        DataRequired('Username is required.'),
        Regexp(r'^[a-zA-Z0-9_]{3,50}$', message='Username must be 3-50 letters, numbers or underscores.'),
    ])
    email = StringField('Email', filters=[_strip, _lower], validators=[
        DataRequired('Email is required.'),
        Email('Invalid email format.'),
    ])
    name = StringField('Name', filters=[_strip], validators=[Length(max=150)])
    picture = StringField('Picture', filters=[_strip], validators=[Length(max=500)])
    bio = TextAreaField('Bio')
