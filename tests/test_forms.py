import pytest

from devflow.errors import ValidationError
from devflow.forms import AnswerForm, QuestionForm, UserForm

BODY = "A perfectly long enough body for a question."


def test_question_form_strips_fields(app):
    form = QuestionForm(title="  A valid title  ", content=f"  {BODY}  ", tags=[" python ", "flask"]).check()
    assert form.title.data == "A valid title"
    assert form.content.data == BODY
    assert form.tags.data == ["python", "flask"]


@pytest.mark.parametrize("data, message", [
    ({"title": "Hi", "content": BODY, "tags": ["python"]}, "Title must be 5-130 characters."),
    ({"title": "x" * 131, "content": BODY, "tags": ["python"]}, "Title must be 5-130 characters."),
    ({"title": "A valid title", "content": "   ", "tags": ["python"]}, "Content is required."),
    ({"title": "A valid title", "content": BODY, "tags": []}, "Add 1 to 3 tags."),
    ({"title": "A valid title", "content": BODY, "tags": ["a", "b", "c", "d"]}, "Add 1 to 3 tags."),
    ({"title": "A valid title", "content": BODY, "tags": ["python", " "]}, "Tag names must not be empty."),
    ({"title": "A valid title", "content": BODY, "tags": ["x" * 16]}, "Tags must be at most 15 characters."),
])
def test_question_form_messages(app, data, message):
    with pytest.raises(ValidationError) as exc:
        QuestionForm(**data).check()
    assert exc.value.message == message


def test_answer_form_minimum_length(app):
    with pytest.raises(ValidationError) as exc:
        AnswerForm(content="Too short.").check()
    assert exc.value.message == "Answer must be at least 20 characters."


def test_user_form_lowercases_email(app):
    form = UserForm(username="dana_1", email=" Dana@Example.com ").check()
    assert form.email.data == "dana@example.com"
    assert form.name.data is None


@pytest.mark.parametrize("username, email, message", [
    ("da", "dana@example.com", "Username must be 3-50 letters, numbers or underscores."),
    ("dana smith", "dana@example.com", "Username must be 3-50 letters, numbers or underscores."),
    ("dana", "not-an-email", "Invalid email format."),
    ("dana", "", "Email is required."),
])
def test_user_form_messages(app, username, email, message):
    with pytest.raises(ValidationError) as exc:
        UserForm(username=username, email=email).check()
    assert exc.value.message == message
