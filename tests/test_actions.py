import pytest

from devflow import db
from devflow.errors import NotFoundError, ValidationError
from devflow.models import Interaction, InteractionAction, Question, Tag
from devflow.revalidation import path_revalidated
from devflow.service.search_service import SearchService


def test_create_question_records_interaction_and_reputation(qna, alice, reputation):
    question = qna.create_question(
        title="How do generators work?",
        content="I do not understand how yield suspends a function.",
        tags=["python", "generators"],
        author_id=alice,
    )

    assert reputation(alice) == 5
    interaction = Interaction.query.filter_by(question_id=question.id).one()
    assert interaction.action is InteractionAction.ASK_QUESTION
    assert interaction.user_id == alice
    tag_ids = [t.id for t in Tag.query.order_by(Tag.id).all()]
    assert interaction.tags == tag_ids


@pytest.mark.parametrize("title, content, tags", [
    ("Hi", "A perfectly long enough body for a question.", ["python"]),
    ("A valid title", "too short", ["python"]),
    ("A valid title", "A perfectly long enough body for a question.", []),
    ("A valid title", "A perfectly long enough body for a question.", ["a", "b", "c", "d"]),
    ("A valid title", "A perfectly long enough body for a question.", ["this-tag-is-far-too-long"]),
    ("A valid title", "A perfectly long enough body for a question.", "python"),
])
def test_create_question_validation(qna, alice, title, content, tags, reputation):
    with pytest.raises(ValidationError):
        qna.create_question(title=title, content=content, tags=tags, author_id=alice)
    assert Question.query.count() == 0
    assert Tag.query.count() == 0
    assert reputation(alice) == 0


def test_create_question_unknown_author(qna):
    with pytest.raises(NotFoundError):
        qna.create_question("A valid title", "A perfectly long enough body for a question.", ["python"], 77)
    assert Question.query.count() == 0


def test_create_answer(qna, make_question, bob, reputation):
    question_id = make_question(tags=["python", "asyncio"])
    answer = qna.create_answer("Use asyncio.gather to run them together.", bob, question_id)

    assert reputation(bob) == 10
    interaction = Interaction.query.filter_by(answer_id=answer.id).one()
    assert interaction.action is InteractionAction.ANSWER
    assert interaction.question_id == question_id
    assert len(interaction.tags) == 2


def test_create_answer_on_missing_question(qna, bob, reputation):
    with pytest.raises(NotFoundError):
        qna.create_answer("Use asyncio.gather to run them together.", bob, 12)
    assert reputation(bob) == 0


def test_edit_question(qna, make_question):
    question_id = make_question()
    qna.edit_question(question_id, "A better title", "A better body that is long enough.")
    db.session.expire_all()
    question = db.session.get(Question, question_id)
    assert question.title == "A better title"
    assert question.content == "A better body that is long enough."

    with pytest.raises(ValidationError):
        qna.edit_question(question_id, "", "A better body that is long enough.")


def test_view_question_counts_every_view_but_logs_once(qna, make_question, carol):
    question_id = make_question()
    qna.view_question(question_id, carol)
    qna.view_question(question_id, carol)
    qna.view_question(question_id)

    db.session.expire_all()
    assert db.session.get(Question, question_id).views == 3
    views = Interaction.query.filter_by(question_id=question_id, action=InteractionAction.VIEW).all()
    assert len(views) == 1
    assert views[0].user_id == carol


def test_toggle_save_question(users_service, make_question, bob):
    question_id = make_question()
    assert users_service.toggle_save_question(bob, question_id) is True
    assert [q.id for q in users_service.get_saved_questions(bob).items] == [question_id]
    assert users_service.toggle_save_question(bob, question_id) is False
    assert users_service.get_saved_questions(bob).items == []


def test_saved_questions_can_be_searched(users_service, make_question, bob):
    wanted = make_question(title="Saved about pytest")
    other = make_question(title="Saved about flask")
    users_service.toggle_save_question(bob, wanted)
    users_service.toggle_save_question(bob, other)

    page = users_service.get_saved_questions(bob, search_query="pytest")
    assert [q.id for q in page.items] == [wanted]


def test_toggle_save_unknown(users_service, bob):
    with pytest.raises(NotFoundError):
        users_service.toggle_save_question(bob, 5)


def test_hot_questions(qna, make_question, bob, carol):
    cold, warm, hot = make_question(), make_question(), make_question()
    qna.view_question(hot)
    qna.view_question(hot)
    qna.view_question(warm)
    qna.upvote_question(cold, bob)

    assert [q.id for q in qna.get_hot_questions(limit=2)] == [hot, warm]


def test_mutations_revalidate_path(qna, make_question, bob):
    seen = []

    def receiver(sender, path):
        seen.append(path)

    question_id = make_question()
    with path_revalidated.connected_to(receiver):
        qna.upvote_question(question_id, bob, path=f"/question/{question_id}")
        qna.get_questions()
        with pytest.raises(NotFoundError):
            qna.upvote_question(999, bob, path="/question/999")

    assert seen == [f"/question/{question_id}"]


def test_create_user_rejects_duplicates(users_service, alice):
    with pytest.raises(ValidationError):
        users_service.create_user("alice", "other@example.com")
    with pytest.raises(ValidationError):
        users_service.create_user("alice2", "ALICE@example.com")
    with pytest.raises(ValidationError):
        users_service.create_user("a", "a@example.com")


def test_global_search(make_question, make_answer, alice):
    question_id = make_question(title="Flask blueprints explained", tags=["flask"])
    make_answer(question_id, content="Blueprints group flask routes together.")

    results = SearchService().global_search("flask")
    types = [r["type"] for r in results]
    assert types == ["question", "answer", "tag"]
    assert results[0] == {"type": "question", "id": question_id, "title": "Flask blueprints explained"}

    users = SearchService().global_search("ali", type="user")
    assert users == [{"type": "user", "id": alice, "title": "Alice"}]

    assert SearchService().global_search("   ") == []
    with pytest.raises(ValidationError):
        SearchService().global_search("flask", type="planet")
