import pytest

from devflow import db
from devflow.errors import NotFoundError
from devflow.models import Answer, AnswerVote, Interaction, Question, QuestionTag, QuestionVote, Tag, saved_question


def test_delete_question_removes_every_dependent(qna, users_service, make_question, make_answer, alice, bob, carol):
    question_id = make_question(tags=["python", "flask"])
    answer_ids = [make_answer(question_id), make_answer(question_id, author_id=carol), make_answer(question_id)]
    qna.upvote_question(question_id, bob)
    qna.upvote_answer(answer_ids[0], carol)
    qna.view_question(question_id, carol)
    users_service.toggle_save_question(bob, question_id)

    other_id = make_question(tags=["python"])

    qna.delete_question(question_id)
    db.session.expire_all()

    assert db.session.get(Question, question_id) is None
    assert Answer.query.filter_by(question_id=question_id).count() == 0
    assert Interaction.query.filter(Interaction.question_id == question_id).count() == 0
    assert Interaction.query.filter(Interaction.answer_id.in_(answer_ids)).count() == 0
    assert QuestionTag.query.filter_by(question_id=question_id).count() == 0
    assert QuestionVote.query.count() == 0
    assert AnswerVote.query.count() == 0
    assert db.session.execute(saved_question.select()).first() is None

    # tags survive with their remaining questions
    for tag in Tag.query.all():
        assert question_id not in tag.question_ids
    assert Tag.query.filter_by(name="python").one().question_ids == [other_id]
    assert Tag.query.filter_by(name="flask").one().question_ids == []


def test_delete_answer_removes_answer_interactions_and_votes(qna, make_question, make_answer, carol):
    question_id = make_question()
    keep_id = make_answer(question_id)
    drop_id = make_answer(question_id)
    qna.upvote_answer(drop_id, carol)

    qna.delete_answer(drop_id)
    db.session.expire_all()

    assert db.session.get(Answer, drop_id) is None
    question = db.session.get(Question, question_id)
    assert [a.id for a in question.answer_set] == [keep_id]
    assert Interaction.query.filter_by(answer_id=drop_id).count() == 0
    assert Interaction.query.filter_by(answer_id=keep_id).count() == 1
    assert AnswerVote.query.count() == 0


def test_delete_missing_records(qna):
    with pytest.raises(NotFoundError):
        qna.delete_question(1)
    with pytest.raises(NotFoundError):
        qna.delete_answer(1)
