from datetime import datetime

from sqlalchemy import delete, func, select, update

from devflow import db
from devflow.models import Question, Answer, QuestionVote, AnswerVote, VoteDirection
from devflow.service.pagination import QuestionFilter


def upvote_count(vote_model, fk_column, target_column):
    return (
        select(func.count(vote_model.id))
        .where(fk_column == target_column, vote_model.direction == VoteDirection.UP)
        .correlate_except(vote_model)
        .scalar_subquery()
    )


class QuestionRepository:

    def get_question(self, question_id: int) -> Question | None:
        return db.session.get(Question, question_id)

    def get_question_for_update(self, question_id: int) -> Question | None:
        return Question.query.filter_by(id=question_id).with_for_update().first()

    def build_question_query(self, search_query: str | None = None, question_filter: QuestionFilter | None = None,
                             base_query=None):
        query = base_query if base_query is not None else Question.query

        if search_query:
            query = query.filter(
                Question.title.icontains(search_query, autoescape=True)
                | Question.content.icontains(search_query, autoescape=True)
            )

        if question_filter is QuestionFilter.NEWEST:
            query = query.order_by(Question.created_at.desc(), Question.id.desc())
        elif question_filter is QuestionFilter.FREQUENT:
            query = query.order_by(Question.views.desc(), Question.id.asc())
        elif question_filter is QuestionFilter.UNANSWERED:
            query = query.filter(~Question.answer_set.any()).order_by(Question.id.asc())
        else:
            # insertion order
            query = query.order_by(Question.id.asc())
        return query

    def get_hot_questions(self, limit: int):
        upvotes = upvote_count(QuestionVote, QuestionVote.question_id, Question.id)
        return (
            Question.query
            .order_by(Question.views.desc(), upvotes.desc(), Question.id.asc())
            .limit(limit)
            .all()
        )

    def create_question(self, title: str, content: str, author_id: int) -> Question:
        question = Question(
            title=title,
            content=content,
            author_id=author_id,
            views=0,
            created_at=datetime.now(),
        )
        db.session.add(question)
        db.session.flush()
        return question

    def update_question(self, question: Question, title: str, content: str) -> Question:
        question.title = title
        question.content = content
        db.session.flush()
        return question

    def increment_views(self, question_id: int):
        db.session.execute(
            update(Question)
            .where(Question.id == question_id)
            .values(views=Question.views + 1)
        )

    def answer_ids(self, question_id: int) -> list[int]:
        rows = db.session.query(Answer.id).filter(Answer.question_id == question_id).all()
        return [r[0] for r in rows]

    def delete_question(self, question_id: int, answer_ids: list[int]): # answers, votes, then the question
        if answer_ids:
            db.session.execute(
                delete(AnswerVote)
                .where(AnswerVote.answer_id.in_(answer_ids))
                .execution_options(synchronize_session=False)
            )
        db.session.execute(
            delete(Answer)
            .where(Answer.question_id == question_id)
            .execution_options(synchronize_session=False)
        )
        db.session.execute(
            delete(QuestionVote)
            .where(QuestionVote.question_id == question_id)
            .execution_options(synchronize_session=False)
        )
        db.session.execute(
            delete(Question)
            .where(Question.id == question_id)
            .execution_options(synchronize_session=False)
        )

    def search(self, text: str, limit: int):
        return (
            Question.query
            .filter(Question.title.icontains(text, autoescape=True))
            .order_by(Question.id)
            .limit(limit)
            .all()
        )
