from datetime import datetime

from sqlalchemy import delete

from devflow import db
from devflow.models import Answer, AnswerVote
from devflow.service.pagination import AnswerSort
from devflow.service.question_repository import upvote_count


class AnswerRepository:

    def get_answer(self, answer_id: int) -> Answer | None:
        return db.session.get(Answer, answer_id)

    def get_answer_for_update(self, answer_id: int) -> Answer | None:
        return Answer.query.filter_by(id=answer_id).with_for_update().first()

    def build_answer_query(self, question_id: int, sort_by: AnswerSort | None = None):
        query = Answer.query.filter(Answer.question_id == question_id)
        upvotes = upvote_count(AnswerVote, AnswerVote.answer_id, Answer.id)

        if sort_by is AnswerSort.HIGHEST_UPVOTES:
            query = query.order_by(upvotes.desc(), Answer.id.asc())
        elif sort_by is AnswerSort.LOWEST_UPVOTES:
            query = query.order_by(upvotes.asc(), Answer.id.asc())
        elif sort_by is AnswerSort.RECENT:
            query = query.order_by(Answer.created_at.desc(), Answer.id.desc())
        elif sort_by is AnswerSort.OLD:
            query = query.order_by(Answer.created_at.asc(), Answer.id.asc())
        else:
            query = query.order_by(Answer.id.asc())
        return query

    def create_answer(self, question_id: int, content: str, author_id: int) -> Answer:
        answer = Answer(
            question_id=question_id,
            content=content,
            author_id=author_id,
            created_at=datetime.now(),
        )
        db.session.add(answer)
        db.session.flush()
        return answer

    def delete_answer(self, answer_id: int): # votes first, then the answer
        db.session.execute(
            delete(AnswerVote)
            .where(AnswerVote.answer_id == answer_id)
            .execution_options(synchronize_session=False)
        )
        db.session.execute(
            delete(Answer)
            .where(Answer.id == answer_id)
            .execution_options(synchronize_session=False)
        )

    def search(self, text: str, limit: int):
        return (
            Answer.query
            .filter(Answer.content.icontains(text, autoescape=True))
            .order_by(Answer.id)
            .limit(limit)
            .all()
        )
