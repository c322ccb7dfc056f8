from sqlalchemy import delete, insert, update

from devflow import db
from devflow.models import Users, Question, saved_question


class UserRepository:

    def get_by_id(self, user_id: int) -> Users | None:
        return db.session.get(Users, user_id)

    def get_by_username(self, username: str) -> Users | None:
        return Users.query.filter_by(username=username).first()

    def get_by_email(self, email: str) -> Users | None:
        return Users.query.filter_by(email=email).first()

    def exists(self, user_id: int) -> bool:
        return db.session.query(Users.id).filter_by(id=user_id).first() is not None

    def create_user(self, username: str, email: str, name: str | None = None,
                    picture: str | None = None, bio: str | None = None) -> Users:
        user = Users(username=username, email=email, name=name, picture=picture, bio=bio, reputation=0)
        db.session.add(user)
        db.session.flush()
        return user

    def adjust_reputation(self, user_id: int, delta: int): # single UPDATE, no read-modify-write
        if not delta:
            return
        db.session.execute(
            update(Users)
            .where(Users.id == user_id)
            .values(reputation=Users.reputation + delta)
        )

    def get_reputation(self, user_id: int) -> int | None:
        return db.session.query(Users.reputation).filter_by(id=user_id).scalar()

    def has_saved(self, user_id: int, question_id: int) -> bool:
        row = db.session.execute(
            saved_question.select().where(
                saved_question.c.user_id == user_id,
                saved_question.c.question_id == question_id,
            )
        ).first()
        return row is not None

    def add_saved(self, user_id: int, question_id: int):
        db.session.execute(insert(saved_question).values(user_id=user_id, question_id=question_id))

    def remove_saved(self, user_id: int, question_id: int):
        db.session.execute(
            delete(saved_question).where(
                saved_question.c.user_id == user_id,
                saved_question.c.question_id == question_id,
            )
        )

    def remove_saved_for_question(self, question_id: int):
        db.session.execute(delete(saved_question).where(saved_question.c.question_id == question_id))

    def saved_questions_query(self, user_id: int):
        return (
            Question.query
            .join(saved_question, saved_question.c.question_id == Question.id)
            .filter(saved_question.c.user_id == user_id)
        )
