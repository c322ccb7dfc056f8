import enum
from datetime import datetime

from devflow import db


class VoteDirection(enum.Enum):
    UP = "up"
    DOWN = "down"


class InteractionAction(enum.Enum):
    ASK_QUESTION = "ask_question"
    ANSWER = "answer"
    VIEW = "view"


# bookmarks
saved_question = db.Table(
    'saved_question',
    db.Column('user_id', db.Integer, db.ForeignKey('users.id'), primary_key=True),
    db.Column('question_id', db.Integer, db.ForeignKey('question.id'), primary_key=True),
)


class Users(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, db.Sequence('users_seq', start=1, increment=1), primary_key=True)
    username = db.Column(db.String(150), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    name = db.Column(db.String(150))
    picture = db.Column(db.String(500))
    bio = db.Column(db.Text())
    reputation = db.Column(db.Integer, nullable=False, default=0)   # may go negative
    joined_at = db.Column(db.DateTime(), nullable=False, default=datetime.now)


class Question(db.Model):
    __tablename__ = 'question'
    id = db.Column(db.Integer, db.Sequence('question_seq', start=1, increment=1), primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text(), nullable=False)
    views = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(), nullable=False, default=datetime.now)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    author = db.relationship('Users', backref=db.backref('question_set', lazy='dynamic'))

    tag_links = db.relationship('QuestionTag', back_populates='question', order_by='QuestionTag.position')
    votes = db.relationship('QuestionVote', lazy='dynamic')

    @property
    def tags(self):
        return [link.tag for link in self.tag_links]

    @property
    def upvoters(self) -> list[int]:
        return [v.user_id for v in self.votes.filter_by(direction=VoteDirection.UP)]

    @property
    def downvoters(self) -> list[int]:
        return [v.user_id for v in self.votes.filter_by(direction=VoteDirection.DOWN)]


class Answer(db.Model):
    __tablename__ = 'answer'
    id = db.Column(db.Integer, db.Sequence('answer_seq', start=1, increment=1), primary_key=True)
    content = db.Column(db.Text(), nullable=False)
    created_at = db.Column(db.DateTime(), nullable=False, default=datetime.now)
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=False, index=True)
    question = db.relationship('Question', backref=db.backref('answer_set', lazy='dynamic'))
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    author = db.relationship('Users', backref=db.backref('answer_set', lazy='dynamic'))

    votes = db.relationship('AnswerVote', lazy='dynamic')

    @property
    def upvoters(self) -> list[int]:
        return [v.user_id for v in self.votes.filter_by(direction=VoteDirection.UP)]

    @property
    def downvoters(self) -> list[int]:
        return [v.user_id for v in self.votes.filter_by(direction=VoteDirection.DOWN)]


class Tag(db.Model):
    __tablename__ = 'tag'
    id = db.Column(db.Integer, db.Sequence('tag_seq', start=1, increment=1), primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    name_key = db.Column(db.String(50), unique=True, nullable=False)   # casefolded name
    created_at = db.Column(db.DateTime(), nullable=False, default=datetime.now)

    question_links = db.relationship('QuestionTag', back_populates='tag')

    @property
    def question_ids(self) -> list[int]:
        return [link.question_id for link in self.question_links]


class QuestionTag(db.Model):
    __tablename__ = 'question_tag'
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), primary_key=True)
    tag_id = db.Column(db.Integer, db.ForeignKey('tag.id'), primary_key=True)
    position = db.Column(db.Integer, nullable=False, default=0)   # order on the question

    question = db.relationship('Question', back_populates='tag_links')
    tag = db.relationship('Tag', back_populates='question_links')


class QuestionVote(db.Model):
    __tablename__ = 'question_vote'
    id = db.Column(db.Integer, db.Sequence('question_vote_seq', start=1, increment=1), primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=False, index=True)
    direction = db.Column(db.Enum(VoteDirection), nullable=False)

    __table_args__ = (
        db.UniqueConstraint('user_id', 'question_id', name='uq_question_vote_user'),
    )


class AnswerVote(db.Model):
    __tablename__ = 'answer_vote'
    id = db.Column(db.Integer, db.Sequence('answer_vote_seq', start=1, increment=1), primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    answer_id = db.Column(db.Integer, db.ForeignKey('answer.id'), nullable=False, index=True)
    direction = db.Column(db.Enum(VoteDirection), nullable=False)

    __table_args__ = (
        db.UniqueConstraint('user_id', 'answer_id', name='uq_answer_vote_user'),
    )


class Interaction(db.Model):
    __tablename__ = 'interaction'

    id = db.Column(
        db.Integer,
        db.Sequence('interaction_seq', start=1, increment=1),
        primary_key=True
    )

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    action = db.Column(db.Enum(InteractionAction), nullable=False)

    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=True, index=True)
    answer_id = db.Column(db.Integer, db.ForeignKey('answer.id'), nullable=True, index=True)

    # question's tag ids when the action happened
    tags = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(
        db.DateTime(),
        nullable=False,
        default=datetime.now
    )

    user = db.relationship(
        'Users',
        backref=db.backref('interactions', lazy='dynamic')
    )
