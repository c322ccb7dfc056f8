"""Vote toggling and the reputation changes that go with it.

A voter has at most one vote row per question or answer, holding either
``up`` or ``down``. Voting in the direction already held removes the row,
voting the other way flips it, and voting with no row creates one.
"""
from dataclasses import dataclass

from flask import current_app

from devflow import db
from devflow.errors import NotFoundError, ValidationError
from devflow.models import QuestionVote, AnswerVote, VoteDirection
from devflow.service.answer_repository import AnswerRepository
from devflow.service.question_repository import QuestionRepository
from devflow.service.user_repository import UserRepository


@dataclass
class VoteResult:
    target_id: int
    voter_id: int
    direction: VoteDirection
    previous: VoteDirection | None
    current: VoteDirection | None
    voter_delta: int
    author_delta: int

    @property
    def has_upvoted(self) -> bool:
        return self.current is VoteDirection.UP

    @property
    def has_downvoted(self) -> bool:
        return self.current is VoteDirection.DOWN


def parse_direction(value) -> VoteDirection:
    if isinstance(value, VoteDirection):
        return value
    try:
        return VoteDirection(value)
    except ValueError:
        raise ValidationError(f"Unknown vote direction '{value}'. Expected 'up' or 'down'.")


def next_vote_state(previous: VoteDirection | None, direction: VoteDirection) -> VoteDirection | None:
    if previous is direction:
        return None
    return direction


def reputation_delta(previous: VoteDirection | None, direction: VoteDirection, magnitude: int) -> int:
    # one delta per call, keyed on whether the old state matched the direction
    return -magnitude if previous is direction else magnitude


class VoteService:

    def __init__(self, question_repo: QuestionRepository | None = None,
                 answer_repo: AnswerRepository | None = None,
                 user_repo: UserRepository | None = None):
        self.question_repo = question_repo or QuestionRepository()
        self.answer_repo = answer_repo or AnswerRepository()
        self.user_repo = user_repo or UserRepository()

    def vote_question(self, question_id: int, voter_id: int, direction, current_state=None) -> VoteResult:
        direction = parse_direction(direction)
        question = self.question_repo.get_question_for_update(question_id)
        if question is None:
            raise NotFoundError(f"Question {question_id} not found.")
        return self._apply(
            vote_model=QuestionVote,
            target_field="question_id",
            target_id=question.id,
            author_id=question.author_id,
            voter_id=voter_id,
            direction=direction,
            author_magnitude=current_app.config["REPUTATION_QUESTION_AUTHOR_VOTE"],
            current_state=current_state,
        )

    def vote_answer(self, answer_id: int, voter_id: int, direction, current_state=None) -> VoteResult:
        direction = parse_direction(direction)
        answer = self.answer_repo.get_answer_for_update(answer_id)
        if answer is None:
            raise NotFoundError(f"Answer {answer_id} not found.")
        return self._apply(
            vote_model=AnswerVote,
            target_field="answer_id",
            target_id=answer.id,
            author_id=answer.author_id,
            voter_id=voter_id,
            direction=direction,
            author_magnitude=current_app.config["REPUTATION_ANSWER_AUTHOR_VOTE"],
            current_state=current_state,
        )

    def get_vote_state(self, vote_model, target_field: str, target_id: int, voter_id: int) -> VoteDirection | None:
        vote = vote_model.query.filter_by(user_id=voter_id, **{target_field: target_id}).first()
        return vote.direction if vote else None

    def _apply(self, vote_model, target_field, target_id, author_id, voter_id, direction,
               author_magnitude, current_state) -> VoteResult:
        # both lookups happen before anything is written
        if not self.user_repo.exists(voter_id):
            raise NotFoundError(f"User {voter_id} not found.")

        vote = (
            vote_model.query
            .filter_by(user_id=voter_id, **{target_field: target_id})
            .with_for_update()
            .first()
        )
        previous = vote.direction if vote else None
        self._warn_if_stale(current_state, previous, target_field, target_id, voter_id)

        current = next_vote_state(previous, direction)
        if current is None:
            db.session.delete(vote)
        elif vote is None:
            db.session.add(vote_model(user_id=voter_id, direction=current, **{target_field: target_id}))
        else:
            vote.direction = current

        voter_delta = reputation_delta(previous, direction, current_app.config["REPUTATION_VOTER"])
        author_delta = reputation_delta(previous, direction, author_magnitude) if author_magnitude else 0
        self.user_repo.adjust_reputation(voter_id, voter_delta)
        self.user_repo.adjust_reputation(author_id, author_delta)
        db.session.flush()

        return VoteResult(
            target_id=target_id,
            voter_id=voter_id,
            direction=direction,
            previous=previous,
            current=current,
            voter_delta=voter_delta,
            author_delta=author_delta,
        )

    def _warn_if_stale(self, current_state, previous, target_field, target_id, voter_id):
        if current_state is None:
            return
        has_upvoted, has_downvoted = current_state
        if (bool(has_upvoted), bool(has_downvoted)) != (previous is VoteDirection.UP, previous is VoteDirection.DOWN):
            current_app.logger.warning(
                "stale vote state from client: user=%s %s=%s client=(%s, %s) stored=%s",
                voter_id, target_field, target_id, has_upvoted, has_downvoted,
                previous.value if previous else None,
            )
