from sqlalchemy import delete, or_

from devflow import db
from devflow.models import Interaction, InteractionAction


class InteractionRepository: # append-only activity log

    def record(self, user_id: int, action: InteractionAction, question_id: int | None = None,
               answer_id: int | None = None, tags: list[int] | None = None) -> Interaction:
        interaction = Interaction(
            user_id=user_id,
            action=action,
            question_id=question_id,
            answer_id=answer_id,
            tags=list(tags or []),
        )
        db.session.add(interaction)
        return interaction

    def has_viewed(self, user_id: int, question_id: int) -> bool:
        return (
            Interaction.query
            .filter_by(user_id=user_id, question_id=question_id, action=InteractionAction.VIEW)
            .first()
        ) is not None

    def delete_for_question(self, question_id: int, answer_ids: list[int]):
        condition = Interaction.question_id == question_id
        if answer_ids:
            condition = or_(condition, Interaction.answer_id.in_(answer_ids))
        db.session.execute(
            delete(Interaction).where(condition).execution_options(synchronize_session=False)
        )

    def delete_for_answer(self, answer_id: int):
        db.session.execute(
            delete(Interaction)
            .where(Interaction.answer_id == answer_id)
            .execution_options(synchronize_session=False)
        )
