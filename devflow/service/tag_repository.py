from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError

from devflow import db
from devflow.errors import ValidationError
from devflow.models import Tag, QuestionTag


class TagRepository:

    def find_by_name(self, name: str) -> Tag | None: # exact match after case-folding
        return Tag.query.filter_by(name_key=name.casefold()).first()

    def upsert(self, name: str) -> Tag:
        """Return the tag named ``name`` (any case), creating it on first use.

        The insert runs in a SAVEPOINT; if a concurrent request created the
        same case-folded name first, the unique key rejects ours and the
        winner is read back.
        """
        tag = self.find_by_name(name)
        if tag is not None:
            return tag
        try:
            with db.session.begin_nested():
                tag = Tag(name=name, name_key=name.casefold())
                db.session.add(tag)
        except IntegrityError:
            tag = self.find_by_name(name)
            if tag is None:
                raise
        return tag

    def link(self, tag: Tag, question_id: int) -> bool:
        """Add ``question_id`` to the tag's question set. No-op if already there."""
        existing = db.session.get(QuestionTag, (question_id, tag.id))
        if existing is not None:
            return False
        position = (
            db.session.query(func.coalesce(func.max(QuestionTag.position) + 1, 0))
            .filter(QuestionTag.question_id == question_id)
            .scalar()
        )
        db.session.add(QuestionTag(question_id=question_id, tag_id=tag.id, position=position))
        db.session.flush()
        return True

    def resolve_tags(self, names, question_id: int) -> list[int]:
        tag_ids = []
        for raw in names:
            name = (raw or "").strip()
            if not name:
                raise ValidationError("Tag names must not be empty.")
            tag = self.upsert(name)
            self.link(tag, question_id)
            tag_ids.append(tag.id)
        return tag_ids

    def tag_ids_for_question(self, question_id: int) -> list[int]:
        rows = (
            db.session.query(QuestionTag.tag_id)
            .filter(QuestionTag.question_id == question_id)
            .order_by(QuestionTag.position)
            .all()
        )
        return [r[0] for r in rows]

    def unlink_question(self, question_id: int):
        db.session.execute(
            delete(QuestionTag)
            .where(QuestionTag.question_id == question_id)
            .execution_options(synchronize_session=False)
        )

    def search(self, text: str, limit: int):
        return (
            Tag.query
            .filter(Tag.name.icontains(text, autoescape=True))
            .order_by(Tag.id)
            .limit(limit)
            .all()
        )
