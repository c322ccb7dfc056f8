import enum

from devflow.errors import ValidationError
from devflow.models import Users
from devflow.service.answer_repository import AnswerRepository
from devflow.service.question_repository import QuestionRepository
from devflow.service.tag_repository import TagRepository
from devflow.service.unit_of_work import forum_action

PER_TYPE_LIMIT = 2
SINGLE_TYPE_LIMIT = 8


class SearchType(enum.Enum):
    QUESTION = "question"
    ANSWER = "answer"
    USER = "user"
    TAG = "tag"


class SearchService: # global search box

    def __init__(self, question_repo: QuestionRepository | None = None,
                 answer_repo: AnswerRepository | None = None,
                 tag_repo: TagRepository | None = None):
        self.question_repo = question_repo or QuestionRepository()
        self.answer_repo = answer_repo or AnswerRepository()
        self.tag_repo = tag_repo or TagRepository()

    def _search_users(self, text: str, limit: int):
        return (
            Users.query
            .filter(Users.username.icontains(text, autoescape=True)
                    | Users.name.icontains(text, autoescape=True))
            .order_by(Users.id)
            .limit(limit)
            .all()
        )

    def _results(self, search_type: SearchType, text: str, limit: int) -> list[dict]:
        if search_type is SearchType.QUESTION:
            return [{"type": "question", "id": q.id, "title": q.title}
                    for q in self.question_repo.search(text, limit)]
        if search_type is SearchType.ANSWER:
            # answers open on their question
            return [{"type": "answer", "id": a.question_id, "title": f"Answers containing {text}"}
                    for a in self.answer_repo.search(text, limit)]
        if search_type is SearchType.USER:
            return [{"type": "user", "id": u.id, "title": u.name or u.username}
                    for u in self._search_users(text, limit)]
        return [{"type": "tag", "id": t.id, "title": t.name}
                for t in self.tag_repo.search(text, limit)]

    def global_search(self, query: str | None, type: str | None = None) -> list[dict]:
        with forum_action("global_search", commit=False):
            text = (query or "").strip()
            if not text:
                return []
            if type:
                try:
                    search_type = SearchType(type.lower())
                except ValueError:
                    raise ValidationError(f"Unknown search type '{type}'.")
                results = self._results(search_type, text, SINGLE_TYPE_LIMIT)
            else:
                results = []
                for search_type in SearchType:
                    results.extend(self._results(search_type, text, PER_TYPE_LIMIT))
        return results
