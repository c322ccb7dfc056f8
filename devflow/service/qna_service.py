from flask import current_app

from devflow.errors import NotFoundError, ValidationError
from devflow.forms import AnswerForm, QuestionEditForm, QuestionForm
from devflow.models import Answer, Question, InteractionAction, QuestionVote, VoteDirection
from devflow.service.answer_repository import AnswerRepository
from devflow.service.interaction_repository import InteractionRepository
from devflow.service.pagination import AnswerSort, Page, QuestionFilter, normalize_paging, paginate, parse_key
from devflow.service.question_repository import QuestionRepository
from devflow.service.tag_repository import TagRepository
from devflow.service.unit_of_work import forum_action
from devflow.service.user_repository import UserRepository
from devflow.service.vote_service import VoteResult, VoteService


def question_form(title, content, tags) -> QuestionForm:
    if isinstance(tags, str):
        raise ValidationError("Tags must be a list of names.")
    names = [t if t is None else str(t) for t in tags or []]
    return QuestionForm(title=title, content=content, tags=names).check()


class QnaService: # question/answer actions

    def __init__(self, question_repo: QuestionRepository | None = None,
                 answer_repo: AnswerRepository | None = None,
                 tag_repo: TagRepository | None = None,
                 user_repo: UserRepository | None = None,
                 interaction_repo: InteractionRepository | None = None,
                 vote_service: VoteService | None = None):
        self.question_repo = question_repo or QuestionRepository()
        self.answer_repo = answer_repo or AnswerRepository()
        self.tag_repo = tag_repo or TagRepository()
        self.user_repo = user_repo or UserRepository()
        self.interaction_repo = interaction_repo or InteractionRepository()
        self.vote_service = vote_service or VoteService(self.question_repo, self.answer_repo, self.user_repo)

    # lookups

    def _question_or_404(self, question_id: int) -> Question:
        question = self.question_repo.get_question(question_id)
        if question is None:
            raise NotFoundError(f"Question {question_id} not found.")
        return question

    def _answer_or_404(self, answer_id: int) -> Answer:
        answer = self.answer_repo.get_answer(answer_id)
        if answer is None:
            raise NotFoundError(f"Answer {answer_id} not found.")
        return answer

    def _require_user(self, user_id: int):
        if user_id is None or not self.user_repo.exists(user_id):
            raise NotFoundError(f"User {user_id} not found.")

    # questions

    def create_question(self, title: str, content: str, tags, author_id: int, path: str | None = None) -> Question:
        with forum_action("create_question", path):
            form = question_form(title, content, tags)
            self._require_user(author_id)

            question = self.question_repo.create_question(form.title.data, form.content.data, author_id)
            tag_ids = self.tag_repo.resolve_tags(form.tags.data, question.id)

            self.interaction_repo.record(
                user_id=author_id,
                action=InteractionAction.ASK_QUESTION,
                question_id=question.id,
                tags=list(dict.fromkeys(tag_ids)),
            )
            self.user_repo.adjust_reputation(author_id, current_app.config["REPUTATION_ASK_QUESTION"])
            current_app.logger.info(f"question {question.id} created by user {author_id}")
        return question

    def resolve_tags(self, names, question_id: int, path: str | None = None) -> list[int]:
        with forum_action("resolve_tags", path):
            self._question_or_404(question_id)
            tag_ids = self.tag_repo.resolve_tags(list(names), question_id)
        return tag_ids

    def get_questions(self, search_query: str | None = None, filter=None,
                      page=1, page_size=None) -> Page:
        with forum_action("get_questions", commit=False):
            question_filter = parse_key(QuestionFilter, filter)
            page, page_size = normalize_paging(page, page_size, current_app.config["QUESTIONS_PER_PAGE"])
            query = self.question_repo.build_question_query(search_query, question_filter)
            result = paginate(query, page, page_size)
        return result

    def get_hot_questions(self, limit: int = 5) -> list[Question]:
        with forum_action("get_hot_questions", commit=False):
            questions = self.question_repo.get_hot_questions(limit)
        return questions

    def get_question_by_id(self, question_id: int) -> Question:
        with forum_action("get_question_by_id", commit=False):
            question = self._question_or_404(question_id)
        return question

    def edit_question(self, question_id: int, title: str, content: str, path: str | None = None) -> Question:
        with forum_action("edit_question", path):
            question = self._question_or_404(question_id)
            form = QuestionEditForm(title=title, content=content).check()
            self.question_repo.update_question(question, form.title.data, form.content.data)
        return question

    def delete_question(self, question_id: int, path: str | None = None):
        with forum_action("delete_question", path):
            self._question_or_404(question_id)
            answer_ids = self.question_repo.answer_ids(question_id)

            # dependents first so no foreign key points at a deleted row
            self.interaction_repo.delete_for_question(question_id, answer_ids)
            self.tag_repo.unlink_question(question_id)
            self.user_repo.remove_saved_for_question(question_id)
            self.question_repo.delete_question(question_id, answer_ids)
            current_app.logger.info(f"question {question_id} deleted with {len(answer_ids)} answers")

    def view_question(self, question_id: int, user_id: int | None = None):
        with forum_action("view_question"):
            self._question_or_404(question_id)
            self.question_repo.increment_views(question_id)
            if user_id is not None:
                self._require_user(user_id)
                if not self.interaction_repo.has_viewed(user_id, question_id):
                    self.interaction_repo.record(
                        user_id=user_id,
                        action=InteractionAction.VIEW,
                        question_id=question_id,
                        tags=self.tag_repo.tag_ids_for_question(question_id),
                    )

    # votes

    def vote_question(self, question_id: int, user_id: int, direction, has_upvoted=None,
                      has_downvoted=None, path: str | None = None) -> VoteResult:
        current_state = None if has_upvoted is None and has_downvoted is None else (has_upvoted, has_downvoted)
        with forum_action("vote_question", path):
            result = self.vote_service.vote_question(question_id, user_id, direction, current_state)
        return result

    def upvote_question(self, question_id: int, user_id: int, has_upvoted=None, has_downvoted=None,
                        path: str | None = None) -> VoteResult:
        return self.vote_question(question_id, user_id, VoteDirection.UP, has_upvoted, has_downvoted, path)

    def downvote_question(self, question_id: int, user_id: int, has_upvoted=None, has_downvoted=None,
                          path: str | None = None) -> VoteResult:
        return self.vote_question(question_id, user_id, VoteDirection.DOWN, has_upvoted, has_downvoted, path)

    def vote_answer(self, answer_id: int, user_id: int, direction, has_upvoted=None,
                    has_downvoted=None, path: str | None = None) -> VoteResult:
        current_state = None if has_upvoted is None and has_downvoted is None else (has_upvoted, has_downvoted)
        with forum_action("vote_answer", path):
            result = self.vote_service.vote_answer(answer_id, user_id, direction, current_state)
        return result

    def upvote_answer(self, answer_id: int, user_id: int, has_upvoted=None, has_downvoted=None,
                      path: str | None = None) -> VoteResult:
        return self.vote_answer(answer_id, user_id, VoteDirection.UP, has_upvoted, has_downvoted, path)

    def downvote_answer(self, answer_id: int, user_id: int, has_upvoted=None, has_downvoted=None,
                        path: str | None = None) -> VoteResult:
        return self.vote_answer(answer_id, user_id, VoteDirection.DOWN, has_upvoted, has_downvoted, path)

    def question_vote_state(self, question_id: int, user_id: int):
        return self.vote_service.get_vote_state(QuestionVote, "question_id", question_id, user_id)

    # answers

    def create_answer(self, content: str, author_id: int, question_id: int, path: str | None = None) -> Answer:
        with forum_action("create_answer", path):
            content = AnswerForm(content=content).check().content.data
            self._question_or_404(question_id)
            self._require_user(author_id)

            answer = self.answer_repo.create_answer(question_id, content, author_id)
            self.interaction_repo.record(
                user_id=author_id,
                action=InteractionAction.ANSWER,
                question_id=question_id,
                answer_id=answer.id,
                tags=self.tag_repo.tag_ids_for_question(question_id),
            )
            self.user_repo.adjust_reputation(author_id, current_app.config["REPUTATION_ANSWER"])
            current_app.logger.info(f"answer {answer.id} created on question {question_id}")
        return answer

    def get_answers(self, question_id: int, sort_by=None, page=1, page_size=None) -> Page:
        with forum_action("get_answers", commit=False):
            answer_sort = parse_key(AnswerSort, sort_by)
            page, page_size = normalize_paging(page, page_size, current_app.config["ANSWERS_PER_PAGE"])
            self._question_or_404(question_id)
            query = self.answer_repo.build_answer_query(question_id, answer_sort)
            result = paginate(query, page, page_size)
        return result

    def delete_answer(self, answer_id: int, path: str | None = None):
        with forum_action("delete_answer", path):
            self._answer_or_404(answer_id)
            self.interaction_repo.delete_for_answer(answer_id)
            self.answer_repo.delete_answer(answer_id)
            current_app.logger.info(f"answer {answer_id} deleted")
