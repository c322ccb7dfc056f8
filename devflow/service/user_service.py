from flask import current_app

from devflow.errors import NotFoundError, ValidationError
from devflow.forms import UserForm
from devflow.models import Users
from devflow.service.pagination import Page, QuestionFilter, normalize_paging, paginate, parse_key
from devflow.service.question_repository import QuestionRepository
from devflow.service.unit_of_work import forum_action
from devflow.service.user_repository import UserRepository


class UserService: # profiles and bookmarks

    def __init__(self, user_repo: UserRepository | None = None,
                 question_repo: QuestionRepository | None = None):
        self.user_repo = user_repo or UserRepository()
        self.question_repo = question_repo or QuestionRepository()

    def create_user(self, username: str, email: str, name: str | None = None,
                    picture: str | None = None, bio: str | None = None) -> Users:
        with forum_action("create_user"):
            form = UserForm(username=username, email=email, name=name, picture=picture, bio=bio).check()
            username, email = form.username.data, form.email.data
            if self.user_repo.get_by_username(username):
                raise ValidationError("Username is already taken.")
            if self.user_repo.get_by_email(email):
                raise ValidationError("Email is already registered.")

            user = self.user_repo.create_user(username, email, name=form.name.data or None,
                                             picture=form.picture.data or None, bio=bio)
            current_app.logger.info(f"user {user.id} created")
        return user

    def get_user_by_id(self, user_id: int) -> Users:
        with forum_action("get_user_by_id", commit=False):
            user = self.user_repo.get_by_id(user_id)
            if user is None:
                raise NotFoundError(f"User {user_id} not found.")
        return user

    def toggle_save_question(self, user_id: int, question_id: int, path: str | None = None) -> bool:
        """Bookmark or un-bookmark a question. Returns the new saved flag."""
        with forum_action("toggle_save_question", path):
            if not self.user_repo.exists(user_id):
                raise NotFoundError(f"User {user_id} not found.")
            if self.question_repo.get_question(question_id) is None:
                raise NotFoundError(f"Question {question_id} not found.")

            if self.user_repo.has_saved(user_id, question_id):
                self.user_repo.remove_saved(user_id, question_id)
                saved = False
            else:
                self.user_repo.add_saved(user_id, question_id)
                saved = True
        return saved

    def get_saved_questions(self, user_id: int, search_query: str | None = None, filter=None,
                            page=1, page_size=None) -> Page:
        with forum_action("get_saved_questions", commit=False):
            if not self.user_repo.exists(user_id):
                raise NotFoundError(f"User {user_id} not found.")
            question_filter = parse_key(QuestionFilter, filter)
            page, page_size = normalize_paging(page, page_size, current_app.config["QUESTIONS_PER_PAGE"])
            query = self.question_repo.build_question_query(
                search_query,
                question_filter,
                base_query=self.user_repo.saved_questions_query(user_id),
            )
            result = paginate(query, page, page_size)
        return result
