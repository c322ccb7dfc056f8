"""
Shared fixtures for the forum tests.

Each test gets a fresh application bound to its own SQLite file, an active
app context with the schema created, a test client, and three users.
"""
import pytest

from devflow import create_app, db
from devflow.service.qna_service import QnaService
from devflow.service.user_repository import UserRepository
from devflow.service.user_service import UserService


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'forum.db'}",
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def qna(app):
    return QnaService()


@pytest.fixture
def users_service(app):
    return UserService()


@pytest.fixture
def alice(users_service):
    return users_service.create_user("alice", "alice@example.com", name="Alice").id


@pytest.fixture
def bob(users_service):
    return users_service.create_user("bob", "bob@example.com", name="Bob").id


@pytest.fixture
def carol(users_service):
    return users_service.create_user("carol", "carol@example.com", name="Carol").id


@pytest.fixture
def reputation(app):
    """Read a user's reputation straight from the database."""
    repo = UserRepository()

    def _reputation(user_id):
        db.session.expire_all()
        return repo.get_reputation(user_id)

    return _reputation


@pytest.fixture
def make_question(qna, alice):
    """Create a question; defaults keep it valid."""
    counter = {"n": 0}

    def _make(title=None, content="How do I do this thing properly in Python?", tags=("python",), author_id=None):
        counter["n"] += 1
        question = qna.create_question(
            title=title or f"Question number {counter['n']}",
            content=content,
            tags=list(tags),
            author_id=author_id or alice,
        )
        return question.id

    return _make


@pytest.fixture
def make_answer(qna, bob):
    def _make(question_id, content="You can use a context manager for that.", author_id=None):
        return qna.create_answer(content, author_id or bob, question_id).id

    return _make
