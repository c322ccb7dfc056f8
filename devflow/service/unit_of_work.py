from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from devflow import db
from devflow.errors import ForumError, PersistenceError
from devflow.revalidation import revalidate


@contextmanager
def forum_action(name: str, path: str | None = None, commit: bool = True):
    """Run one action as a single transaction.

    Commits on success and then revalidates ``path``. Any failure is rolled
    back, logged under ``name`` and raised again; database errors surface as
    ``PersistenceError``.
    """
    try:
        yield
        if commit:
            db.session.commit()
    except ForumError as e:
        db.session.rollback()
        current_app.logger.error(f"{name} failed: {e}")
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception(f"{name} failed")
        raise PersistenceError(f"{name} failed: {e.__class__.__name__}") from e
    except Exception:
        db.session.rollback()
        current_app.logger.exception(f"{name} failed")
        raise

    if commit:
        revalidate(path)
