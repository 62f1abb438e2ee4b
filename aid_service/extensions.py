from contextlib import contextmanager
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


@contextmanager
def transaction(session):
    """
    Run a read-check-write unit against the session.
    Commits on a clean exit; rolls back and re-raises on any error.
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
