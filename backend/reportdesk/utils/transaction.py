from contextlib import contextmanager

from flask import current_app

from reportdesk.extensions import db


@contextmanager
def transactional():
    """
    One unit of work: commit when the block finishes, roll back and
    re-raise on any error. Nested use commits at the inner exit.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.debug("Rolled back transaction: %s", type(exc).__name__)
        raise
