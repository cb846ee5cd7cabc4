" PyTest Config. This contains global-level pytest fixtures. "
import os
import os.path
from datetime import date
from itertools import count

import pytest

from main import create_app, db as db_obj
from models.conference import Conference

_conference_ids = count()


@pytest.fixture(scope="module")
def app():
    """Fixture to provide an instance of the app.
    This will also create a Flask app_context and tear it down.

    The test config uses an in-memory SQLite database, which lives
    as long as this module-scoped app does.
    """
    if "SETTINGS_FILE" not in os.environ:
        root = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..")
        os.environ["SETTINGS_FILE"] = os.path.join(root, "config", "test.cfg")

    app = create_app()

    with app.app_context():
        db_obj.create_all()

        yield app

        db_obj.session.close()
        db_obj.drop_all()


@pytest.fixture(scope="module")
def db(app):
    "Yield the DB object"
    yield db_obj


@pytest.fixture
def outbox(app):
    "Capture mail and yield the outbox."
    mailman = app.extensions["mailman"]
    mailman.outbox = []
    yield mailman.outbox


@pytest.fixture
def conference(db):
    "Yield a saved conference ending on 1st June 2026, with an empty program."
    conference = Conference(
        f"conf{next(_conference_ids)}",
        title="Test Conference",
        start_date=date(2026, 5, 29),
        end_date=date(2026, 6, 1),
        timezone="Europe/London",
        contact_email="organisers@example.com",
    )
    db.session.add(conference)
    db.session.commit()

    yield conference

    db.session.rollback()
    db.session.delete(conference)
    db.session.commit()
