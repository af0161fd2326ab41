import os
import tempfile

# Point the app at a throwaway SQLite file before db.py is imported anywhere.
_TMP_DIR = tempfile.mkdtemp(prefix="quizzes-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"

import pytest  # noqa: E402

import models  # noqa: E402,F401
from db import Base, engine  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
