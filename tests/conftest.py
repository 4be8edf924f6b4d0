import sys
from pathlib import Path

import pytest

root_dir = Path(__file__).resolve().parents[1]
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from course_catalog import CourseCatalog
from factories import FakeIssuer, make_course
from models import Course
from session_state import SessionController


@pytest.fixture
def it_basics() -> Course:
    return make_course()


@pytest.fixture
def three_question_course() -> Course:
    return make_course(course_id="three", title="Three Questions", answers=(0, 1, 2), pass_mark=70)


@pytest.fixture
def catalog(it_basics, three_question_course) -> CourseCatalog:
    return CourseCatalog((it_basics, three_question_course))


@pytest.fixture
def controller(catalog) -> SessionController:
    return SessionController(catalog)


@pytest.fixture
def issuer() -> FakeIssuer:
    return FakeIssuer()
