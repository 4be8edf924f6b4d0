import pytest
from pydantic import ValidationError

from models import CertificateState, HomeState, Question, Quiz, Score


def test_question_needs_two_options():
    with pytest.raises(ValidationError):
        Question(prompt="Only one?", options=("yes",), answer_index=0)


@pytest.mark.parametrize("answer_index", [-1, 3])
def test_answer_index_must_point_at_an_option(answer_index):
    with pytest.raises(ValidationError):
        Question(prompt="Pick", options=("a", "b", "c"), answer_index=answer_index)


@pytest.mark.parametrize("pass_mark", [-1, 101])
def test_pass_mark_bounds(pass_mark):
    with pytest.raises(ValidationError):
        Quiz(questions=(), pass_mark=pass_mark)


def test_models_are_frozen(it_basics):
    with pytest.raises(ValidationError):
        it_basics.title = "Changed"


def test_home_state_has_no_course():
    assert HomeState().screen == "home"
    assert not hasattr(HomeState(), "course")


def test_certificate_state_defaults(it_basics):
    state = CertificateState(course=it_basics, score=Score(percentage=100, passed=True))
    assert state.screen == "certificate"
    assert state.learner_name == ""
    assert state.review == ()
