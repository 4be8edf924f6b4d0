import logging
from pathlib import Path

import quiz_engine
from course_catalog import CourseCatalog
from errors import InvalidState, RenderingFailure
from models import (
    CertificateState,
    CourseDetailState,
    HomeState,
    QuizState,
    SessionState,
)

logger = logging.getLogger(__name__)


class SessionController:
    """Owns one learner's navigation through the academy screens.

    The current screen and everything it shows live in a single immutable
    state value; each trigger checks that it is allowed from the current
    screen and replaces that value. Triggers fired from the wrong screen
    raise InvalidState and leave the state untouched.
    """

    def __init__(self, catalog: CourseCatalog):
        self.catalog = catalog
        self.state: SessionState = HomeState()

    @property
    def screen(self) -> str:
        return self.state.screen

    def _require(self, state_type, trigger: str):
        if not isinstance(self.state, state_type):
            raise InvalidState(f"'{trigger}' is not allowed from the {self.state.screen} screen")
        return self.state

    def select_course(self, course_id: str) -> CourseDetailState:
        self._require(HomeState, "select course")
        course = self.catalog.get(course_id)
        self.state = CourseDetailState(course=course)
        logger.info(f"Course selected: {course.id}")
        return self.state

    def request_quiz(self) -> QuizState:
        current = self._require(CourseDetailState, "request quiz")
        self.state = QuizState(
            course=current.course,
            attempt=quiz_engine.new_attempt(current.course.quiz),
        )
        logger.info(f"Quiz started for course: {current.course.id}")
        return self.state

    def select_answer(self, question_index: int, choice: int) -> QuizState:
        current = self._require(QuizState, "select answer")
        attempt = current.attempt.select(question_index, choice)
        quiz_engine.check_attempt(current.course.quiz, attempt)
        self.state = current.model_copy(update={"attempt": attempt})
        return self.state

    def submit(self) -> CertificateState:
        current = self._require(QuizState, "submit")
        quiz = current.course.quiz
        quiz_engine.check_attempt(quiz, current.attempt)
        result = quiz_engine.score(quiz, current.attempt)
        self.state = CertificateState(
            course=current.course,
            score=result,
            review=tuple(quiz_engine.review(quiz, current.attempt)),
        )
        logger.info(
            f"Quiz submitted for course {current.course.id}: "
            f"{result.percentage}% ({'passed' if result.passed else 'failed'})"
        )
        return self.state

    def set_learner_name(self, name: str) -> CertificateState:
        current = self._require(CertificateState, "set learner name")
        if not current.score.passed:
            raise InvalidState("Learner name can only be entered after passing the quiz")
        self.state = current.model_copy(update={"learner_name": name})
        return self.state

    def issue_certificate(self, issuer) -> Path:
        """Hand the passing result to `issuer` and return the rendered file.

        A RenderingFailure propagates and the session stays on the
        certificate screen with its score and name intact.
        """
        current = self._require(CertificateState, "issue certificate")
        if not current.score.passed:
            raise InvalidState("Certificates are only issued for a passing score")
        try:
            return issuer.issue(
                learner_name=current.learner_name,
                course_title=current.course.title,
                percentage=current.score.percentage,
            )
        except RenderingFailure:
            logger.warning(f"Certificate rendering failed for course {current.course.id}")
            raise

    def go_home(self) -> HomeState:
        if not isinstance(self.state, HomeState):
            logger.info(f"Returning home from the {self.state.screen} screen")
        self.state = HomeState()
        return self.state
