import logging
from typing import List, Optional

from errors import InvalidAttempt, InvalidQuiz
from models import Question, QuestionReview, Quiz, QuizAttempt, Score

logger = logging.getLogger(__name__)


def new_attempt(quiz: Quiz) -> QuizAttempt:
    """Create an attempt with every question unanswered"""
    return QuizAttempt(selections=(None,) * len(quiz.questions))


def round_half_up_percentage(correct: int, total: int) -> int:
    """Percentage of correct answers, ties rounded up.

    Integer arithmetic keeps exact halves (e.g. 1/8 = 12.5%) from depending
    on float representation: 2/3 -> 67, 1/8 -> 13, 1/3 -> 33.
    """
    if total <= 0:
        raise InvalidQuiz("Cannot compute a percentage over zero questions")
    return (200 * correct + total) // (2 * total)


def _check_length(quiz: Quiz, attempt: QuizAttempt) -> None:
    if not quiz.questions:
        raise InvalidQuiz("Quiz has no questions")
    if len(attempt.selections) != len(quiz.questions):
        raise InvalidAttempt(
            f"Attempt has {len(attempt.selections)} selections "
            f"but the quiz has {len(quiz.questions)} questions"
        )


def check_attempt(quiz: Quiz, attempt: QuizAttempt) -> None:
    """Raise InvalidAttempt unless every answered slot indexes into its question's options"""
    _check_length(quiz, attempt)
    for idx, (question, selection) in enumerate(zip(quiz.questions, attempt.selections)):
        if selection is not None and not 0 <= selection < len(question.options):
            raise InvalidAttempt(
                f"Selection {selection} for question {idx + 1} is outside its {len(question.options)} options"
            )


def score(quiz: Quiz, attempt: QuizAttempt) -> Score:
    """Score an attempt against a quiz. No partial credit; unanswered slots never match."""
    _check_length(quiz, attempt)

    correct = sum(
        1 for question, selection in zip(quiz.questions, attempt.selections)
        if selection is not None and selection == question.answer_index
    )
    percentage = round_half_up_percentage(correct, len(quiz.questions))
    result = Score(percentage=percentage, passed=percentage >= quiz.pass_mark)

    logger.debug(
        f"Scored attempt: {correct}/{len(quiz.questions)} correct, "
        f"{percentage}% (pass mark {quiz.pass_mark}%)"
    )
    return result


def _option_text(question: Question, selection: Optional[int]) -> Optional[str]:
    if selection is None or not 0 <= selection < len(question.options):
        return None
    return question.options[selection]


def review(quiz: Quiz, attempt: QuizAttempt) -> List[QuestionReview]:
    """Per-question breakdown of an attempt"""
    _check_length(quiz, attempt)
    return [
        QuestionReview(
            prompt=question.prompt,
            chosen=_option_text(question, selection),
            correct=question.options[question.answer_index],
            is_correct=selection == question.answer_index,
        )
        for question, selection in zip(quiz.questions, attempt.selections)
    ]
