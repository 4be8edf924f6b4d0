from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from errors import InvalidAttempt


class Lesson(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    content: str


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str
    options: Tuple[str, ...]
    answer_index: int

    @field_validator('options')
    @classmethod
    def validate_options(cls, v):
        if len(v) < 2:
            raise ValueError('A question needs at least two options')
        return v

    @model_validator(mode='after')
    def validate_answer_index(self):
        if not 0 <= self.answer_index < len(self.options):
            raise ValueError(
                f'answer_index {self.answer_index} is outside the {len(self.options)} options'
            )
        return self


class Quiz(BaseModel):
    model_config = ConfigDict(frozen=True)

    questions: Tuple[Question, ...]
    pass_mark: int = Field(default=70, ge=0, le=100)


class Course(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    lessons: Tuple[Lesson, ...]
    quiz: Quiz


class QuizAttempt(BaseModel):
    """Selected option index per question, None while unanswered"""
    model_config = ConfigDict(frozen=True)

    selections: Tuple[Optional[int], ...]

    def select(self, index: int, choice: int) -> "QuizAttempt":
        """Return a new attempt with slot `index` set to `choice`"""
        if not 0 <= index < len(self.selections):
            raise InvalidAttempt(
                f"Question {index} does not exist in an attempt of {len(self.selections)} slots"
            )
        selections = list(self.selections)
        selections[index] = choice
        return QuizAttempt(selections=tuple(selections))

    @property
    def answered(self) -> int:
        return sum(1 for s in self.selections if s is not None)


class Score(BaseModel):
    model_config = ConfigDict(frozen=True)

    percentage: int = Field(ge=0, le=100)
    passed: bool


class QuestionReview(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str
    chosen: Optional[str] = None
    correct: str
    is_correct: bool


# Session screens. Each state carries exactly the data its screen needs.

class HomeState(BaseModel):
    model_config = ConfigDict(frozen=True)

    screen: Literal["home"] = "home"


class CourseDetailState(BaseModel):
    model_config = ConfigDict(frozen=True)

    screen: Literal["course"] = "course"
    course: Course


class QuizState(BaseModel):
    model_config = ConfigDict(frozen=True)

    screen: Literal["quiz"] = "quiz"
    course: Course
    attempt: QuizAttempt


class CertificateState(BaseModel):
    model_config = ConfigDict(frozen=True)

    screen: Literal["certificate"] = "certificate"
    course: Course
    score: Score
    review: Tuple[QuestionReview, ...] = ()
    learner_name: str = ""


SessionState = Annotated[
    Union[HomeState, CourseDetailState, QuizState, CertificateState],
    Field(discriminator="screen"),
]
