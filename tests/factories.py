from pathlib import Path

from models import Course, Lesson, Question, Quiz


def make_course(course_id="it-basics", title="IT Basics", answers=(1,), pass_mark=70) -> Course:
    return Course(
        id=course_id,
        title=title,
        description=f"About {title}",
        lessons=(
            Lesson(title="Hardware vs Software", content="Things you can touch."),
            Lesson(title="Networking Basics", content="How computers talk."),
        ),
        quiz=Quiz(
            questions=tuple(
                Question(prompt=f"Question {idx + 1}?", options=("A", "B", "C"), answer_index=answer)
                for idx, answer in enumerate(answers)
            ),
            pass_mark=pass_mark,
        ),
    )


class FakeIssuer:
    """Stands in for CertificateIssuer and records what it was asked to render"""

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def issue(self, learner_name, course_title, percentage):
        self.calls.append((learner_name, course_title, percentage))
        if self.error is not None:
            raise self.error
        return Path("certificate.pdf")
