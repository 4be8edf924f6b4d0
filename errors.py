class AcademyError(Exception):
    """Base class for all academy errors"""


class CatalogError(AcademyError):
    """The catalog file could not be read or failed validation"""


class InvalidQuiz(AcademyError):
    """A quiz cannot be scored, e.g. it has no questions"""


class InvalidAttempt(AcademyError):
    """An attempt does not fit the quiz it is scored against"""


class InvalidState(AcademyError):
    """A session transition was fired from a screen that does not allow it"""


class CourseNotFound(InvalidState):
    """The selected course id is not in the catalog"""


class RenderingFailure(AcademyError):
    """The certificate document could not be produced"""
