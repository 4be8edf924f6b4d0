import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ValidationError, field_validator

from errors import CatalogError, CourseNotFound, InvalidQuiz
from models import Course

logger = logging.getLogger(__name__)


class CatalogFile(BaseModel):
    version: int
    courses: Tuple[Course, ...]

    @field_validator('courses')
    @classmethod
    def validate_courses(cls, v):
        if not v:
            raise ValueError("Catalog must contain at least one course")
        seen = set()
        for course in v:
            if course.id in seen:
                raise ValueError(f"Duplicate course id: {course.id}")
            seen.add(course.id)
        return v


class CourseCatalog:
    """Read-only set of courses, keyed by id, in display order"""

    def __init__(self, courses: Tuple[Course, ...], version: int = 1):
        self.version = version
        self._courses = tuple(courses)
        self._by_id = {course.id: course for course in self._courses}
        if not self._courses:
            raise CatalogError("Catalog must contain at least one course")
        if len(self._by_id) != len(self._courses):
            raise CatalogError("Course ids must be unique across the catalog")
        for course in self._courses:
            if not course.quiz.questions:
                raise InvalidQuiz(f"Course '{course.id}' has a quiz with no questions")

    @classmethod
    def from_dict(cls, catalog_data: Dict[str, Any]) -> "CourseCatalog":
        """Validate raw catalog data and build a catalog from it"""
        try:
            catalog_file = CatalogFile(**catalog_data)
        except ValidationError as e:
            logger.error(f"Catalog validation failed: {str(e)}")
            raise CatalogError(f"Invalid catalog structure: {str(e)}") from e
        return cls(catalog_file.courses, version=catalog_file.version)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "CourseCatalog":
        """Load the catalog file at `path`"""
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                catalog_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading catalog {path}: {str(e)}")
            raise CatalogError(f"Cannot read catalog {path}: {str(e)}") from e

        if not isinstance(catalog_data, dict):
            raise CatalogError("Catalog data must be a JSON object")

        catalog = cls.from_dict(catalog_data)
        logger.info(f"Catalog v{catalog.version} loaded from {path}: {len(catalog)} courses")
        return catalog

    def __len__(self) -> int:
        return len(self._courses)

    def __iter__(self):
        return iter(self._courses)

    def __contains__(self, course_id: str) -> bool:
        return course_id in self._by_id

    def list_courses(self) -> List[Course]:
        """All courses in display order"""
        return list(self._courses)

    def find(self, course_id: str) -> Optional[Course]:
        return self._by_id.get(course_id)

    def get(self, course_id: str) -> Course:
        course = self._by_id.get(course_id)
        if course is None:
            raise CourseNotFound(f"No course with id '{course_id}'")
        return course
