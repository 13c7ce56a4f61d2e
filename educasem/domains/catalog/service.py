# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Read-only catalog lookups for course previews and instructor profiles."""

from typing import Iterable

from educasem.domains.catalog.data import COURSES, INSTRUCTORS
from educasem.domains.catalog.models import (
    CourseDetail,
    CourseSummary,
    Instructor,
    InstructorProfile,
)


class CatalogService:
    """Serves the course and instructor catalog.

    Attributes:
        _courses: Courses keyed by id.
        _instructors: Instructor profiles keyed by id.
    """

    def __init__(
        self,
        courses: Iterable[CourseDetail] = COURSES,
        instructors: Iterable[InstructorProfile] = INSTRUCTORS,
    ) -> None:
        self._courses = {course.id: course for course in courses}
        self._instructors = {instructor.id: instructor for instructor in instructors}

    def list_courses(self) -> list[CourseSummary]:
        return [
            CourseSummary.model_validate(course.model_dump(include=set(CourseSummary.model_fields)))
            for course in self._courses.values()
        ]

    def get_course(self, course_id: int) -> CourseDetail | None:
        return self._courses.get(course_id)

    def list_instructors(self) -> list[Instructor]:
        return [
            Instructor.model_validate(
                instructor.model_dump(include=set(Instructor.model_fields))
            )
            for instructor in self._instructors.values()
        ]

    def get_instructor(self, instructor_id: str) -> InstructorProfile | None:
        """Instructor profile with the courses they teach."""
        instructor = self._instructors.get(instructor_id)
        if instructor is None:
            return None
        courses = [
            summary for summary in self.list_courses() if summary.instructor_id == instructor_id
        ]
        return instructor.model_copy(update={"courses": courses})
