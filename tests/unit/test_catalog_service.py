# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the course and instructor catalog."""

import pytest

from educasem.domains.catalog import CatalogService, CourseDetail, CourseSummary
from educasem.domains.catalog.models import CourseSection, Video, duration_to_seconds


@pytest.fixture
def catalog() -> CatalogService:
    return CatalogService()


class TestDurations:
    """Tests for video and section durations."""

    @pytest.mark.parametrize(
        ("duration", "seconds"),
        [("10:30", 630), ("00:59", 59), ("1:02:03", 3723)],
    )
    def test_duration_to_seconds(self, duration: str, seconds: int) -> None:
        assert duration_to_seconds(duration) == seconds

    def test_section_minutes_round_up(self) -> None:
        section = CourseSection(
            id=1,
            title="Intro",
            videos=[Video(id=1, title="a", duration="01:00"), Video(id=2, title="b", duration="00:01")],
        )

        assert section.total_classes == 2
        assert section.total_minutes == 2


class TestCourses:
    """Tests for course lookups."""

    def test_list_courses_returns_summaries(self, catalog: CatalogService) -> None:
        courses = catalog.list_courses()

        assert [course.id for course in courses] == [1, 2, 3]
        assert all(type(course) is CourseSummary for course in courses)

    def test_course_detail_totals(self, catalog: CatalogService) -> None:
        """Test that course totals are derived from its sections."""
        course = catalog.get_course(1)

        assert isinstance(course, CourseDetail)
        assert course.title == "Web Development Fundamentals"
        assert course.total_sections == 3
        assert course.total_videos == 9
        assert course.preview_videos == 2
        assert [section.total_minutes for section in course.sections] == [45, 40, 35]

    def test_computed_fields_are_serialized(self, catalog: CatalogService) -> None:
        data = catalog.get_course(1).model_dump()

        assert data["total_videos"] == 9
        assert data["sections"][0]["total_classes"] == 4

    def test_unknown_course(self, catalog: CatalogService) -> None:
        assert catalog.get_course(999) is None


class TestInstructors:
    """Tests for instructor lookups."""

    def test_list_instructors(self, catalog: CatalogService) -> None:
        instructors = catalog.list_instructors()

        assert {instructor.id for instructor in instructors} == {"2", "4"}

    def test_instructor_profile_lists_their_courses(self, catalog: CatalogService) -> None:
        profile = catalog.get_instructor("2")

        assert profile.name == "Carlos Mendez"
        assert [course.id for course in profile.courses] == [1, 2]
        assert profile.total_courses == 2

    def test_profile_does_not_mutate_catalog(self, catalog: CatalogService) -> None:
        catalog.get_instructor("4")

        assert catalog.get_instructor("4").total_courses == 1

    def test_unknown_instructor(self, catalog: CatalogService) -> None:
        assert catalog.get_instructor("999") is None
