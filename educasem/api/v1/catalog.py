# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Public catalog endpoints.

- GET /courses - Course cards
- GET /courses/{course_id} - Course preview with sections and videos
- GET /instructors - Instructor cards
- GET /instructors/{instructor_id} - Instructor profile with courses
"""

from fastapi import APIRouter, Depends, HTTPException, status

from educasem.api.dependencies import get_catalog_service
from educasem.domains.catalog import (
    CatalogService,
    CourseDetail,
    CourseSummary,
    Instructor,
    InstructorProfile,
)

router = APIRouter()


@router.get("/courses", response_model=list[CourseSummary], summary="List courses")
async def list_courses(
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[CourseSummary]:
    return catalog.list_courses()


@router.get("/courses/{course_id}", response_model=CourseDetail, summary="Course preview")
async def get_course(
    course_id: int,
    catalog: CatalogService = Depends(get_catalog_service),
) -> CourseDetail:
    """Get a course with its sections, videos and preview flags.

    Raises:
        HTTPException: 404 if the course does not exist.
    """
    course = catalog.get_course(course_id)
    if course is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Course {course_id} not found",
        )
    return course


@router.get("/instructors", response_model=list[Instructor], summary="List instructors")
async def list_instructors(
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[Instructor]:
    return catalog.list_instructors()


@router.get(
    "/instructors/{instructor_id}",
    response_model=InstructorProfile,
    summary="Instructor profile",
)
async def get_instructor(
    instructor_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> InstructorProfile:
    """Get an instructor's public profile.

    Raises:
        HTTPException: 404 if the instructor does not exist.
    """
    instructor = catalog.get_instructor(instructor_id)
    if instructor is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Instructor {instructor_id} not found",
        )
    return instructor
