# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Static catalog content.

Instructor ids match the instructor accounts seeded in the user store.
"""

from educasem.domains.catalog.models import (
    CourseDetail,
    CourseSection,
    InstructorProfile,
    SocialLinks,
    Video,
)

_PLACEHOLDER = (
    "Lorem ipsum dolor sit amet consectetur adipisicing elit. Maxime mollitia "
    "molestiae quas vel sint commodi repudiandae consequuntur voluptatum laborum "
    "numquam blanditiis harum."
)

_WEB_SECTIONS = [
    CourseSection(
        id=1,
        title="Section 1",
        videos=[
            Video(id=1, title="Video 1", duration="10:30", is_preview=True),
            Video(id=2, title="Video 2", duration="12:15", is_preview=True),
            Video(id=3, title="Video 3", duration="08:45"),
            Video(id=4, title="Video 4", duration="13:30"),
        ],
    ),
    CourseSection(
        id=2,
        title="Section 2",
        videos=[
            Video(id=7, title="Video 1", duration="15:00"),
            Video(id=8, title="Video 2", duration="12:30"),
            Video(id=9, title="Video 3", duration="12:30"),
        ],
    ),
    CourseSection(
        id=3,
        title="Section 3",
        videos=[
            Video(id=10, title="Video 1", duration="20:00"),
            Video(id=11, title="Video 2", duration="15:00"),
        ],
    ),
]

COURSES: tuple[CourseDetail, ...] = (
    CourseDetail(
        id=1,
        title="Web Development Fundamentals",
        description=_PLACEHOLDER,
        instructor_id="2",
        hours=45,
        classes=120,
        price=99,
        topics=["HTML", "CSS", "JavaScript", "Accessibility"],
        resources=24,
        articles=12,
        sections=_WEB_SECTIONS,
    ),
    CourseDetail(
        id=2,
        title="Python for Data Analysis",
        description=_PLACEHOLDER,
        instructor_id="2",
        hours=30,
        classes=85,
        price=79,
        topics=["pandas", "Visualization", "Statistics"],
        resources=18,
        articles=9,
        sections=[
            CourseSection(
                id=1,
                title="Getting started",
                videos=[
                    Video(id=1, title="Installing Python", duration="06:20", is_preview=True),
                    Video(id=2, title="Notebooks", duration="11:05"),
                ],
            ),
        ],
    ),
    CourseDetail(
        id=3,
        title="UX Design Essentials",
        description=_PLACEHOLDER,
        instructor_id="4",
        hours=60,
        classes=150,
        price=120,
        topics=["Research", "Wireframing", "Prototyping", "Usability testing"],
        resources=30,
        articles=20,
        sections=[
            CourseSection(
                id=1,
                title="Design thinking",
                videos=[
                    Video(id=1, title="What is UX", duration="09:40", is_preview=True),
                    Video(id=2, title="User interviews", duration="14:10"),
                    Video(id=3, title="Personas", duration="12:00"),
                ],
            ),
        ],
    ),
)

INSTRUCTORS: tuple[InstructorProfile, ...] = (
    InstructorProfile(
        id="2",
        name="Carlos Mendez",
        profession="Software Engineer",
        avatar="/images/avatars/instructor.jpg",
        students=1250,
        bio=[_PLACEHOLDER, _PLACEHOLDER],
        social=SocialLinks(
            website="https://educasem.com/instructors/2",
            linkedin="https://www.linkedin.com/",
            youtube="https://www.youtube.com/",
        ),
    ),
    InstructorProfile(
        id="4",
        name="Ana Rodriguez",
        profession="Product Designer",
        avatar="/images/avatars/instructor2.jpg",
        students=830,
        bio=[_PLACEHOLDER],
        social=SocialLinks(
            instagram="https://www.instagram.com/",
            tiktok="https://www.tiktok.com/",
        ),
    ),
)
