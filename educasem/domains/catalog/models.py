# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Catalog models: courses, their sections and videos, and instructors."""

from pydantic import BaseModel, Field, computed_field


def duration_to_seconds(duration: str) -> int:
    """Convert a ``mm:ss`` (or ``hh:mm:ss``) duration to seconds."""
    seconds = 0
    for part in duration.split(":"):
        seconds = seconds * 60 + int(part)
    return seconds


class Video(BaseModel):
    """A single class of a course."""

    id: int
    title: str
    duration: str
    is_preview: bool = False

    @property
    def seconds(self) -> int:
        return duration_to_seconds(self.duration)


class CourseSection(BaseModel):
    """Ordered group of videos."""

    id: int
    title: str
    videos: list[Video] = Field(default_factory=list)

    @computed_field
    @property
    def total_classes(self) -> int:
        return len(self.videos)

    @computed_field
    @property
    def total_minutes(self) -> int:
        """Section length, rounded up to whole minutes."""
        return -(-sum(video.seconds for video in self.videos) // 60)


class CourseSummary(BaseModel):
    """Course card shown in listings and on instructor profiles."""

    id: int
    title: str
    description: str
    instructor_id: str
    hours: int
    classes: int
    price: int
    language: str = "Spanish"


class CourseDetail(CourseSummary):
    """Full course preview page."""

    topics: list[str] = Field(default_factory=list)
    resources: int = 0
    articles: int = 0
    certificate: bool = True
    sections: list[CourseSection] = Field(default_factory=list)

    @computed_field
    @property
    def total_sections(self) -> int:
        return len(self.sections)

    @computed_field
    @property
    def total_videos(self) -> int:
        return sum(section.total_classes for section in self.sections)

    @computed_field
    @property
    def preview_videos(self) -> int:
        return sum(
            1 for section in self.sections for video in section.videos if video.is_preview
        )


class SocialLinks(BaseModel):
    website: str | None = None
    facebook: str | None = None
    instagram: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    youtube: str | None = None
    tiktok: str | None = None


class Instructor(BaseModel):
    """Instructor card shown in listings."""

    id: str
    name: str
    profession: str
    avatar: str | None = None
    students: int = 0


class InstructorProfile(Instructor):
    """Public instructor profile with biography and courses."""

    bio: list[str] = Field(default_factory=list)
    social: SocialLinks = Field(default_factory=SocialLinks)
    courses: list[CourseSummary] = Field(default_factory=list)

    @computed_field
    @property
    def total_courses(self) -> int:
        return len(self.courses)
