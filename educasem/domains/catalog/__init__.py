# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course and instructor catalog.

Exports:
    CatalogService: Lookups over the static catalog.
"""

from educasem.domains.catalog.models import (
    CourseDetail,
    CourseSection,
    CourseSummary,
    Instructor,
    InstructorProfile,
    Video,
)
from educasem.domains.catalog.service import CatalogService

__all__ = [
    "CatalogService",
    "CourseSummary",
    "CourseDetail",
    "CourseSection",
    "Video",
    "Instructor",
    "InstructorProfile",
]
