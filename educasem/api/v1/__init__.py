# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API routes package.

Modules:
    auth: Sign-in, registration and session endpoints.
    catalog: Public course and instructor catalog endpoints.
"""

from fastapi import APIRouter

from educasem.api.v1 import auth, catalog

# Create the main API router
router = APIRouter(prefix="/api")

# Include domain routers
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(catalog.router, prefix="/catalog", tags=["Catalog"])

__all__ = ["router"]
