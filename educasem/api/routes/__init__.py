# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Top level routes: health check and the page endpoints."""

from educasem.api.routes import health, pages

__all__ = ["health", "pages"]
