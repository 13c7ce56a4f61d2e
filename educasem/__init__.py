"""Educasem Backend.

Education platform API: course browsing, tutor profiles, and a credential
and OAuth based authentication flow with role-aware route protection.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
