# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for Educasem.

Framework-free business logic. The API layer wires these services together
and translates their results into HTTP responses.

Domains:
    auth: Validation, password hashing, session tokens, login, registration.
    users: User models and the user store.
    catalog: Course previews and instructor profiles.
"""
