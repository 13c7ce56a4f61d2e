# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for Educasem.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime and calendar date helpers
"""

from educasem.utils.datetime import (
    format_iso,
    parse_date,
    utc_from_timestamp,
    utc_now,
    utc_today,
    whole_years_between,
)
from educasem.utils.logging import bind_context, clear_context, setup_logging

__all__ = [
    # datetime
    "utc_now",
    "utc_today",
    "utc_from_timestamp",
    "format_iso",
    "parse_date",
    "whole_years_between",
    # logging
    "setup_logging",
    "bind_context",
    "clear_context",
]
