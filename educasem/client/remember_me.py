# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Remember-me preference for the login form.

The preference and the remembered email live in a small JSON file. Storage
problems are logged and never raised: losing the preference must not
break the login form.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

REMEMBER_ME_KEY = "remember_me"
SAVED_EMAIL_KEY = "saved_email"


class RememberMe:
    """File backed remember-me preference.

    Attributes:
        remember_me: Whether the email should be remembered.
        saved_email: Remembered email, empty when none.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self.remember_me = False
        self.saved_email = ""
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            self.remember_me = data.get(REMEMBER_ME_KEY) is True
            self.saved_email = str(data.get(SAVED_EMAIL_KEY) or "")
        except (OSError, ValueError, AttributeError) as e:
            logger.error("Error loading remember me data: %s", str(e))

    def _write(self, data: dict[str, object]) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data), encoding="utf-8")
            return True
        except OSError as e:
            logger.error("Error saving remember me data: %s", str(e))
            return False

    def _stored(self) -> dict[str, object]:
        data: dict[str, object] = {REMEMBER_ME_KEY: self.remember_me}
        if self.saved_email:
            data[SAVED_EMAIL_KEY] = self.saved_email
        return data

    def toggle(self) -> bool:
        """Flip the preference; turning it off forgets the email.

        Returns:
            The new preference.
        """
        self.remember_me = not self.remember_me
        if not self.remember_me:
            self.saved_email = ""
        self._write(self._stored())
        return self.remember_me

    def save_email(self, email: str) -> None:
        """Remember an email, only when the preference is on."""
        if not self.remember_me or not email.strip():
            return
        self.saved_email = email.strip()
        self._write(self._stored())

    def clear_saved_data(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Error clearing saved data: %s", str(e))
            return
        self.remember_me = False
        self.saved_email = ""
