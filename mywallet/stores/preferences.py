"""User settings persisted as a single JSON object under the "settings" key."""

import json
from typing import Any, Optional, Union

import structlog
from pydantic import ValidationError

from mywallet.audit import AuditLogger
from mywallet.models.audit import AuditEventBuilder
from mywallet.models.preferences import UserSettings
from mywallet.services.storage import SETTINGS_KEY, KeyValueStore, StorageError


logger = structlog.get_logger(__name__)


class PreferencesStore:
    """Loads, updates and saves the user's settings. Missing or bad data means defaults."""

    def __init__(
        self,
        storage: KeyValueStore,
        audit_logger: Optional[AuditLogger] = None,
        defaults: Optional[UserSettings] = None,
    ):
        self._storage = storage
        self._audit = audit_logger or AuditLogger()
        self._defaults = defaults or UserSettings()
        self._settings = self._load()

    def _load(self) -> UserSettings:
        try:
            raw = self._storage.get(SETTINGS_KEY)
        except StorageError as e:
            self._audit.log(AuditEventBuilder.load_failed(SETTINGS_KEY, str(e)))
            return self._defaults.model_copy()

        if not raw:
            return self._defaults.model_copy()

        try:
            return UserSettings.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            self._audit.log(AuditEventBuilder.load_failed(SETTINGS_KEY, str(e)))
            return self._defaults.model_copy()

    def _persist(self) -> bool:
        try:
            self._storage.set(
                SETTINGS_KEY,
                self._settings.model_dump_json(by_alias=True),
            )
            return True
        except StorageError as e:
            logger.error("store_save_failed", key=SETTINGS_KEY, error=str(e))
            self._audit.log(AuditEventBuilder.save_failed(SETTINGS_KEY, str(e)))
            return False

    def get(self) -> UserSettings:
        return self._settings

    def save(self, settings: Union[UserSettings, dict[str, Any]]) -> UserSettings:
        """Replace the settings wholesale."""
        if not isinstance(settings, UserSettings):
            settings = UserSettings.model_validate(settings)

        changed = [
            name for name in UserSettings.model_fields
            if getattr(settings, name) != getattr(self._settings, name)
        ]
        self._settings = settings
        self._persist()

        self._audit.log(AuditEventBuilder.settings_updated(changed))
        return settings

    def update(self, **changes: Any) -> UserSettings:
        """
        Change some settings, keeping the rest.

        Raises:
            pydantic.ValidationError: If a value is invalid
        """
        merged = self._settings.model_dump()
        merged.update(changes)
        return self.save(UserSettings.model_validate(merged))

    def reset(self) -> UserSettings:
        """Go back to the defaults."""
        return self.save(self._defaults.model_copy())

    def reload(self) -> None:
        self._settings = self._load()
