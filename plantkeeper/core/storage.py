"""PlantKeeper Storage - key-value persistence for the garden snapshot."""

import logging
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from plantkeeper.models.garden import AppState, CareLog, Site, User, UserPreferences
from plantkeeper.models.store import StoredValue

logger = logging.getLogger("plantkeeper.storage")

T = TypeVar("T")

DEFAULT_USER_ID = "user-1"


class StorageKey(str, Enum):
    USER = "user"
    SITES = "sites"
    CARE_LOGS = "care_logs"
    APP_STATE = "app_state"


class StorageError(IOError):
    """Raised when the underlying store cannot be read or written."""


class KeyedStore(Generic[T]):
    """Typed get/set/remove for a single storage key."""

    def __init__(self, storage: "Storage", key: StorageKey, adapter: TypeAdapter):
        self.storage = storage
        self.key = key
        self.adapter = adapter

    def get(self) -> T | None:
        raw = self.storage.get_data(self.key)
        if raw is None:
            return None
        try:
            return self.adapter.validate_python(raw)
        except ValidationError as e:
            logger.error(f"Corrupt data for key {self.key.value}: {e}")
            raise StorageError(f"Corrupt data for key {self.key.value!r}") from e

    def set(self, value: T) -> None:
        self.storage.set_data(self.key, self.adapter.dump_python(value, mode="json"))

    def remove(self) -> None:
        self.storage.remove_data(self.key)


class Storage:
    """Key-value store over SQLAlchemy.

    Each call runs in its own short session. Absent keys read as None;
    any database failure is logged and raised as StorageError.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self.user: KeyedStore[User] = KeyedStore(self, StorageKey.USER, TypeAdapter(User))
        self.sites: KeyedStore[list[Site]] = KeyedStore(self, StorageKey.SITES, TypeAdapter(list[Site]))
        self.care_logs: KeyedStore[list[CareLog]] = KeyedStore(
            self, StorageKey.CARE_LOGS, TypeAdapter(list[CareLog])
        )
        self.app_state: KeyedStore[AppState] = KeyedStore(self, StorageKey.APP_STATE, TypeAdapter(AppState))

    def _session(self) -> Session:
        return self.session_factory()

    # ── Raw operations ────────────────────────────────────────────────────────

    def get_data(self, key: StorageKey) -> Any | None:
        try:
            with self._session() as session:
                record = session.get(StoredValue, key.value)
                return record.value if record else None
        except SQLAlchemyError as e:
            logger.error(f"Error getting data for key {key.value}: {e}")
            raise StorageError(f"Could not read {key.value!r}") from e

    def set_data(self, key: StorageKey, value: Any) -> None:
        try:
            with self._session() as session:
                record = session.get(StoredValue, key.value)
                if record:
                    record.value = value
                else:
                    session.add(StoredValue(key=key.value, value=value))
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error setting data for key {key.value}: {e}")
            raise StorageError(f"Could not write {key.value!r}") from e

    def remove_data(self, key: StorageKey) -> None:
        try:
            with self._session() as session:
                record = session.get(StoredValue, key.value)
                if record:
                    session.delete(record)
                    session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error removing data for key {key.value}: {e}")
            raise StorageError(f"Could not remove {key.value!r}") from e

    # ── Utilities ─────────────────────────────────────────────────────────────

    def clear_all_data(self) -> None:
        try:
            with self._session() as session:
                session.query(StoredValue).delete()
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error clearing all data: {e}")
            raise StorageError("Could not clear storage") from e

    def get_all_keys(self) -> list[str]:
        try:
            with self._session() as session:
                return [row[0] for row in session.query(StoredValue.key).order_by(StoredValue.key).all()]
        except SQLAlchemyError as e:
            logger.error(f"Error getting all keys: {e}")
            raise StorageError("Could not list keys") from e

    def initialize_default_data(self, user_name: str, preferences: UserPreferences | None = None) -> None:
        """Create the default user and empty collections if they are missing."""
        if self.user.get() is None:
            self.user.set(User(
                id=DEFAULT_USER_ID,
                name=user_name,
                preferences=preferences or UserPreferences(),
            ))
            logger.info(f"Created default user {user_name!r}")

        if self.sites.get() is None:
            self.sites.set([])

        if self.care_logs.get() is None:
            self.care_logs.set([])
