"""
Coordination store client.

The store holds desired cluster configuration and discovered node facts as
/-separated keys. The control plane relies on:
- read-after-write consistency per key
- ordered enumeration of the children below a key prefix
- no client-side caching (every call crosses the store's own boundary)

SqlCoordinationStore implements the contract on one SQLAlchemy table and
opens one session per call, so a single instance can be shared by all
request threads.
"""

import logging
import posixpath
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError

from stormgr.errors import KeyNotFoundError, StoreError
from stormgr.models import StoreEntry

logger = logging.getLogger(__name__)

STORE_ROOT = "/stormgr"
SERVICES_KEY = STORE_ROOT + "/services/ceph"
CLUSTER_NAME_KEY = SERVICES_KEY + "/name"
DESIRED_MONITORS_KEY = SERVICES_KEY + "/monitor/desired"
NODES_CONFIG_KEY = STORE_ROOT + "/nodes/config"


def join_key(*parts: str) -> str:
    return posixpath.join(*parts)


def _normalize(key: str) -> str:
    key = "/" + key.strip("/")
    return posixpath.normpath(key)


class CoordinationStore(ABC):
    """Key/value contract consumed by the inventory, monitor and API code"""

    @abstractmethod
    def get(self, key: str) -> str:
        """Return the value at key, raising KeyNotFoundError when absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Create or overwrite key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key; removing a missing key is not an error."""

    @abstractmethod
    def delete_tree(self, prefix: str) -> None:
        """Remove prefix and every key below it."""

    @abstractmethod
    def get_children(self, prefix: str) -> List[str]:
        """Names of the direct children below prefix, in key order ([] if none)."""


def get_value_or_default(store: CoordinationStore, key: str, default: str = "") -> str:
    """Read key, mapping only a missing key to default (other failures propagate)."""
    try:
        return store.get(key)
    except KeyNotFoundError:
        return default


class SqlCoordinationStore(CoordinationStore):
    """Coordination store backed by the store_entries table"""

    def __init__(self, session_factory):
        """
        Args:
            session_factory: SQLAlchemy session factory bound to the store database
        """
        self.session_factory = session_factory

    def get(self, key: str) -> str:
        key = _normalize(key)
        db = self.session_factory()
        try:
            entry = db.scalars(select(StoreEntry).where(StoreEntry.key == key)).first()
        except SQLAlchemyError as e:
            logger.error(f"Store read failed for {key}: {e}")
            raise StoreError(f"failed to read {key}: {e}") from e
        finally:
            db.close()

        if entry is None:
            raise KeyNotFoundError(key)
        return entry.value

    def set(self, key: str, value: str) -> None:
        key = _normalize(key)
        db = self.session_factory()
        try:
            entry = db.scalars(select(StoreEntry).where(StoreEntry.key == key)).first()
            if entry is None:
                db.add(StoreEntry(key=key, value=value))
            else:
                entry.value = value
                entry.updated_at = datetime.utcnow()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Store write failed for {key}: {e}")
            raise StoreError(f"failed to write {key}: {e}") from e
        finally:
            db.close()

    def delete(self, key: str) -> None:
        key = _normalize(key)
        self._delete_where(StoreEntry.key == key, key)

    def delete_tree(self, prefix: str) -> None:
        prefix = _normalize(prefix)
        self._delete_where(
            or_(StoreEntry.key == prefix, StoreEntry.key.startswith(prefix + "/", autoescape=True)),
            prefix,
        )

    def _delete_where(self, clause, description: str) -> None:
        db = self.session_factory()
        try:
            db.execute(delete(StoreEntry).where(clause))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Store delete failed for {description}: {e}")
            raise StoreError(f"failed to delete {description}: {e}") from e
        finally:
            db.close()

    def get_children(self, prefix: str) -> List[str]:
        prefix = _normalize(prefix)
        base = prefix.rstrip("/") + "/"
        db = self.session_factory()
        try:
            keys = db.scalars(
                select(StoreEntry.key)
                .where(StoreEntry.key.startswith(base, autoescape=True))
                .order_by(StoreEntry.key)
            ).all()
        except SQLAlchemyError as e:
            logger.error(f"Store enumeration failed for {prefix}: {e}")
            raise StoreError(f"failed to list {prefix}: {e}") from e
        finally:
            db.close()

        children: List[str] = []
        seen = set()
        for key in keys:
            child = key[len(base):].split("/", 1)[0]
            if child and child not in seen:
                seen.add(child)
                children.append(child)
        return children


def get_cluster_name(store: CoordinationStore, default: Optional[str] = None) -> str:
    return get_value_or_default(store, CLUSTER_NAME_KEY, default or "")


def set_cluster_name(store: CoordinationStore, name: str) -> None:
    store.set(CLUSTER_NAME_KEY, name)
