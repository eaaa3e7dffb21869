"""
Erasure-code profiles.

A pool named P uses the profile "P_ecprofile". Creating an erasure-coded
pool always writes that profile first with the requested k/m, taking plugin
and technique from the requested algorithm or, failing that, from the
cluster's "default" profile.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from stormgr.ceph.command import execute_mon_command, execute_mon_command_json
from stormgr.ceph.connection import Connection
from stormgr.errors import InvalidRequestError, MalformedStateError

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"
PROFILE_SUFFIX = "_ecprofile"
ALGORITHM_SEPARATOR = "::"


@dataclass
class ErasureCodeProfile:
    name: str
    data_chunks: int  # k
    coding_chunks: int  # m
    plugin: str = ""
    technique: str = ""
    extra: Dict[str, str] = field(default_factory=dict)

    @property
    def algorithm(self) -> str:
        return f"{self.plugin}{ALGORITHM_SEPARATOR}{self.technique}"

    def to_settings(self) -> List[str]:
        settings = [f"k={self.data_chunks}", f"m={self.coding_chunks}"]
        if self.plugin:
            settings.append(f"plugin={self.plugin}")
        if self.technique:
            settings.append(f"technique={self.technique}")
        settings.extend(f"{key}={value}" for key, value in self.extra.items())
        return settings


def profile_name_for_pool(pool_name: str) -> str:
    return f"{pool_name}{PROFILE_SUFFIX}"


def parse_algorithm(algorithm: str) -> Tuple[str, str]:
    """'jerasure::reed_sol_van' -> ('jerasure', 'reed_sol_van')"""
    plugin, sep, technique = algorithm.partition(ALGORITHM_SEPARATOR)
    if not sep or not plugin or not technique:
        raise InvalidRequestError(f"algorithm must be '<plugin>::<technique>', got '{algorithm}'")
    return plugin, technique


def get_profile(conn: Connection, name: str) -> ErasureCodeProfile:
    settings = execute_mon_command_json(
        conn,
        {"prefix": "osd erasure-code-profile get", "name": name},
        f"get erasure code profile {name}",
    )
    if not isinstance(settings, dict):
        raise MalformedStateError(f"erasure code profile {name}: expected a JSON object")

    try:
        data_chunks = int(settings["k"])
        coding_chunks = int(settings["m"])
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedStateError(f"erasure code profile {name}: invalid k/m: {e}") from e

    extra = {k: str(v) for k, v in settings.items() if k not in {"k", "m", "plugin", "technique"}}
    return ErasureCodeProfile(
        name=name,
        data_chunks=data_chunks,
        coding_chunks=coding_chunks,
        plugin=str(settings.get("plugin", "")),
        technique=str(settings.get("technique", "")),
        extra=extra,
    )


def set_profile(conn: Connection, profile: ErasureCodeProfile) -> None:
    execute_mon_command(
        conn,
        {"prefix": "osd erasure-code-profile set", "name": profile.name, "profile": profile.to_settings()},
        f"set erasure code profile {profile.name}",
    )
    logger.info(f"Erasure code profile {profile.name} set: {profile.to_settings()}")


def resolve_profile(
    conn: Connection,
    pool_name: str,
    data_chunks: int,
    coding_chunks: int,
    algorithm: str = "",
) -> ErasureCodeProfile:
    """Write the pool's profile with the requested k/m (overwriting any existing one) and return it."""
    if algorithm:
        plugin, technique = parse_algorithm(algorithm)
    else:
        default = get_profile(conn, DEFAULT_PROFILE)
        plugin, technique = default.plugin, default.technique

    profile = ErasureCodeProfile(
        name=profile_name_for_pool(pool_name),
        data_chunks=data_chunks,
        coding_chunks=coding_chunks,
        plugin=plugin,
        technique=technique,
    )
    set_profile(conn, profile)
    return profile
