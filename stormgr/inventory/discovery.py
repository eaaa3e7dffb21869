"""
Local disk discovery.

Enumerates whole disks with lsblk (JSON, sizes in bytes). A disk counts as
empty when it carries neither a filesystem nor any partitions/holders.
"""

from __future__ import annotations
import json
import logging
import subprocess
from typing import Any, Dict, List

from stormgr.schemas import Disk

logger = logging.getLogger(__name__)

LSBLK_COLUMNS = "NAME,TYPE,SIZE,ROTA,FSTYPE"


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true"}
    return bool(value)


def lsblk_json() -> Dict[str, Any]:
    try:
        out = subprocess.check_output(
            ["lsblk", "-b", "-J", "-o", LSBLK_COLUMNS],
            stderr=subprocess.STDOUT,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        raise RuntimeError(f"lsblk command failed: {e}") from e
    try:
        return json.loads(out)
    except json.JSONDecodeError as e:
        raise RuntimeError(f"lsblk output is not valid JSON: {e}") from e


def parse_disks(data: Dict[str, Any]) -> List[Disk]:
    disks = []
    for dev in data.get("blockdevices") or []:
        if dev.get("type") != "disk":
            continue
        fstype = dev.get("fstype") or ""
        children = dev.get("children") or []
        disks.append(Disk(
            type=dev.get("type", "disk"),
            size=int(dev.get("size") or 0),
            rotational=_as_bool(dev.get("rota")),
            empty=not fstype and not children,
        ))
    return disks


def discover_disks() -> List[Disk]:
    disks = parse_disks(lsblk_json())
    logger.info(f"Discovered {len(disks)} disks ({sum(1 for d in disks if d.empty)} empty)")
    return disks
