"""
Tests for lsblk-based disk discovery.
"""
from stormgr.inventory.discovery import parse_disks

LSBLK_OUTPUT = {
    "blockdevices": [
        {"name": "sda", "type": "disk", "size": 500107862016, "rota": True, "fstype": None,
         "children": [{"name": "sda1", "type": "part", "size": 500106813440, "rota": True, "fstype": "ext4"}]},
        {"name": "sdb", "type": "disk", "size": 1000204886016, "rota": "1", "fstype": None},
        {"name": "nvme0n1", "type": "disk", "size": 256060514304, "rota": False, "fstype": "xfs"},
        {"name": "sr0", "type": "rom", "size": 1073741312, "rota": True, "fstype": None},
        {"name": "loop0", "type": "loop", "size": 4096, "rota": False, "fstype": "squashfs"},
    ]
}


def test_only_whole_disks_are_reported():
    disks = parse_disks(LSBLK_OUTPUT)

    assert [d.size for d in disks] == [500107862016, 1000204886016, 256060514304]
    assert all(d.type == "disk" for d in disks)


def test_empty_means_no_filesystem_and_no_partitions():
    sda, sdb, nvme = parse_disks(LSBLK_OUTPUT)

    assert sda.empty is False
    assert sdb.empty is True
    assert nvme.empty is False


def test_rotational_flag_accepts_strings_and_bools():
    sda, sdb, nvme = parse_disks(LSBLK_OUTPUT)

    assert sda.rotational is True
    assert sdb.rotational is True
    assert nvme.rotational is False


def test_no_block_devices():
    assert parse_disks({}) == []
    assert parse_disks({"blockdevices": None}) == []
