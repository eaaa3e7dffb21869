"""
Tests for pool listing, validation and erasure-code profile resolution.
"""

import pytest

from stormgr.ceph.erasure_code import ErasureCodeProfile, parse_algorithm, resolve_profile
from stormgr.errors import CommandFailedError, InvalidRequestError, MalformedStateError
from stormgr.models import PoolType
from stormgr.pools import create_pool, list_pools, validate_pool
from stormgr.schemas import ErasureCodedConfig, Pool, ReplicationConfig
from tests.mocks import DEFAULT_EC_PROFILE, EC_POOL1_PROFILE, EC_POOL_PROPERTIES, RBD_POOL_PROPERTIES, MockConnection


def _cluster():
    def handle(cmd):
        prefix = cmd["prefix"]
        if prefix == "osd lspools":
            return b'[{"poolnum":0,"poolname":"rbd"},{"poolnum":1,"poolname":"ecPool1"}]', ""
        if prefix == "osd pool get":
            return (RBD_POOL_PROPERTIES if cmd["pool"] == "rbd" else EC_POOL_PROPERTIES).encode(), ""
        if prefix == "osd erasure-code-profile get":
            return (DEFAULT_EC_PROFILE if cmd["name"] == "default" else EC_POOL1_PROFILE).encode(), ""
        if prefix == "osd erasure-code-profile set":
            return b"", ""
        if prefix == "osd pool create":
            return b"", f"pool '{cmd['pool']}' created"
        raise CommandFailedError(f"unexpected {prefix}")

    return MockConnection(handle)


def test_list_pools_in_lspools_order():
    conn = _cluster()

    rbd, ec = list_pools(conn)

    assert (rbd.pool_name, rbd.pool_num, rbd.type) == ("rbd", 0, PoolType.REPLICATED)
    assert rbd.replication_config.size == 1
    assert (ec.pool_name, ec.pool_num, ec.type) == ("ecPool1", 1, PoolType.ERASURE_CODED)
    assert ec.erasure_coded_config == ErasureCodedConfig(
        data_chunk_count=2, coding_chunk_count=1, algorithm="jerasure::reed_sol_van"
    )
    assert conn.prefixes() == [
        "osd lspools",
        "osd pool get",
        "osd pool get",
        "osd erasure-code-profile get",
    ]


def test_list_pools_aborts_on_bad_properties():
    def handle(cmd):
        if cmd["prefix"] == "osd lspools":
            return b'[{"poolnum":0,"poolname":"rbd"}]', ""
        return b'{"size":1}{"min_si', ""

    with pytest.raises(MalformedStateError):
        list_pools(MockConnection(handle))


@pytest.mark.parametrize(
    "pool",
    [
        Pool(pool_name="", type=PoolType.REPLICATED, replication_config=ReplicationConfig(size=3)),
        Pool(pool_name="   ", type=PoolType.REPLICATED, replication_config=ReplicationConfig(size=3)),
        Pool(pool_name="p1"),
        Pool(pool_name="p1", type=PoolType.REPLICATED),
        Pool(pool_name="p1", type=PoolType.ERASURE_CODED,
             erasure_coded_config=ErasureCodedConfig(data_chunk_count=2, coding_chunk_count=0)),
        Pool(pool_name="p1", type=PoolType.ERASURE_CODED,
             erasure_coded_config=ErasureCodedConfig(data_chunk_count=2, coding_chunk_count=1, algorithm="jerasure")),
    ],
)
def test_validate_pool_rejects(pool):
    with pytest.raises(InvalidRequestError):
        validate_pool(pool)


def test_invalid_pool_sends_no_commands():
    conn = _cluster()

    with pytest.raises(InvalidRequestError):
        create_pool(conn, Pool(pool_name="p1", type=PoolType.REPLICATED), 100)
    assert conn.commands == []


def test_create_replicated_pool_returns_cluster_status():
    conn = _cluster()
    pool = Pool(pool_name="p1", type=PoolType.REPLICATED, replication_config=ReplicationConfig(size=3))

    assert create_pool(conn, pool, 64) == "pool 'p1' created"
    assert conn.commands == [
        {"prefix": "osd pool create", "pool": "p1", "pg_num": 64, "pool_type": "replicated", "size": 3}
    ]


def test_resolve_profile_writes_requested_redundancy():
    # ecPool1_ecprofile already exists on the cluster with k=2, m=1
    conn = _cluster()

    profile = resolve_profile(conn, "ecPool1", 4, 2)

    assert profile.name == "ecPool1_ecprofile"
    assert (profile.data_chunks, profile.coding_chunks) == (4, 2)
    set_cmd = conn.commands[-1]
    assert set_cmd["prefix"] == "osd erasure-code-profile set"
    assert set_cmd["profile"] == ["k=4", "m=2", "plugin=jerasure", "technique=reed_sol_van"]


def test_create_erasure_coded_pool_command_sequence():
    conn = _cluster()
    pool = Pool(
        pool_name="ecPool1",
        type=PoolType.ERASURE_CODED,
        erasure_coded_config=ErasureCodedConfig(data_chunk_count=4, coding_chunk_count=2),
    )

    assert create_pool(conn, pool, 100) == "pool 'ecPool1' created"
    assert conn.prefixes() == [
        "osd erasure-code-profile get",
        "osd erasure-code-profile set",
        "osd pool create",
    ]
    assert conn.commands[-1]["erasure_code_profile"] == "ecPool1_ecprofile"


def test_resolve_profile_uses_requested_algorithm():
    conn = _cluster()

    profile = resolve_profile(conn, "p2", 4, 2, "isa::cauchy")

    assert profile.algorithm == "isa::cauchy"
    set_cmd = conn.commands[-1]
    assert set_cmd["prefix"] == "osd erasure-code-profile set"
    assert set_cmd["name"] == "p2_ecprofile"
    assert set_cmd["profile"] == ["k=4", "m=2", "plugin=isa", "technique=cauchy"]
    assert "osd erasure-code-profile get" not in conn.prefixes()


def test_resolve_profile_falls_back_to_default_profile():
    conn = _cluster()

    profile = resolve_profile(conn, "p2", 3, 1)

    assert (profile.plugin, profile.technique) == ("jerasure", "reed_sol_van")
    assert conn.prefixes() == [
        "osd erasure-code-profile get",
        "osd erasure-code-profile set",
    ]


def test_parse_algorithm():
    assert parse_algorithm("jerasure::reed_sol_van") == ("jerasure", "reed_sol_van")
    for bad in ("jerasure", "::reed_sol_van", "jerasure::"):
        with pytest.raises(InvalidRequestError):
            parse_algorithm(bad)


def test_profile_settings_include_extras():
    profile = ErasureCodeProfile("p_ecprofile", 2, 1, "jerasure", "reed_sol_van", {"w": "8"})

    assert profile.to_settings() == ["k=2", "m=1", "plugin=jerasure", "technique=reed_sol_van", "w=8"]
