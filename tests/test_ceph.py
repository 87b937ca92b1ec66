import pytest

from stackops.storage.ceph import (
    Backend,
    Defaults,
    NoDefaultPoolError,
    PoolSpec,
    get_osd_caps,
    get_pool,
    get_rbd_user,
    validate_mons,
)


def test_get_pool_unknown_service_raises():
    with pytest.raises(NoDefaultPoolError, match="No default pool found"):
        get_pool({}, "foo")


def test_get_pool_configured_cinder_pool():
    assert get_pool({"cinder": PoolSpec("volumes")}, "cinder") == "volumes"


def test_get_pool_configured_overrides_default():
    assert get_pool({"nova": PoolSpec("custom")}, "nova") == "custom"


@pytest.mark.parametrize(
    "service, expected",
    [
        ("cinder", "volumes"),
        ("backup", "backups"),
        ("nova", "vms"),
        ("glance", "images"),
    ],
)
def test_get_pool_defaults(service, expected):
    assert get_pool({}, service) == expected


def test_get_rbd_user_default():
    assert get_rbd_user("") == "openstack"


def test_get_rbd_user_given():
    assert get_rbd_user("client") == "client"


def test_get_osd_caps_default():
    assert get_osd_caps({}) == "profile rbd pool=" + Defaults.CINDER_POOL.value


def test_get_osd_caps_ordered():
    caps = get_osd_caps({"cinder": PoolSpec("volumes"), "nova": PoolSpec("vms")})
    assert caps == "profile rbd pool=vms,profile rbd pool=volumes"


def test_get_osd_caps_skips_empty_names():
    caps = get_osd_caps({"cinder": PoolSpec(""), "nova": PoolSpec("vms")})
    assert caps == "profile rbd pool=vms"


def test_validate_mons_empty_string():
    assert validate_mons("") is False


def test_validate_mons_valid():
    assert validate_mons("192.168.2.2,192.168.2.3, 192.168.2.4") is True


def test_validate_mons_wrong():
    assert validate_mons("192.168.2.2,192.168.2.3,192.168.2") is False


def test_validate_mons_ipv6():
    assert validate_mons("fd00::1, fd00::2") is True


def test_backend_pools_used_by_helpers():
    backend = Backend(
        cluster_fsid="fsid",
        cluster_mon_hosts="192.168.2.2",
        client_key="placeholder",
        pools={"glance": PoolSpec("images")},
    )
    assert get_rbd_user(backend.user) == "openstack"
    assert get_pool(backend.pools, "glance") == "images"
    assert validate_mons(backend.cluster_mon_hosts) is True