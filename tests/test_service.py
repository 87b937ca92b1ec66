import pytest
import requests
import responses
from responses import matchers

from stackops.openstack.client import OpenStack, OpenStackError
from stackops.openstack.service import (
    SERVICE_NOT_FOUND,
    Service,
    ServiceNotFoundError,
    create_service,
    delete_service,
    get_service,
    update_service,
)

BASE = "http://keystone.example.com/v3"


@pytest.fixture
def rsps():
    with responses.RequestsMock() as mock:
        yield mock


@pytest.fixture
def client():
    return OpenStack(requests.Session(), BASE, region="regionOne")


def _services(rsps, stype, name, services):
    rsps.add(
        responses.GET,
        f"{BASE}/services",
        json={"services": services},
        match=[matchers.query_param_matcher({"type": stype, "name": name})],
    )


def test_get_service_found(rsps, client):
    _services(rsps, "image", "glance", [{"id": "s1", "type": "image", "name": "glance"}])
    assert get_service(client, "image", "glance")["id"] == "s1"


def test_get_service_not_found(rsps, client):
    _services(rsps, "image", "glance", [])
    with pytest.raises(ServiceNotFoundError) as excinfo:
        get_service(client, "image", "glance")
    assert str(excinfo.value) == f"glance {SERVICE_NOT_FOUND}"


def test_create_service_existing(rsps, client):
    _services(rsps, "image", "glance", [{"id": "s1"}])
    assert create_service(client, Service(name="glance", type="image")) == "s1"
    assert len(rsps.calls) == 1


def test_create_service_new(rsps, client):
    _services(rsps, "image", "glance", [])
    expected = {
        "service": {
            "type": "image",
            "enabled": True,
            "name": "glance",
            "description": "Image Service",
        }
    }
    rsps.add(
        responses.POST,
        f"{BASE}/services",
        json={"service": {"id": "s-new"}},
        status=201,
        match=[matchers.json_params_matcher(expected)],
    )
    service = Service(name="glance", type="image", description="Image Service", enabled=True)
    assert create_service(client, service) == "s-new"


def test_create_service_propagates_other_errors(rsps, client):
    rsps.add(responses.GET, f"{BASE}/services", status=500, body="boom")
    with pytest.raises(OpenStackError) as excinfo:
        create_service(client, Service(name="glance", type="image"))
    assert not isinstance(excinfo.value, ServiceNotFoundError)


def test_update_service_sends_body(rsps, client):
    expected = {
        "service": {"type": "image", "enabled": False, "name": "glance", "description": ""}
    }
    rsps.add(
        responses.PATCH,
        f"{BASE}/services/s1",
        json={"service": {"id": "s1"}},
        match=[matchers.json_params_matcher(expected)],
    )
    assert update_service(client, Service(name="glance", type="image"), "s1") is None
    assert rsps.calls[0].request.method == "PATCH"


def test_delete_service(rsps, client):
    rsps.add(responses.DELETE, f"{BASE}/services/s1", status=204)
    assert delete_service(client, "s1") is None
    assert rsps.calls[0].request.url == f"{BASE}/services/s1"


def test_delete_service_ignores_missing(rsps, client):
    rsps.add(responses.DELETE, f"{BASE}/services/gone", status=404, body="nope")
    assert delete_service(client, "gone") is None
    assert len(rsps.calls) == 1


def test_delete_service_raises_other_errors(rsps, client):
    rsps.add(responses.DELETE, f"{BASE}/services/s1", status=500, body="boom")
    with pytest.raises(OpenStackError) as excinfo:
        delete_service(client, "s1")
    assert excinfo.value.status_code == 500