import json

import pytest
import requests
import responses
from responses import matchers

from stackops.openstack.client import OpenStack, OpenStackError
from stackops.openstack.project import Project, create_project

BASE = "http://keystone.example.com/v3"


@pytest.fixture
def rsps():
    with responses.RequestsMock() as mock:
        yield mock


@pytest.fixture
def client():
    return OpenStack(requests.Session(), BASE, region="regionOne")


def _list(rsps, projects):
    rsps.add(
        responses.GET,
        f"{BASE}/projects",
        json={"projects": projects},
        match=[matchers.query_param_matcher({"name": "service", "domain_id": "default"})],
    )


def test_existing_project_is_reused(rsps, client):
    _list(rsps, [{"id": "p1"}])
    assert create_project(client, Project("service", "Service project", "default")) == "p1"
    assert len(rsps.calls) == 1


def test_missing_project_is_created(rsps, client):
    _list(rsps, [])
    rsps.add(responses.POST, f"{BASE}/projects", status=201, json={"project": {"id": "new"}})
    assert create_project(client, Project("service", "Service project", "default")) == "new"
    body = json.loads(rsps.calls[1].request.body)
    assert body == {
        "project": {"name": "service", "description": "Service project", "domain_id": "default"}
    }


def test_multiple_projects_raise(rsps, client):
    _list(rsps, [{"id": "p1"}, {"id": "p2"}])
    with pytest.raises(OpenStackError, match='multiple projects named "service" found'):
        create_project(client, Project("service", domain_id="default"))


def test_list_failure_propagates(rsps, client):
    rsps.add(responses.GET, f"{BASE}/projects", status=401, body="denied")
    with pytest.raises(OpenStackError) as info:
        create_project(client, Project("service", domain_id="default"))
    assert info.value.status_code == 401