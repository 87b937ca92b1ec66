"""Authenticated access to OpenStack service APIs."""

from __future__ import annotations

import contextlib
import enum
import logging
import os
import ssl
import tempfile
import weakref
from dataclasses import dataclass, field
from typing import Any, Mapping

import requests

__all__ = [
    "Availability",
    "TLSConfig",
    "AuthOpts",
    "OpenStackError",
    "OpenStack",
    "get_availability",
    "get_openstack_provider",
    "new_openstack",
    "get_nova_openstack_client",
]

_log = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 10.0


class Availability(str, enum.Enum):
    """Interface through which a service endpoint is reached."""

    ADMIN = "admin"
    INTERNAL = "internal"
    PUBLIC = "public"


def get_availability(endpoint_interface: str) -> Availability:
    """Map an endpoint interface name onto an :class:`Availability`."""
    try:
        return Availability(endpoint_interface)
    except ValueError:
        raise ValueError(f"endpoint interface {endpoint_interface} not known") from None


@dataclass
class TLSConfig:
    """TLS settings for talking to the cloud."""

    ca_certs: list[str] = field(default_factory=list)
    insecure: bool = False
    client_cert: str = ""
    client_key: str = ""


@dataclass
class AuthOpts:
    """Credentials and connection settings for authenticating against Keystone.

    ``scope`` may hold ``project_id``, ``project_name``, ``domain_id``,
    ``domain_name`` or ``system`` to request a specific token scope.
    """

    auth_url: str
    username: str = ""
    password: str = ""
    tenant_name: str = ""
    domain_name: str = ""
    region: str = ""
    scope: Mapping[str, Any] | None = None
    tls: TLSConfig | None = None


class OpenStackError(Exception):
    """Raised when the cloud rejects a request or returns something unexpected."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _versioned(url: str) -> str:
    url = url.rstrip("/")
    return url if url.endswith("/v3") else f"{url}/v3"


def _query(params: Mapping[str, Any] | None) -> dict[str, Any]:
    return {key: value for key, value in (params or {}).items() if value not in (None, "")}


def _raise_for_status(
    method: str, url: str, response: requests.Response, expected: tuple[int, ...]
) -> None:
    status = response.status_code
    if status in expected:
        return
    if status == 404:
        message = f"Resource not found: [{method} {url}], error message: {response.text}"
    else:
        message = (
            f"Expected HTTP response code {list(expected)} when accessing "
            f"[{method} {url}], but got {status} instead\n{response.text}"
        )
    raise OpenStackError(message, status_code=status)


def _remove_quietly(path: str) -> None:
    with contextlib.suppress(OSError):
        os.unlink(path)


def _configure_tls(session: requests.Session, tls: TLSConfig | None) -> None:
    if tls is None:
        return
    if tls.ca_certs:
        with tempfile.NamedTemporaryFile(
            "w", suffix=".pem", delete=False, encoding="utf-8"
        ) as bundle:
            bundle.write("\n".join(tls.ca_certs))
        weakref.finalize(session, _remove_quietly, bundle.name)
        session.verify = bundle.name
    if tls.insecure:
        session.verify = False
    if tls.client_cert and tls.client_key:
        # fail early on unreadable or mismatched key pairs
        ssl.create_default_context().load_cert_chain(tls.client_cert, tls.client_key)
        session.cert = (tls.client_cert, tls.client_key)


def _scope_body(cfg: AuthOpts) -> dict[str, Any] | None:
    scope = dict(cfg.scope or {})
    if scope:
        if scope.get("system"):
            return {"system": {"all": True}}
        if scope.get("project_id"):
            return {"project": {"id": scope["project_id"]}}
        if scope.get("project_name"):
            if scope.get("domain_id"):
                domain = {"id": scope["domain_id"]}
            elif scope.get("domain_name"):
                domain = {"name": scope["domain_name"]}
            else:
                raise ValueError("a project name scope needs a domain id or name")
            return {"project": {"name": scope["project_name"], "domain": domain}}
        if scope.get("domain_id"):
            return {"domain": {"id": scope["domain_id"]}}
        if scope.get("domain_name"):
            return {"domain": {"name": scope["domain_name"]}}
        raise ValueError("scope names no project, domain or system")
    if cfg.tenant_name:
        if not cfg.domain_name:
            raise ValueError("a tenant name needs a domain name")
        return {"project": {"name": cfg.tenant_name, "domain": {"name": cfg.domain_name}}}
    return None


@dataclass
class _Provider:
    session: requests.Session
    token: str
    catalog: list[dict[str, Any]]

    def endpoint_url(self, service_type: str, region: str, availability: Availability) -> str:
        for entry in self.catalog:
            if entry.get("type") != service_type:
                continue
            for endpoint in entry.get("endpoints", []):
                if endpoint.get("interface") != availability.value:
                    continue
                if region and region not in (endpoint.get("region_id"), endpoint.get("region")):
                    continue
                return endpoint["url"]
        raise OpenStackError(
            f"no {availability.value} {service_type} endpoint found in the service catalog"
        )


def _identity_body(cfg: AuthOpts) -> dict[str, Any]:
    user: dict[str, Any] = {"name": cfg.username}
    user.update(password=cfg.password)
    if cfg.domain_name:
        user["domain"] = {"name": cfg.domain_name}
    method_name = "password"
    method_body = {"user": user}
    identity: dict[str, Any] = {"methods": [method_name]}
    identity[method_name] = method_body
    return identity


def get_openstack_provider(cfg: AuthOpts) -> _Provider:
    """Authenticate with Keystone and return a provider holding the session and catalog."""
    session = requests.Session()
    _configure_tls(session, cfg.tls)

    auth: dict[str, Any] = {"identity": _identity_body(cfg)}
    scope = _scope_body(cfg)
    if scope is not None:
        auth["scope"] = scope

    url = f"{_versioned(cfg.auth_url)}/auth/tokens"
    response = session.post(url, json={"auth": auth}, timeout=DEFAULT_REQUEST_TIMEOUT)
    _raise_for_status("POST", url, response, (201,))
    token = response.headers.get("X-Subject-Token")
    if not token:
        raise OpenStackError("authentication response carried no token")
    catalog = (response.json().get("token") or {}).get("catalog") or []
    session.headers["X-Auth-Token"] = token
    return _Provider(session=session, token=token, catalog=catalog)


class OpenStack:
    """A client bound to one service endpoint of an authenticated session."""

    def __init__(
        self,
        session: requests.Session,
        endpoint: str,
        region: str = "",
        auth_url: str = "",
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self.session = session
        self.endpoint = endpoint.rstrip("/")
        self.region = region
        self.auth_url = auth_url
        self.timeout = timeout

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.endpoint}/{path.lstrip('/')}"

    def _request(
        self, method: str, url: str, expected: tuple[int, ...], **kwargs: Any
    ) -> requests.Response:
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        _raise_for_status(method, url, response, expected)
        return response

    @staticmethod
    def _json(response: requests.Response) -> dict[str, Any]:
        return response.json() if response.content else {}

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """GET a resource and return its JSON body."""
        response = self._request("GET", self._url(path), (200,), params=_query(params))
        return self._json(response)

    def list(
        self, path: str, key: str, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Return every item under ``key`` across all pages of a collection."""
        url: str | None = self._url(path)
        query: dict[str, Any] | None = _query(params)
        items: list[dict[str, Any]] = []
        seen: set[str] = set()
        while url and url not in seen:
            seen.add(url)
            data = self._json(self._request("GET", url, (200,), params=query))
            items.extend(data.get(key) or [])
            url = (data.get("links") or {}).get("next")
            query = None
        return items

    def post(self, path: str, body: Mapping[str, Any]) -> dict[str, Any]:
        """POST a JSON body and return the JSON reply."""
        response = self._request("POST", self._url(path), (200, 201, 202), json=body)
        return self._json(response)

    def patch(self, path: str, body: Mapping[str, Any]) -> dict[str, Any]:
        """PATCH a resource with a JSON body and return the JSON reply."""
        response = self._request("PATCH", self._url(path), (200,), json=body)
        return self._json(response)

    def put(self, path: str) -> None:
        """PUT to a resource without a body."""
        self._request("PUT", self._url(path), (200, 201, 204))

    def delete(self, path: str) -> None:
        """DELETE a resource."""
        self._request("DELETE", self._url(path), (200, 202, 204))


def new_openstack(cfg: AuthOpts) -> OpenStack:
    """Authenticate and return a client for the internal identity (v3) endpoint."""
    provider = get_openstack_provider(cfg)
    url = provider.endpoint_url("identity", cfg.region, Availability.INTERNAL)
    return OpenStack(provider.session, _versioned(url), cfg.region, cfg.auth_url)


def get_nova_openstack_client(
    cfg: AuthOpts, region: str, availability: Availability | str
) -> OpenStack:
    """Authenticate and return a client for the compute endpoint."""
    provider = get_openstack_provider(cfg)
    url = provider.endpoint_url("compute", region, get_availability(availability))
    return OpenStack(provider.session, url, cfg.region, cfg.auth_url)