# stackops

Building blocks for software that deploys and manages OpenStack services.

## What is inside

### `stackops.util`

- `env.get_env_var(key, base_default)` returns the value of an environment variable, or the default when it is unset.
- `funcs`:
  - `get_or(mapping, key, fallback)` returns the value, or the fallback when the key is missing or holds an empty string.
  - `is_set(mapping, key)` returns the value, or `False` when the key is missing.
  - `is_json(text)` returns `True` for a JSON object (or `null`) and raises `ValueError` for anything else.
  - `remove_index(items, index)` returns a new list without that element. An index out of range raises `IndexError`.
  - `string_in_slice(value, items)` checks whether the value is one of the items.
- `hashing`:
  - `object_hash(obj)` produces a stable SHA-256 based hash of a JSON-serialisable object, including dataclasses, enums and mappings. The hash is encoded by `safe_encode_string` into characters that are safe in resource names. An object that cannot be serialised raises `ValueError`.
  - `set_hash(hash_map, hash_type, hash_str)` stores a hash and returns the map together with a flag that says whether it changed.
  - `Hash` is a name/hash record.
- `maps`:
  - `merge_maps(base, *extra)` merges dictionaries; when a key repeats, the earliest value wins.
  - `merge_string_maps` works the same way but returns `None` for an empty result.
  - `sort_string_map_by_value(mapping)` returns `Pair(key, value)` items sorted by key.
- `templates` renders Jinja2 templates, with `add` and `lower` available as template functions. A missing variable is an error.
  - `execute_template_data(text, data)` renders a template string.
  - `execute_template(path, data)` renders a template file.
  - `execute_template_file(name, data)` renders a template file by its path relative to the templates directory.
  - `get_all_templates(path, kind, type, version)` lists the files in `<path>/<kind>/<type>[/<version>]`, sorted, leaving out sub-directories.
  - `get_template_data(Template(...))` renders every file of one `TType` (`SCRIPTS` = `bin`, `CONFIG` = `config`, `CUSTOM` = `custom`, `NONE` = none). It also renders each `additional_template`, and returns a dictionary keyed by file name.
  - `get_templates_path()` returns `$OPERATOR_TEMPLATES`, or `./templates` when that variable is unset or empty.

### `stackops.storage`

- `volumes`:
  - `VolMounts(volumes, mounts, propagation, extra_vol_type)` describes extra volumes and their mounts.
  - `VolMounts.propagate(services)` returns the volume sets that the given services should mount. Without a propagation policy, the volumes are always mounted.
  - `can_propagate` checks a single policy.
  - `PropagationType.EVERYWHERE` (`"All"`), `DBSYNC` and `COMPUTE` are the common policy values.
- `ceph`:
  - `get_pool(pools, service)` returns the configured pool, or the service default: `cinder` → `volumes`, `backup` → `backups`, `nova` → `vms`, `glance` → `images`. Any other service raises `NoDefaultPoolError`.
  - `get_rbd_user(user)` returns the user, or `openstack` when it is empty.
  - `get_osd_caps(pools)` builds the OSD caps ordered by pool name.
  - `validate_mons(ip_list)` checks a comma separated list of IP addresses.
  - `PoolSpec`, `Backend` and `Defaults` hold the settings.

### `stackops.openstack`

- `client`:
  - `new_openstack(AuthOpts(...))` authenticates against Keystone with a password and returns an `OpenStack` client for the internal identity endpoint. It can request a scope and apply TLS settings through `TLSConfig`.
  - `get_nova_openstack_client(cfg, region, availability)` returns a client for the compute endpoint instead.
  - `get_openstack_provider(cfg)` does only the authentication and returns the session, token and service catalog.
  - `OpenStack(session, endpoint, ...)` can also be built directly for any endpoint. It offers `get`, `list` (which follows paging links), `post`, `patch`, `put` and `delete`.
  - `get_availability(name)` maps `admin`, `internal` and `public` onto `Availability`.
- Create-if-missing helpers, each returning the resource ID:
  - `domain.create_domain`
  - `project.create_project`
  - `user.create_user`
  - `role.create_role`
  - `service.create_service`
  - `endpoint.create_endpoint`
  - `limits.create_limit`
  - `limits.create_or_update_registered_limit`
- Lookups, updates and deletions:
  - `user.get_user` and `user.delete_user`
  - `role.get_role`, `role.assign_user_role` and `role.assign_user_domain_role`
  - `service.get_service`, `service.update_service` and `service.delete_service`
  - `endpoint.get_endpoints`, `endpoint.update_endpoint` and `endpoint.delete_endpoint`
  - `limits.get_registered_limit`, `limits.delete_registered_limit`, `limits.list_registered_limits_by_resource_name` and `limits.list_registered_limits_by_service_id`
- `volume.volume_service_check(client, name)` tells whether a block storage service whose binary matches the name is up and enabled. The client has to point at a block storage endpoint.

If the cloud rejects a request, an `OpenStackError` is raised; it carries the HTTP status in `status_code`. When a lookup finds nothing, it raises `RoleNotFoundError`, `ServiceNotFoundError` or `UserNotFoundError`. All three are subclasses of `OpenStackError`. When a name matches more than one domain, project, user or limit, a plain `OpenStackError` is raised.

## Install

```
pip install .
```

Run the tests with:

```
pip install ".[test]"
pytest
```

## Examples

Render templates from `$OPERATOR_TEMPLATES/myservice/config/`:

```python
from stackops.util.templates import Template, TType, get_template_data

files = get_template_data(
    Template(
        name="myservice",
        namespace="default",
        type=TType.CONFIG,
        instance_type="myservice",
        config_options={"ServiceUser": "admin"},
    )
)
```

Configure Ceph:

```python
from stackops.storage.ceph import PoolSpec, get_osd_caps, validate_mons

get_osd_caps({"cinder": PoolSpec("volumes"), "nova": PoolSpec("vms")})
# 'profile rbd pool=vms,profile rbd pool=volumes'
validate_mons("192.168.2.2,192.168.2.3")
# True
```

Work with Keystone:

```python
from stackops.openstack.client import AuthOpts, new_openstack
from stackops.openstack.project import Project, create_project

password = "password"
client = new_openstack(
    AuthOpts(
        auth_url="https://keystone.example.com/v3",
        username="admin",
        password=password,
        tenant_name="admin",
        domain_name="Default",
        region="regionOne",
    )
)
project_id = create_project(client, Project(name="demo", description="Demo", domain_id="default"))
```

## What it does not do

This is a library only. It has no command-line tool and no controller loop. It does not talk to Kubernetes: it does not create config maps, secrets, jobs or routes from the data it renders.