"""Rendering of configuration and script templates from a templates directory."""

from __future__ import annotations

import dataclasses
import enum
import os
from dataclasses import dataclass, field
from typing import Any, Mapping

import jinja2

__all__ = [
    "TType",
    "Template",
    "add",
    "lower",
    "get_templates_path",
    "get_all_templates",
    "execute_template",
    "execute_template_data",
    "execute_template_file",
    "get_template_data",
]

TEMPLATES_ENV_VAR = "OPERATOR_TEMPLATES"


class TType(str, enum.Enum):
    """Kind of templates, naming the sub-directory they live in."""

    SCRIPTS = "bin"
    CONFIG = "config"
    # content is owned by the user; created once, never updated
    CUSTOM = "custom"
    # no directory templates, only the additional ones
    NONE = "none"


@dataclass
class Template:
    """Description of a config map or secret to be rendered from templates."""

    name: str
    namespace: str
    type: TType
    instance_type: str = ""
    secret_type: str = "Opaque"
    additional_template: dict[str, str] = field(default_factory=dict)
    custom_data: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    config_options: dict[str, Any] | None = None
    skip_set_owner: bool = False
    version: str = ""


def add(x: int, y: int) -> int:
    """Template function: sum of two numbers."""
    return x + y


def lower(text: str) -> str:
    """Template function: lower-case a string."""
    return text.lower()


_ENVIRONMENT = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)
_ENVIRONMENT.globals.update(add=add, lower=lower)


def _context(data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return dict(data)
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return {f.name: getattr(data, f.name) for f in dataclasses.fields(data)}
    raise TypeError(f"unsupported template data type: {type(data).__name__}")


def get_templates_path() -> str:
    """Return the templates directory: $OPERATOR_TEMPLATES, or ./templates when unset or empty."""
    templates = os.environ.get(TEMPLATES_ENV_VAR, "")
    if templates:
        return templates
    return os.path.join(os.getcwd(), "templates")


def get_all_templates(path: str, kind: str, template_type: str, version: str) -> list[str]:
    """List template files in ``path/<kind>/<type>[/<version>]``, sorted, without sub-directories."""
    template_type = getattr(template_type, "value", template_type)
    parts = [path, kind.lower(), template_type]
    if version:
        parts.append(version)
    directory = os.path.join(*parts)
    try:
        names = sorted(os.listdir(directory))
    except (FileNotFoundError, NotADirectoryError):
        return []
    candidates = (os.path.join(directory, name) for name in names)
    return [candidate for candidate in candidates if not os.path.isdir(candidate)]


def execute_template_data(template_data: str, data: Any) -> str:
    """Render the template text with ``data``; a missing key is an error."""
    template = _ENVIRONMENT.from_string(template_data)
    return template.render(_context(data))


def execute_template(template_file: str, data: Any) -> str:
    """Render the template stored in ``template_file`` with ``data``."""
    with open(template_file, encoding="utf-8") as handle:
        content = handle.read()
    return execute_template_data(content, data)


def execute_template_file(filename: str, data: Any) -> str:
    """Render a template given by its path relative to the templates directory."""
    relative = filename.lstrip("/")
    full_path = os.path.normpath(os.path.join(get_templates_path(), relative))
    return execute_template(full_path, data)


def get_template_data(template: Template) -> dict[str, str]:
    """Render all templates described by ``template``, keyed by file name."""
    opts = template.config_options
    templates_path = get_templates_path()
    data: dict[str, str] = {}

    template_type = TType(template.type)
    if template_type is not TType.NONE:
        files = get_all_templates(
            templates_path, template.instance_type, template_type.value, template.version
        )
        for file in files:
            data[os.path.basename(file)] = execute_template(file, opts)

    for filename, file in template.additional_template.items():
        data[filename] = execute_template_file(file, opts)

    return data