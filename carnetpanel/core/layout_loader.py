"""Panel layout loading and validation for YAML-based option catalogs and fields."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from carnetpanel.core.codec import resolve_setting_ref
from carnetpanel.core.errors import LayoutLoadError, LayoutValidationError
from carnetpanel.core.model import FIELD_KIND_SELECT, FieldSpec, OptionEntry, PanelLayout

PACKAGED_LAYOUT = "carnet.yaml"
USER_LAYOUT = "layout.yaml"
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


UniqueKeyLoader.yaml_implicit_resolvers = {
    key: list(value) for key, value in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

for first_char, mappings in list(UniqueKeyLoader.yaml_implicit_resolvers.items()):
    UniqueKeyLoader.yaml_implicit_resolvers[first_char] = [
        (tag, regexp)
        for tag, regexp in mappings
        if tag != "tag:yaml.org,2002:bool"
    ]


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise LayoutValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class LoadedLayout:
    layout: PanelLayout
    warnings: tuple[str, ...]


def _load_schema_validator() -> Any:
    schema_text = resources.files("carnetpanel.schemas").joinpath("layout.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def user_layout_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "carnetpanel" / USER_LAYOUT


def _read_yaml(path: Path | Traversable) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LayoutLoadError(f"Could not read layout file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise LayoutValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise LayoutValidationError(f"Layout file {path} must contain a mapping at root")
    return loaded


def _validate(doc: dict[str, Any], source: Path | Traversable) -> None:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise LayoutValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc


def _build_options(raw: dict[str, Any]) -> dict[str, tuple[OptionEntry, ...]]:
    return {
        name: tuple(OptionEntry(value=entry["value"], label=entry["label"]) for entry in entries)
        for name, entries in raw.items()
    }


def _build_fields(
    raw: list[dict[str, Any]],
    options: dict[str, tuple[OptionEntry, ...]],
    source: Path | Traversable,
) -> tuple[FieldSpec, ...]:
    fields: list[FieldSpec] = []
    seen: set[str] = set()
    for entry in raw:
        name = entry["name"]
        if name in seen:
            raise LayoutValidationError(f"Duplicate field '{name}' in {source}")
        seen.add(name)

        catalog = entry.get("options")
        if entry["kind"] == FIELD_KIND_SELECT:
            if catalog is None:
                raise LayoutValidationError(f"Select field '{name}' in {source} must name an options catalog")
            if catalog not in options:
                raise LayoutValidationError(
                    f"Field '{name}' in {source} references unknown options catalog '{catalog}'"
                )
        elif catalog is not None:
            raise LayoutValidationError(f"Field '{name}' in {source} is not a select and cannot have options")

        fields.append(
            FieldSpec(
                name=name,
                label=entry["label"],
                kind=entry["kind"],
                ref=resolve_setting_ref(name),
                options=catalog,
                size=int(entry.get("size", 30)),
            )
        )
    return tuple(fields)


def load_layout() -> LoadedLayout:
    warnings: list[str] = []

    packaged = resources.files("carnetpanel.layouts").joinpath(PACKAGED_LAYOUT)
    doc = _read_yaml(packaged)
    _validate(doc, packaged)
    if "options" not in doc or "fields" not in doc:
        raise LayoutValidationError(f"Packaged layout {packaged} must define options and fields")
    options = _build_options(doc["options"])
    raw_fields = doc["fields"]
    fields_source: Path | Traversable = packaged

    user_path = user_layout_path()
    if user_path.is_file():
        user_doc = _read_yaml(user_path)
        _validate(user_doc, user_path)
        for name, entries in _build_options(user_doc.get("options", {})).items():
            if name in options:
                warning = f"User options catalog '{name}' overrides packaged catalog"
                LOGGER.warning(warning)
                warnings.append(warning)
            options[name] = entries
        if "fields" in user_doc:
            warning = f"User field list from {user_path} replaces packaged fields"
            LOGGER.warning(warning)
            warnings.append(warning)
            raw_fields = user_doc["fields"]
            fields_source = user_path

    fields = _build_fields(raw_fields, options, fields_source)
    return LoadedLayout(layout=PanelLayout(options=options, fields=fields), warnings=tuple(warnings))
