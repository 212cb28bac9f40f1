"""Serialization of diagram metadata to and from JSON and YAML.

The serialized form uses the renderer's field names (``controlsY``,
``targetsY``, ``displayArgs``, ``conditionalChildren``, ``htmlClass``,
``dataAttributes``) and encodes ``type`` as the renderer's integer.
Optional fields that are unset are omitted.

A document is a list of top-level records; a single record object is
accepted on input as a one-element document.

Usage
-----
::

    from magicline.diagram import MetadataSerializer

    serializer = MetadataSerializer()
    text = serializer.to_json(records)
    assert serializer.from_json(text) == records
"""
from __future__ import annotations

import json
from collections.abc import Sequence

import yaml

from magicline.diagram.metadata import DiagramMetadata, GateType, MetadataError, TargetY


class MetadataSerializer:
    """Converts between ``DiagramMetadata`` records and plain data."""

    # ------------------------------------------------------------------
    # Serialization (records → data)
    # ------------------------------------------------------------------

    def to_dict(self, record: DiagramMetadata) -> dict[str, object]:
        """Serialize one record, recursing into its children."""
        data: dict[str, object] = {
            "type": int(record.type),
            "x": record.x,
            "controlsY": list(record.controls_y),
            "targetsY": [list(t) if isinstance(t, tuple) else t for t in record.targets_y],
            "label": record.label,
            "width": record.width,
        }
        if record.display_args is not None:
            data["displayArgs"] = record.display_args
        if record.children is not None:
            data["children"] = [self.to_dict(c) for c in record.children]
        if record.conditional_children is not None:
            zero, one = record.conditional_children
            data["conditionalChildren"] = [
                [self.to_dict(c) for c in zero],
                [self.to_dict(c) for c in one],
            ]
        if record.html_class is not None:
            data["htmlClass"] = record.html_class
        if record.data_attributes is not None:
            data["dataAttributes"] = dict(record.data_attributes)
        return data

    def to_data(self, records: Sequence[DiagramMetadata]) -> list[dict[str, object]]:
        return [self.to_dict(r) for r in records]

    def to_json(self, records: Sequence[DiagramMetadata], indent: int = 2) -> str:
        """Serialize a document to a JSON string."""
        return json.dumps(self.to_data(records), indent=indent, ensure_ascii=False)

    def to_yaml(self, records: Sequence[DiagramMetadata]) -> str:
        """Serialize a document to a YAML string."""
        return yaml.dump(
            self.to_data(records), default_flow_style=False, allow_unicode=True, sort_keys=False
        )

    # ------------------------------------------------------------------
    # Deserialization (data → records)
    # ------------------------------------------------------------------

    def from_dict(self, data: object) -> DiagramMetadata:
        """Deserialize one record.

        Raises
        ------
        MetadataError
            If required fields are missing or have the wrong type.
        """
        if not isinstance(data, dict):
            raise MetadataError(f"Expected a metadata object, got {type(data).__name__}")
        for required in ("type", "x"):
            if required not in data:
                raise MetadataError(f"Metadata record is missing {required!r}")

        children = data.get("children")
        conditional = data.get("conditionalChildren")
        if conditional is not None:
            if not isinstance(conditional, list) or len(conditional) != 2:
                raise MetadataError("conditionalChildren must be a list of exactly 2 branches")
            conditional_children = (self._records(conditional[0]), self._records(conditional[1]))
        else:
            conditional_children = None

        attributes = data.get("dataAttributes")
        if attributes is not None and not isinstance(attributes, dict):
            raise MetadataError("dataAttributes must be an object")

        return DiagramMetadata(
            type=self._gate_type(data["type"]),
            x=self._number(data["x"], "x"),
            controls_y=tuple(self._number(y, "controlsY") for y in self._list(data, "controlsY")),
            targets_y=tuple(self._target(t) for t in self._list(data, "targetsY")),
            label=str(data.get("label", "")),
            width=self._number(data.get("width", 0), "width"),
            display_args=data.get("displayArgs"),
            children=self._records(children) if children is not None else None,
            conditional_children=conditional_children,
            html_class=data.get("htmlClass"),
            data_attributes={str(k): str(v) for k, v in attributes.items()} if attributes else attributes,
        )

    def from_data(self, data: object) -> list[DiagramMetadata]:
        """Deserialize a document: a list of records or a single record."""
        if isinstance(data, dict):
            return [self.from_dict(data)]
        return list(self._records(data))

    def from_json(self, text: str) -> list[DiagramMetadata]:
        """Deserialize a document from a JSON string."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MetadataError(f"Invalid JSON: {exc.msg} at line {exc.lineno}") from exc
        return self.from_data(data)

    def from_yaml(self, text: str) -> list[DiagramMetadata]:
        """Deserialize a document from a YAML string."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise MetadataError(f"Invalid YAML: {exc}") from exc
        return self.from_data(data)

    # ------------------------------------------------------------------
    # Field helpers
    # ------------------------------------------------------------------

    def _records(self, data: object) -> tuple[DiagramMetadata, ...]:
        if not isinstance(data, list):
            raise MetadataError(f"Expected a list of metadata records, got {type(data).__name__}")
        return tuple(self.from_dict(d) for d in data)

    @staticmethod
    def _list(data: dict[str, object], key: str) -> list[object]:
        value = data.get(key, [])
        if not isinstance(value, list):
            raise MetadataError(f"{key} must be a list")
        return value

    @staticmethod
    def _number(value: object, key: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MetadataError(f"{key} must be a number, got {value!r}")
        return value

    def _target(self, value: object) -> TargetY:
        if isinstance(value, list):
            return tuple(self._number(v, "targetsY") for v in value)
        return self._number(value, "targetsY")

    @staticmethod
    def _gate_type(value: object) -> GateType:
        try:
            if isinstance(value, str):
                return GateType[value.upper()]
            if isinstance(value, int) and not isinstance(value, bool):
                return GateType(value)
        except (KeyError, ValueError):
            pass
        raise MetadataError(f"Unknown gate type {value!r}")
