"""Diagram metadata module.

Exports the metadata record types consumed by the circuit renderer and
their serializer.
"""
from __future__ import annotations

from magicline.diagram.metadata import DiagramMetadata, GateType, MetadataError
from magicline.diagram.serializer import MetadataSerializer

__all__ = ["DiagramMetadata", "GateType", "MetadataError", "MetadataSerializer"]
