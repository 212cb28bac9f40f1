"""Diagram metadata records consumed by the circuit renderer.

Each record describes one rendered operation: its kind, horizontal
position, the vertical positions of its control and target lines, its
label and width, and optionally nested child records.  Classically
controlled groups split their children into two branches: index 0 is
rendered when the classical bit is 0, index 1 when it is 1.

Records are frozen dataclasses; nothing in the argument parser or the
executor builds or walks them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union


class GateType(IntEnum):
    """Operation kinds, numbered as the renderer expects."""

    MEASURE = 0
    CNOT = 1
    SWAP = 2
    UNITARY = 3
    CONTROLLED_UNITARY = 4
    CLASSICAL_CONTROLLED = 5
    GROUP = 6
    INVALID = 7


# A target is either one y coordinate or, for (controlled) unitaries, a
# group of y coordinates rendered as one box.
TargetY = Union[float, tuple[float, ...]]


class MetadataError(ValueError):
    """Raised when a metadata record or document is malformed."""


@dataclass(frozen=True)
class DiagramMetadata:
    """Rendering metadata for a single operation.

    Parameters
    ----------
    type:
        The operation kind.
    x:
        Centre x coordinate.
    controls_y:
        y coordinates of control lines.
    targets_y:
        y coordinates of target lines, or groups of them.
    label:
        Text drawn on the operation.
    width:
        Rendered width.
    display_args:
        Argument text drawn under the label.
    children:
        Nested records of a group.
    conditional_children:
        ``(when_zero, when_one)`` branches of a classically controlled group.
    html_class:
        HTML class attached to the rendered element.
    data_attributes:
        Custom data attributes attached to the rendered element.
    """

    type: GateType
    x: float
    controls_y: tuple[float, ...] = field(default=())
    targets_y: tuple[TargetY, ...] = field(default=())
    label: str = ""
    width: float = 0
    display_args: str | None = None
    children: tuple["DiagramMetadata", ...] | None = None
    conditional_children: tuple[
        tuple["DiagramMetadata", ...], tuple["DiagramMetadata", ...]
    ] | None = None
    html_class: str | None = None
    data_attributes: dict[str, str] | None = None

    def __post_init__(self) -> None:
        if self.conditional_children is not None and len(self.conditional_children) != 2:
            raise MetadataError(
                f"conditional_children must have exactly 2 branches, "
                f"got {len(self.conditional_children)}"
            )

    @property
    def is_group(self) -> bool:
        """Return True for records that may carry children."""
        return self.type in (GateType.GROUP, GateType.CLASSICAL_CONTROLLED)
