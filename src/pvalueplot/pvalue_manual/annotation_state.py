"""Configuration and result types for manual p-value annotations.

PValueManualConfig holds the caller's options, YPosition is the tagged
variant for the y.position option, and AnnotationDescriptor is what the
resolver hands to the rendering primitives.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, Optional, Sequence, Union

import numpy as np
import pandas as pd

# Default column names of a results table
DEFAULT_LABEL = "p"
DEFAULT_Y_POSITION = "y.position"
DEFAULT_XMIN = "group1"
DEFAULT_XMAX = "group2"

# Default style values (ggplot millimetre units for sizes)
DEFAULT_SIZE = 3.88
DEFAULT_BRACKET_SIZE = 0.3
DEFAULT_TIP_LENGTH = 0.03

# Columns of AnnotationDescriptor.data
DESCRIPTOR_COLUMNS = ["label", "xmin", "xmax", "y.position"]


class AnnotationMode(Enum):
    """How the resolved annotations are drawn."""
    BRACKET = "bracket"
    TEXT = "text"


@dataclass(frozen=True)
class LiteralY:
    """y.position given as numbers, tiled to the number of rows."""
    values: tuple[float, ...]


@dataclass(frozen=True)
class ColumnY:
    """y.position read from a column of the results table."""
    name: str


YPosition = Union[LiteralY, ColumnY]


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def parse_y_position(value: Any) -> YPosition:
    """Turn a y.position option into a LiteralY or ColumnY.

    Strings name a column. A single number or a sequence/array of numbers
    is a literal. Anything else raises TypeError.
    """
    if isinstance(value, (LiteralY, ColumnY)):
        return value
    if isinstance(value, str):
        return ColumnY(value)
    if _is_number(value):
        return LiteralY((float(value),))
    if isinstance(value, (Sequence, np.ndarray, pd.Series)) and not isinstance(value, bytes):
        values = list(value)
        if values and all(_is_number(v) for v in values):
            return LiteralY(tuple(float(v) for v in values))
    raise TypeError(
        f"y.position must be a column name, a number or a sequence of numbers; got {value!r}"
    )


@dataclass
class PValueManualConfig:
    """Options of stat_pvalue_manual().

    xmin=None means "use the default group1 column"; the resolver needs to
    know whether the caller chose xmin to decide if bracket removal may swap
    in the xmax column. label_size=None means "same as size".
    """
    label: str = DEFAULT_LABEL
    y_position: Any = DEFAULT_Y_POSITION  # column name, number or sequence of numbers
    xmin: Optional[str] = None
    xmax: Optional[str] = DEFAULT_XMAX     # None draws p-values as text
    x: Optional[str] = None                # text-only position column, overrides xmin/xmax
    size: float = DEFAULT_SIZE
    label_size: Optional[float] = None
    bracket_size: float = DEFAULT_BRACKET_SIZE
    tip_length: Union[float, Sequence[float]] = DEFAULT_TIP_LENGTH
    remove_bracket: bool = False
    extra: dict[str, Any] = field(default_factory=dict)  # passed through to the renderer

    @property
    def xmin_column(self) -> str:
        return self.xmin if self.xmin is not None else DEFAULT_XMIN

    @property
    def effective_label_size(self) -> float:
        return self.size if self.label_size is None else self.label_size

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary keyed by the dotted option names."""
        tip = self.tip_length
        if not _is_number(tip):
            tip = list(tip)
        y_pos = self.y_position
        if not isinstance(y_pos, str) and not _is_number(y_pos):
            y_pos = list(y_pos)
        return {
            "label": self.label,
            "y.position": y_pos,
            "xmin": self.xmin,
            "xmax": self.xmax,
            "x": self.x,
            "size": self.size,
            "label.size": self.label_size,
            "bracket.size": self.bracket_size,
            "tip.length": tip,
            "remove.bracket": self.remove_bracket,
            "extra": dict(self.extra),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PValueManualConfig":
        """Build a config from dotted or underscored option names.

        Unknown keys raise ValueError so typos don't silently fall back to defaults.
        """
        known = {
            "label", "y.position", "xmin", "xmax", "x", "size", "label.size",
            "bracket.size", "tip.length", "remove.bracket", "extra",
        }
        normalized = {str(k).replace("_", "."): v for k, v in data.items()}
        unknown = sorted(set(normalized) - known)
        if unknown:
            raise ValueError(f"Unknown stat_pvalue_manual option(s): {', '.join(unknown)}")
        label_size = normalized.get("label.size")
        return cls(
            label=str(normalized.get("label", DEFAULT_LABEL)),
            y_position=normalized.get("y.position", DEFAULT_Y_POSITION),
            xmin=normalized.get("xmin"),  # Can be None
            xmax=normalized.get("xmax", DEFAULT_XMAX),  # Can be None
            x=normalized.get("x"),  # Can be None
            size=float(normalized.get("size", DEFAULT_SIZE)),
            label_size=None if label_size is None else float(label_size),
            bracket_size=float(normalized.get("bracket.size", DEFAULT_BRACKET_SIZE)),
            tip_length=normalized.get("tip.length", DEFAULT_TIP_LENGTH),
            remove_bracket=bool(normalized.get("remove.bracket", False)),
            extra=dict(normalized.get("extra") or {}),
        )


@dataclass
class AnnotationDescriptor:
    """Resolved annotations, one row per comparison.

    Attributes:
        mode: BRACKET or TEXT.
        data: DataFrame with columns label, xmin, xmax, y.position. In TEXT
            mode xmax is all None and xmin is a pandas categorical.
        label_size: Label text size (ggplot mm).
        bracket_size: Bracket line width (ggplot mm).
        tip_length: Tip length(s) as a fraction of the y span.
        extra: Keyword arguments passed through to the renderer.
    """
    mode: AnnotationMode
    data: pd.DataFrame
    label_size: float = DEFAULT_SIZE
    bracket_size: float = DEFAULT_BRACKET_SIZE
    tip_length: Union[float, Sequence[float]] = DEFAULT_TIP_LENGTH
    extra: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.data)

    def rows(self) -> list[tuple[Any, Any, Any, float]]:
        """Return (label, xmin, xmax, y) per comparison; xmax is None in text mode."""
        out = []
        for label, xmin, xmax, y in zip(
            self.data["label"], self.data["xmin"], self.data["xmax"], self.data["y.position"]
        ):
            if pd.api.types.is_scalar(xmax) and not isinstance(xmax, str) and pd.isna(xmax):
                xmax = None
            out.append((label, xmin, xmax, y))
        return out
