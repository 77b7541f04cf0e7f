"""Label templates: ``{field}`` placeholders filled from each row of the results table.

A label such as ``"p = {p.adj}"`` is rendered once per row. Field names may
contain dots (``p.adj``, ``y.position``) so ``str.format`` can't be used
directly; markers are matched with a regex instead. A marker may carry a
format spec after a colon, e.g. ``{p.adj:.2e}``.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

import pandas as pd

from pvalueplot.pvalue_manual.errors import MissingColumnError

# {field} or {field:spec}; field is anything but braces and colons
_FIELD_RE = re.compile(r"\{([^{}:]+)(?::([^{}]*))?\}")
_CURLY_RE = re.compile(r"[{}]")


def contains_curly_bracket(label: Any) -> bool:
    """True if label is a string containing ``{`` or ``}``."""
    return isinstance(label, str) and _CURLY_RE.search(label) is not None


def template_fields(template: str) -> list[str]:
    """Field names referenced by template, in order of appearance (duplicates removed)."""
    out: list[str] = []
    for m in _FIELD_RE.finditer(template):
        name = m.group(1).strip()
        if name not in out:
            out.append(name)
    return out


def _format_value(value: Any, spec: str | None) -> str:
    # missing values render as NA whatever the format spec
    if value is None or (pd.api.types.is_scalar(value) and not isinstance(value, str) and pd.isna(value)):
        return "NA"
    if spec:
        return format(value, spec)
    return str(value)


def render_label_template(template: str, row: Mapping[str, Any]) -> str:
    """Substitute each ``{field}`` marker in template with row[field].

    Args:
        template: Template string, e.g. ``"t-test, p = {p}"``.
        row: Mapping of field name to value for one row.

    Returns:
        The rendered label text.

    Raises:
        MissingColumnError: If a marker names a field not present in row.
    """

    def _sub(m: re.Match) -> str:
        name = m.group(1).strip()
        if name not in row:
            raise MissingColumnError(name, "label")
        return _format_value(row[name], m.group(2))

    return _FIELD_RE.sub(_sub, template)


def format_labels(df: pd.DataFrame, template: str) -> pd.Series:
    """Render template for every row of df.

    Returns:
        Series of label strings aligned with df.index.
    """
    for name in template_fields(template):
        if name not in df.columns:
            raise MissingColumnError(name, "label")
    records = df.to_dict(orient="records")
    return pd.Series(
        [render_label_template(template, rec) for rec in records],
        index=df.index,
        dtype=object,
    )
