"""Manual p-value annotations (brackets or text) for Plotly figures."""

from pvalueplot.pvalue_manual.annotation_state import (
    AnnotationDescriptor,
    AnnotationMode,
    ColumnY,
    LiteralY,
    PValueManualConfig,
)
from pvalueplot.pvalue_manual.errors import AmbiguousRemovalWarning, MissingColumnError
from pvalueplot.pvalue_manual.figure_annotator import (
    add_bracket_annotations,
    add_text_labels,
    stat_pvalue_manual,
)
from pvalueplot.pvalue_manual.resolver import resolve_pvalue_annotations

__all__ = [
    "AmbiguousRemovalWarning",
    "AnnotationDescriptor",
    "AnnotationMode",
    "ColumnY",
    "LiteralY",
    "MissingColumnError",
    "PValueManualConfig",
    "add_bracket_annotations",
    "add_text_labels",
    "resolve_pvalue_annotations",
    "stat_pvalue_manual",
]
