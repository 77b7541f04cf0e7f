"""
pvalueplot: Overlay manually computed p-values on Plotly figures.

This package provides:
- stat_pvalue_manual: draw brackets or text labels from a table of test results
- resolve_pvalue_annotations: the same resolution step without rendering
- Logging utilities for library and application use

For logging configuration in standalone scripts/demos:
    ```python
    from pvalueplot.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from pvalueplot.utils.logging import configure_logging, get_logger

from pvalueplot.pvalue_manual import (
    AmbiguousRemovalWarning,
    AnnotationDescriptor,
    AnnotationMode,
    MissingColumnError,
    PValueManualConfig,
    resolve_pvalue_annotations,
    stat_pvalue_manual,
)

# Keep pvalueplot logs from reaching root until an application configures logging.
_logger = logging.getLogger("pvalueplot")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "AmbiguousRemovalWarning",
    "AnnotationDescriptor",
    "AnnotationMode",
    "MissingColumnError",
    "PValueManualConfig",
    "configure_logging",
    "get_logger",
    "resolve_pvalue_annotations",
    "stat_pvalue_manual",
]

__version__ = "0.1.0"
