"""Unit tests for PValueManualConfig, parse_y_position and AnnotationDescriptor."""

import numpy as np
import pandas as pd
import pytest

from pvalueplot.pvalue_manual.annotation_state import (
    AnnotationDescriptor,
    AnnotationMode,
    ColumnY,
    LiteralY,
    PValueManualConfig,
    parse_y_position,
)


def test_parse_y_position_string_is_column():
    assert parse_y_position("y.position") == ColumnY("y.position")


def test_parse_y_position_numbers_are_literal():
    assert parse_y_position(29) == LiteralY((29.0,))
    assert parse_y_position([29, 35, 39]) == LiteralY((29.0, 35.0, 39.0))
    assert parse_y_position(np.array([1.5, 2.5])) == LiteralY((1.5, 2.5))


@pytest.mark.parametrize("value", [None, True, [], ["a", 1], {"y": 1}])
def test_parse_y_position_rejects_other_types(value):
    with pytest.raises(TypeError):
        parse_y_position(value)


def test_config_defaults():
    cfg = PValueManualConfig()
    assert cfg.label == "p"
    assert cfg.y_position == "y.position"
    assert cfg.xmin is None
    assert cfg.xmin_column == "group1"
    assert cfg.xmax == "group2"
    assert cfg.x is None
    assert cfg.effective_label_size == pytest.approx(3.88)
    assert cfg.remove_bracket is False


def test_config_label_size_defaults_to_size():
    assert PValueManualConfig(size=5.0).effective_label_size == 5.0
    assert PValueManualConfig(size=5.0, label_size=2.0).effective_label_size == 2.0


def test_config_from_dict_accepts_dotted_and_underscored_names():
    cfg = PValueManualConfig.from_dict({
        "label": "p.adj",
        "y.position": [29, 35, 39],
        "remove_bracket": True,
        "tip.length": 0.05,
        "xmax": None,
    })
    assert cfg.label == "p.adj"
    assert cfg.y_position == [29, 35, 39]
    assert cfg.remove_bracket is True
    assert cfg.tip_length == 0.05
    assert cfg.xmax is None


def test_config_from_dict_unknown_option_raises():
    with pytest.raises(ValueError) as exc_info:
        PValueManualConfig.from_dict({"lable": "p"})
    assert "lable" in str(exc_info.value)


def test_config_to_dict_uses_dotted_names():
    d = PValueManualConfig(y_position=(1, 2), label_size=3.0).to_dict()
    assert d["y.position"] == [1, 2]
    assert d["label.size"] == 3.0
    assert d["remove.bracket"] is False
    assert PValueManualConfig.from_dict(d).y_position == [1, 2]


def test_descriptor_rows_text_mode_has_no_xmax():
    data = pd.DataFrame({
        "label": ["a", "b"],
        "xmin": ["1", "2"],
        "xmax": [None, None],
        "y.position": [1.0, 2.0],
    })
    desc = AnnotationDescriptor(mode=AnnotationMode.TEXT, data=data)
    assert len(desc) == 2
    assert desc.rows() == [("a", "1", None, 1.0), ("b", "2", None, 2.0)]
