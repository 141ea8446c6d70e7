"""Tests for shared utilities."""

import pytest
from pathlib import Path

from annotationidentity.utils import (
    closest_match,
    load_yaml_file,
    module_data_path,
    score_candidate,
)


class TestScoreCandidate:
    """Test suggestion scoring"""

    def test_exact(self):
        assert score_candidate("Pa", "Pa") == 100.0

    def test_case_insensitive(self):
        assert score_candidate("pa", "Pa") == 99.0

    def test_unrelated_scores_low(self):
        assert score_candidate("Xyz", "Pa") < 50


class TestClosestMatch:
    """Test did-you-mean suggestions"""

    def test_case_slip(self):
        assert closest_match("hz", ["Hz", "H", "N"]) == "Hz"

    def test_prefers_exact_case(self):
        assert closest_match("Pa", ["pa", "Pa"]) == "Pa"

    def test_below_threshold(self):
        assert closest_match("Xyz", ["Hz", "H", "N"]) is None

    def test_threshold_configurable(self):
        assert closest_match("mols", ["mol"], threshold=99) is None
        assert closest_match("mols", ["mol"], threshold=50) == "mol"

    def test_empty_inputs(self):
        assert closest_match("", ["Hz"]) is None
        assert closest_match("Hz", []) is None

    def test_accepts_generator(self):
        assert closest_match("Wb", (s for s in ["Wb", "W"])) == "Wb"


class TestLoadYamlFile:
    """Test YAML loading"""

    def test_load(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("symbols:\n  m:\n    name: metre\n", encoding="utf-8")
        assert load_yaml_file(path) == {"symbols": {"m": {"name": "metre"}}}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_yaml_file(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml_file(tmp_path / "missing.yaml")

    def test_module_data_path(self):
        from annotationidentity.units import unitnorm
        path = module_data_path(unitnorm.__file__, "unitconfig.yaml")
        assert path.exists()
        assert path.parent == Path(unitnorm.__file__).parent
