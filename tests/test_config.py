"""Unit tests for solver configuration."""

import json

import pytest
from sudoku_engine.config import SolverConfig, load_config


class TestSolverConfig:
    """Tests for SolverConfig validation."""

    def test_defaults(self):
        """Test default settings."""
        config = SolverConfig()
        assert config.max_set_size == 5
        assert config.use_x_wing
        assert config.max_passes is None

    @pytest.mark.parametrize("kwargs", [
        {"max_set_size": 1},
        {"max_set_size": 9},
        {"max_set_size": True},
        {"use_x_wing": "yes"},
        {"max_passes": 0},
        {"max_passes": True},
        {"max_passes": 2.5},
    ])
    def test_invalid_values(self, kwargs):
        """Test that out-of-range and ill-typed settings are rejected."""
        with pytest.raises(ValueError):
            SolverConfig(**kwargs)

    def test_to_dict(self):
        """Test conversion to a plain dictionary."""
        config = SolverConfig(max_set_size=3, use_x_wing=False, max_passes=10)
        assert config.to_dict() == {"max_set_size": 3, "use_x_wing": False, "max_passes": 10}


class TestLoadConfig:
    """Tests for loading settings from JSON files."""

    def test_load_config(self, tmp_path):
        """Test loading a partial config file."""
        path = tmp_path / "solver.json"
        path.write_text(json.dumps({"max_set_size": 3, "max_passes": 500}))
        config = load_config(str(path))
        assert config.max_set_size == 3
        assert config.max_passes == 500
        assert config.to_dict() == {"max_set_size": 3, "use_x_wing": True, "max_passes": 500}

    def test_unknown_key(self, tmp_path):
        """Test that unknown keys are rejected."""
        path = tmp_path / "solver.json"
        path.write_text(json.dumps({"swordfish": True}))
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_boolean_pass_bound(self, tmp_path):
        """Test that a JSON true is not taken as a pass bound."""
        path = tmp_path / "solver.json"
        path.write_text(json.dumps({"max_passes": True}))
        with pytest.raises(ValueError, match="max_passes"):
            load_config(str(path))

    def test_not_an_object(self, tmp_path):
        """Test that a config file must hold a JSON object."""
        path = tmp_path / "solver.json"
        path.write_text(json.dumps([3]))
        with pytest.raises(ValueError):
            load_config(str(path))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
