"""
Chain Home Station Configuration Test Suite

Tests for YAML parsing, defaults, presets and validation of station
configuration files.

Test ID | Description                       | Reference
--------|-----------------------------------|-------------------------------
1       | Empty mapping gives defaults      | chainhome.physics.constants
2       | Shipped station file loads        | scenarios/default_station.yaml
3       | Signal preset with overrides      | early / late presets
4       | Invalid values rejected           | ValueError
5       | Missing file                      | FileNotFoundError
6       | Engine creation                   | StationEngine wired from config
"""

import os
import sys

import pytest
import yaml

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from chainhome.io.config_loader import StationConfig, StationConfigLoader, load_station_config
from chainhome.simulation.engine import StationEngine

DEFAULT_STATION = os.path.join(PROJECT_ROOT, "scenarios", "default_station.yaml")


def write_yaml(tmp_path, data, name="station.yaml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return str(path)


# =============================================================================
# TEST 1: Defaults
# =============================================================================


class TestDefaults:
    """Every section is optional."""

    def test_empty_mapping(self):
        assert StationConfigLoader.parse({}) == StationConfig()

    def test_empty_sections(self):
        config = StationConfigLoader.parse({"sweep": None, "population": None})
        assert config.sweep.width == 1200
        assert config.population.floor == 2

    def test_default_values(self):
        config = StationConfig()

        assert config.sector.limits == (110.0, 210.0)
        assert config.sweep.duration_s == 2.0
        assert config.sweep.persistence_enabled is False
        assert config.signal.sharpness == 8
        assert config.timing.time_compression == 60.0

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_station_config(str(path)) == StationConfig()


# =============================================================================
# TEST 2: Shipped Station File
# =============================================================================


class TestDefaultStationFile:
    """The example station file must stay loadable."""

    def test_loads(self):
        config = load_station_config(DEFAULT_STATION)

        assert config.name == "Chain Home - Bawdsey"
        assert config.seed is None
        assert config.sweep.persistence_enabled is True
        assert config.sweep.history_cap == 3
        assert config.signal == StationConfig().signal
        assert (config.population.initial_min, config.population.initial_max) == (2, 5)

    def test_roundtrip_through_to_dict(self):
        config = load_station_config(DEFAULT_STATION)
        data = config.to_dict()

        assert data["station"]["name"] == config.name
        assert data["sweep"]["history_cap"] == 3
        assert data["signal"]["sharpness"] == 8


# =============================================================================
# TEST 3: Signal Presets
# =============================================================================


class TestSignalSection:
    def test_early_preset(self, tmp_path):
        path = write_yaml(tmp_path, {"signal": {"preset": "early"}})
        config = load_station_config(path)

        assert config.signal.sharpness == 4
        assert config.signal.base_gain == 2.0
        assert config.signal.formation_exponent == 0.0

    def test_preset_with_override(self, tmp_path):
        path = write_yaml(tmp_path, {"signal": {"preset": "early", "sharpness": 6}})
        config = load_station_config(path)

        assert config.signal.sharpness == 6
        assert config.signal.base_gain == 2.0

    def test_overrides_without_preset(self):
        config = StationConfigLoader.parse({"signal": {"base_range_mi": 120}})
        assert config.signal.base_range_mi == 120.0
        assert config.signal.sharpness == 8

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown signal preset"):
            StationConfigLoader.parse({"signal": {"preset": "mk2"}})


# =============================================================================
# TEST 4: Validation
# =============================================================================


class TestValidation:
    """Values the engine cannot run with are rejected at load time."""

    @pytest.mark.parametrize(
        "data",
        [
            {"signal": {"sharpness": 5}},
            {"sector": {"centre_deg": 350, "half_width_deg": 50}},
            {"sweep": {"width": 0}},
            {"sweep": {"persistence": {"enabled": True, "cap": 0}}},
            {"sweep": {"max_deflection": -5}},
            {"sweep": {"display_range_mi": 0}},
            {"sweep": {"pixel_scale": -1}},
            {"sweep": {"noise_amplitude": -1}},
            {"sweep": {"hold_s": -0.5}},
            {"population": {"initial": {"min": 4, "max": 2}}},
            {"population": {"min_range_mi": 100, "max_range_mi": 50}},
            {"population": {"escort_probability": 1.5}},
            {"altitude": {"min_ft": 30000, "max_ft": 1000}},
            {"timing": {"time_compression": 0}},
        ],
    )
    def test_rejected(self, data):
        with pytest.raises(ValueError):
            StationConfigLoader.parse(data)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            load_station_config(str(path))


# =============================================================================
# TEST 5: Missing File
# =============================================================================


class TestMissingFile:
    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            StationConfigLoader(str(tmp_path / "nope.yaml"))


# =============================================================================
# TEST 6: Engine Creation
# =============================================================================


class TestCreateEngine:
    def test_requires_loaded_config(self):
        with pytest.raises(ValueError, match="No station config loaded"):
            StationConfigLoader().create_engine()

    def test_engine_from_file(self, tmp_path):
        path = write_yaml(
            tmp_path,
            {
                "station": {"name": "Dover", "seed": 12},
                "sector": {"centre_deg": 120, "half_width_deg": 30},
                "sweep": {"persistence": {"enabled": True, "cap": 4}},
                "population": {"initial": {"min": 3, "max": 3}},
            },
        )
        engine = StationConfigLoader(path).create_engine()

        assert isinstance(engine, StationEngine)
        assert engine.config.name == "Dover"
        assert engine.history is not None and engine.history.cap == 4
        assert (engine.goniometer.min_deg, engine.goniometer.max_deg) == (90.0, 150.0)

        engine.power_on()
        assert len(engine.contacts) == 3
        for c in engine.contacts:
            assert 90.0 <= c.track_bearing_deg <= 150.0

    def test_seed_from_file_is_reproducible(self, tmp_path):
        path = write_yaml(tmp_path, {"station": {"seed": 21}})

        a = StationConfigLoader(path).create_engine()
        b = StationConfigLoader(path).create_engine()
        a.power_on()
        b.power_on()

        assert [c.altitude_ft for c in a.contacts] == [c.altitude_ft for c in b.contacts]
