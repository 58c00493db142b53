"""
Station Configuration Loader

YAML-based station configuration for the Chain Home simulator.

Loads station settings from YAML files and creates configured
StationEngine instances. Every section is optional; missing keys fall
back to the defaults in chainhome.physics.constants.

Supported sections:
    - station: name, random seed
    - sector: scan sector centre and half-width
    - sweep: sweep timing, display scaling, persistence
    - signal: preset and signal model overrides
    - altitude: altitude limits for the signal model
    - population: spawn and retirement rules
    - timing: motion/frame timer periods, time compression

Usage:
    loader = StationConfigLoader('scenarios/default_station.yaml')
    engine = loader.create_engine()
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import yaml

from chainhome.physics.constants import (
    ESCORT_PROBABILITY,
    MAX_SIMULATED_RANGE_MI,
    MIN_CONTACT_RANGE_MI,
    POPULATION_FLOOR,
    RANGE_BEAM_WIDTH_MI,
    SECTOR_CENTRE_DEG,
    SECTOR_HALF_WIDTH_DEG,
    SWEEP_DURATION_S,
    SWEEP_WIDTH,
    TRACE_HISTORY_CAP,
)
from chainhome.physics.signal_model import AltitudeLimits, SignalParameters


@dataclass
class SectorConfig:
    """Scan sector of the station."""

    centre_deg: float = SECTOR_CENTRE_DEG
    half_width_deg: float = SECTOR_HALF_WIDTH_DEG

    @property
    def limits(self) -> Tuple[float, float]:
        """(min, max) goniometer angle [deg]."""
        return (self.centre_deg - self.half_width_deg, self.centre_deg + self.half_width_deg)


@dataclass
class SweepConfig:
    """Sweep timing and A-scope scaling."""

    width: int = SWEEP_WIDTH
    duration_s: float = SWEEP_DURATION_S
    sample_step: float = 2.0
    beam_width_mi: float = RANGE_BEAM_WIDTH_MI
    display_range_mi: float = MAX_SIMULATED_RANGE_MI
    pixel_scale: float = 40.0
    noise_amplitude: float = 6.0
    max_deflection: float = 150.0
    auto_repeat: bool = True
    hold_s: float = 0.5
    persistence_enabled: bool = False
    history_cap: int = TRACE_HISTORY_CAP


@dataclass
class PopulationConfig:
    """Contact spawn and retirement rules."""

    floor: int = POPULATION_FLOOR
    initial_min: int = 2
    initial_max: int = 5
    min_range_mi: float = MIN_CONTACT_RANGE_MI
    max_range_mi: float = MAX_SIMULATED_RANGE_MI
    escort_probability: float = ESCORT_PROBABILITY


@dataclass
class TimingConfig:
    """Timer periods for the live console."""

    motion_period_s: float = 0.1
    frame_period_s: float = 1.0 / 60.0
    time_compression: float = 60.0  # simulated seconds per wall second


@dataclass
class StationConfig:
    """Complete station configuration."""

    name: str = "Chain Home"
    seed: Optional[int] = None
    sector: SectorConfig = field(default_factory=SectorConfig)
    sweep: SweepConfig = field(default_factory=SweepConfig)
    signal: SignalParameters = field(default_factory=SignalParameters)
    altitude: AltitudeLimits = field(default_factory=AltitudeLimits)
    population: PopulationConfig = field(default_factory=PopulationConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)

    def validate(self) -> None:
        """
        Check the configuration for values the engine cannot run with.

        Raises:
            ValueError: On the first invalid value found
        """
        self.signal.validate()
        self.altitude.validate()

        lo, hi = self.sector.limits
        if self.sector.half_width_deg <= 0 or lo < 0.0 or hi > 360.0:
            raise ValueError(f"Scan sector {lo}..{hi} deg must lie within 0..360")

        if self.sweep.width <= 0 or self.sweep.duration_s <= 0:
            raise ValueError("Sweep width and duration must be positive")
        if self.sweep.sample_step <= 0 or self.sweep.beam_width_mi <= 0:
            raise ValueError("Sweep sample step and beam width must be positive")
        if self.sweep.display_range_mi <= 0 or self.sweep.max_deflection <= 0:
            raise ValueError("Sweep display range and max deflection must be positive")
        if self.sweep.pixel_scale < 0 or self.sweep.noise_amplitude < 0:
            raise ValueError("Sweep pixel scale and noise amplitude must be non-negative")
        if self.sweep.hold_s < 0:
            raise ValueError(f"hold_s must be non-negative, got {self.sweep.hold_s}")
        if self.sweep.history_cap < 1:
            raise ValueError(f"history_cap must be at least 1, got {self.sweep.history_cap}")

        pop = self.population
        if pop.floor < 1:
            raise ValueError(f"Population floor must be at least 1, got {pop.floor}")
        if not 1 <= pop.initial_min <= pop.initial_max:
            raise ValueError(
                f"Initial population range invalid: {pop.initial_min}..{pop.initial_max}"
            )
        if not 0 <= pop.min_range_mi < pop.max_range_mi:
            raise ValueError("Population ranges must satisfy 0 <= min_range < max_range")
        if not 0.0 <= pop.escort_probability <= 1.0:
            raise ValueError(
                f"escort_probability must be in [0, 1], got {pop.escort_probability}"
            )

        t = self.timing
        if t.motion_period_s <= 0 or t.frame_period_s <= 0 or t.time_compression <= 0:
            raise ValueError("Timer periods and time compression must be positive")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary (same layout as the YAML file)."""
        return {
            "station": {"name": self.name, "seed": self.seed},
            "sector": dict(vars(self.sector)),
            "sweep": dict(vars(self.sweep)),
            "signal": self.signal.to_dict(),
            "altitude": {"min_ft": self.altitude.min_ft, "max_ft": self.altitude.max_ft},
            "population": dict(vars(self.population)),
            "timing": dict(vars(self.timing)),
        }


class StationConfigLoader:
    """
    Loads station configuration from YAML files.

    Usage:
        loader = StationConfigLoader('scenarios/default_station.yaml')
        config = loader.get_config()
        engine = loader.create_engine()
    """

    def __init__(self, filepath: Optional[str] = None):
        """
        Initialize loader.

        Args:
            filepath: Path to YAML configuration file (optional)
        """
        self.filepath = filepath
        self.data: Dict[str, Any] = {}
        self._config: Optional[StationConfig] = None

        if filepath:
            self.load(filepath)

    def load(self, filepath: str) -> bool:
        """
        Load configuration from YAML file.

        Args:
            filepath: Path to YAML file

        Returns:
            True if loaded successfully

        Raises:
            FileNotFoundError: If file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ValueError: If the configuration is invalid
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Station config not found: {filepath}")

        self.filepath = filepath

        with open(filepath, "r", encoding="utf-8") as f:
            self.data = yaml.safe_load(f) or {}

        self._config = self.parse(self.data)
        return True

    @classmethod
    def parse(cls, data: Dict[str, Any]) -> StationConfig:
        """Parse a loaded YAML mapping into a validated StationConfig."""
        if not isinstance(data, dict):
            raise ValueError(f"Station config must be a mapping, got {type(data).__name__}")

        station = data.get("station") or {}
        seed = station.get("seed")

        config = StationConfig(
            name=station.get("name", "Chain Home"),
            seed=int(seed) if seed is not None else None,
            sector=cls._parse_sector(data.get("sector") or {}),
            sweep=cls._parse_sweep(data.get("sweep") or {}),
            signal=cls._parse_signal(data.get("signal") or {}),
            altitude=cls._parse_altitude(data.get("altitude") or {}),
            population=cls._parse_population(data.get("population") or {}),
            timing=cls._parse_timing(data.get("timing") or {}),
        )
        config.validate()
        return config

    @staticmethod
    def _parse_sector(sector: Dict[str, Any]) -> SectorConfig:
        """Parse scan sector."""
        return SectorConfig(
            centre_deg=float(sector.get("centre_deg", SECTOR_CENTRE_DEG)),
            half_width_deg=float(sector.get("half_width_deg", SECTOR_HALF_WIDTH_DEG)),
        )

    @staticmethod
    def _parse_sweep(sweep: Dict[str, Any]) -> SweepConfig:
        """Parse sweep timing and persistence."""
        defaults = SweepConfig()
        persistence = sweep.get("persistence") or {}

        return SweepConfig(
            width=int(sweep.get("width", defaults.width)),
            duration_s=float(sweep.get("duration_s", defaults.duration_s)),
            sample_step=float(sweep.get("sample_step", defaults.sample_step)),
            beam_width_mi=float(sweep.get("beam_width_mi", defaults.beam_width_mi)),
            display_range_mi=float(sweep.get("display_range_mi", defaults.display_range_mi)),
            pixel_scale=float(sweep.get("pixel_scale", defaults.pixel_scale)),
            noise_amplitude=float(sweep.get("noise_amplitude", defaults.noise_amplitude)),
            max_deflection=float(sweep.get("max_deflection", defaults.max_deflection)),
            auto_repeat=bool(sweep.get("auto_repeat", defaults.auto_repeat)),
            hold_s=float(sweep.get("hold_s", defaults.hold_s)),
            persistence_enabled=bool(persistence.get("enabled", defaults.persistence_enabled)),
            history_cap=int(persistence.get("cap", defaults.history_cap)),
        )

    @staticmethod
    def _parse_signal(signal: Dict[str, Any]) -> SignalParameters:
        """Parse signal model, starting from a preset if one is named."""
        overrides = {}
        if "sharpness" in signal:
            overrides["sharpness"] = int(signal["sharpness"])
        if "base_gain" in signal:
            overrides["base_gain"] = float(signal["base_gain"])
        if "base_range_mi" in signal:
            overrides["base_range_mi"] = float(signal["base_range_mi"])
        if "floor_fraction" in signal:
            overrides["floor_fraction"] = float(signal["floor_fraction"])
        if "formation_exponent" in signal:
            overrides["formation_exponent"] = float(signal["formation_exponent"])

        preset = signal.get("preset")
        if preset:
            return SignalParameters.preset(str(preset), **overrides)
        return SignalParameters(**overrides)

    @staticmethod
    def _parse_altitude(altitude: Dict[str, Any]) -> AltitudeLimits:
        """Parse altitude limits."""
        defaults = AltitudeLimits()
        return AltitudeLimits(
            min_ft=float(altitude.get("min_ft", defaults.min_ft)),
            max_ft=float(altitude.get("max_ft", defaults.max_ft)),
        )

    @staticmethod
    def _parse_population(population: Dict[str, Any]) -> PopulationConfig:
        """Parse spawn rules."""
        defaults = PopulationConfig()
        initial = population.get("initial") or {}

        return PopulationConfig(
            floor=int(population.get("floor", defaults.floor)),
            initial_min=int(initial.get("min", defaults.initial_min)),
            initial_max=int(initial.get("max", defaults.initial_max)),
            min_range_mi=float(population.get("min_range_mi", defaults.min_range_mi)),
            max_range_mi=float(population.get("max_range_mi", defaults.max_range_mi)),
            escort_probability=float(
                population.get("escort_probability", defaults.escort_probability)
            ),
        )

    @staticmethod
    def _parse_timing(timing: Dict[str, Any]) -> TimingConfig:
        """Parse timer periods."""
        defaults = TimingConfig()
        return TimingConfig(
            motion_period_s=float(timing.get("motion_period_s", defaults.motion_period_s)),
            frame_period_s=float(timing.get("frame_period_s", defaults.frame_period_s)),
            time_compression=float(timing.get("time_compression", defaults.time_compression)),
        )

    def get_config(self) -> Optional[StationConfig]:
        """
        Get parsed station configuration.

        Returns:
            StationConfig or None if not loaded
        """
        return self._config

    def create_engine(self, seed: Optional[int] = None):
        """
        Create a StationEngine from the loaded configuration.

        Args:
            seed: Overrides the seed in the file

        Returns:
            Configured StationEngine instance

        Raises:
            ValueError: If no configuration is loaded
        """
        if not self._config:
            raise ValueError("No station config loaded. Call load() first.")

        # Import here to avoid circular dependencies
        from chainhome.simulation.engine import StationEngine

        return StationEngine(self._config, seed=seed)


def load_station_config(filepath: str) -> StationConfig:
    """
    Convenience function to load a station config file.

    Args:
        filepath: Path to YAML file

    Returns:
        StationConfig instance
    """
    loader = StationConfigLoader(filepath)
    return loader.get_config()
