"""
Simulation configuration loaded from YAML.

    simulation:
      clients: 100
      clients_per_hour: 24.96
      service:
        min: 0.0
        mode: 3.5
        max: 10.0
      seed: 772531
    report:
      path: simqueue.csv

Times are in minutes; the arrival rate is given per hour and converted.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from simqueue.errors import ConfigError
from simqueue.random import DEFAULT_MG_SEED
from simqueue.simulator import SimulationParameters

DEFAULT_REPORT_PATH = "simqueue.csv"


@dataclass(frozen=True)
class SimulationConfig:
    """Driver-level settings. Validation happens in ``to_parameters()``."""

    clients: int = 100
    clients_per_hour: float = 24.96
    service_min: float = 0.0
    service_mode: float = 3.5
    service_max: float = 10.0
    seed: int = DEFAULT_MG_SEED
    report_path: str = DEFAULT_REPORT_PATH

    @property
    def rate(self) -> float:
        """Arrival rate per minute."""
        return self.clients_per_hour / 60.0

    def to_parameters(self) -> SimulationParameters:
        return SimulationParameters(
            self.clients, self.rate, self.service_min, self.service_mode, self.service_max
        )

    def override(self, **changes: Any) -> SimulationConfig:
        """Copy with the given fields replaced; ``None`` values are ignored."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_config(config_path: str | Path | None = None) -> SimulationConfig:
    """
    Load a YAML configuration.

    A missing path or file yields the defaults.

    Raises:
        ConfigError: if the file is not valid YAML or has the wrong shape
    """
    if config_path is None:
        return SimulationConfig()
    path = Path(config_path)
    if not path.exists():
        return SimulationConfig()
    try:
        with open(path) as f:
            cfg = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return _config_from_dict(cfg, path)


def _section(cfg: dict[str, Any], key: str, path: Path) -> dict[str, Any]:
    section = cfg.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: '{key}' must be a mapping")
    return section


def _config_from_dict(cfg: dict[str, Any], path: Path) -> SimulationConfig:
    sim = _section(cfg, "simulation", path)
    service = _section(sim, "service", path)
    report = _section(cfg, "report", path)
    defaults = SimulationConfig()
    try:
        return SimulationConfig(
            clients=int(sim.get("clients", defaults.clients)),
            clients_per_hour=float(sim.get("clients_per_hour", defaults.clients_per_hour)),
            service_min=float(service.get("min", defaults.service_min)),
            service_mode=float(service.get("mode", defaults.service_mode)),
            service_max=float(service.get("max", defaults.service_max)),
            seed=int(sim.get("seed", defaults.seed)),
            report_path=str(report.get("path", defaults.report_path)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{path}: {e}") from e
