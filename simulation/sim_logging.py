"""Simulation output logging: persists the SimulationLog, trades and price histories.

The output directory structure is::

    {output_dir}/{run_name}/
    ├── config.yaml
    ├── simulation_log.json
    ├── trades.json
    ├── price_history.json
    └── summary.json

``price_history.json`` holds the stock and option series in the shape a
chart renderer needs: one ordered list of floats per instrument.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

from models.log import SimulationLog

logger = logging.getLogger(__name__)


def run_name_from_config_path(config_path: str | Path) -> str:
    """Derive a run name from the configuration file path (stem without extension)."""
    return Path(config_path).stem


class SimulationLogger:
    """Manages on-disk output for a simulation run.

    Call ``init_run`` once at the start and ``finalize`` at the very end.
    """

    def __init__(self, output_dir: str | Path, run_name: str) -> None:
        self._run_dir = _unique_run_dir(Path(output_dir), run_name)

    def init_run(self, config_yaml_path: str | None = None) -> None:
        """Create the output directory and optionally copy the config."""
        self._run_dir.mkdir(parents=True, exist_ok=True)
        if config_yaml_path is not None:
            dest = self._run_dir / "config.yaml"
            shutil.copy2(config_yaml_path, dest)
            logger.info("Copied config to %s", dest)

    def finalize(
        self,
        simulation_log: SimulationLog,
        summary: dict[str, Any] | None = None,
    ) -> None:
        """Write the run-level log, its trades and price histories, and an optional summary."""
        self._run_dir.mkdir(parents=True, exist_ok=True)
        _write_json(self._run_dir / "simulation_log.json", simulation_log.model_dump())

        if simulation_log.trades:
            _write_json(
                self._run_dir / "trades.json",
                [t.model_dump() for t in simulation_log.trades],
            )

        _write_json(
            self._run_dir / "price_history.json",
            {
                f"{simulation_log.config.stock.name}_stock": simulation_log.stock_price_history,
                f"{simulation_log.config.stock.name}_option": simulation_log.option_price_history,
            },
        )

        if summary is not None:
            _write_json(self._run_dir / "summary.json", summary)
        logger.info("Simulation log finalized at %s", self._run_dir)

    @property
    def run_dir(self) -> Path:
        return self._run_dir


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _unique_run_dir(output_dir: Path, run_name: str) -> Path:
    """Return a run directory that does not already exist.

    If ``output_dir/run_name`` is free, use it directly (first run keeps
    a clean name).  Otherwise append an incrementing suffix:
    ``run_name_001``, ``run_name_002``, etc.
    """
    candidate = output_dir / run_name
    if not candidate.exists():
        return candidate

    idx = 1
    while True:
        candidate = output_dir / f"{run_name}_{idx:03d}"
        if not candidate.exists():
            return candidate
        idx += 1


def _write_json(path: Path, data: Any) -> None:
    """Write *data* as pretty-printed JSON to *path*."""
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
