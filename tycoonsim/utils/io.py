"""Input/output helpers for tycoonsim."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
import yaml

from tycoonsim.config import Config


def ensure_directory(path: Path) -> None:
    """Create directory if it does not exist."""

    path.mkdir(parents=True, exist_ok=True)


def timestamped_dir(base: Path, prefix: str) -> Path:
    """Return a directory path suffixed with the current timestamp."""

    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    path = base / prefix / stamp
    ensure_directory(path)
    return path


def save_table(df: pd.DataFrame, out_dir: Path, name: str) -> Path:
    """Persist a dataframe as CSV."""

    ensure_directory(out_dir)
    target = out_dir / f"{name}.csv"
    df.to_csv(target, index=False)
    return target


def write_config_snapshot(config: Config, out_dir: Path, filename: str = "config_snapshot.yaml") -> None:
    """Persist configuration as YAML for reproducibility."""

    ensure_directory(out_dir)
    with (out_dir / filename).open("w", encoding="utf-8") as handle:
        yaml.safe_dump(config.model_dump(mode="json"), handle, sort_keys=False)


def load_action_script(path: Path) -> List[Dict[str, Any]]:
    """Load a list of action payloads from a YAML or JSON file."""

    with path.open("r", encoding="utf-8") as handle:
        if path.suffix.lower() == ".json":
            data = json.load(handle)
        else:
            data = yaml.safe_load(handle) or []
    if isinstance(data, dict) and "actions" in data:
        data = data["actions"]
    if not isinstance(data, list):
        raise ValueError(f"Action script {path} must contain a list of actions")
    for entry in data:
        if not isinstance(entry, dict):
            raise ValueError(f"Invalid action entry: {entry!r}")
    return data


__all__ = [
    "ensure_directory",
    "timestamped_dir",
    "save_table",
    "write_config_snapshot",
    "load_action_script",
]
