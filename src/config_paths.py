"""Helpers to resolve the configuration file and run-specific results subdirectories."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

import yaml

REPO_ROOT = Path(__file__).resolve().parents[1]

CONFIG_ENV_VAR = "CARBON_EVAL_CONFIG_PATH"


def get_config_path(default: Path | None = None) -> Path:
    """Return the configuration path, honouring CARBON_EVAL_CONFIG_PATH when set."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    if default is not None:
        return Path(default).resolve()
    return (REPO_ROOT / "config.yaml").resolve()


def load_config(path: Path | str | None = None) -> dict:
    """Read the YAML configuration; a missing file yields an empty mapping."""

    config_path = Path(path) if path is not None else get_config_path()
    if not config_path.exists():
        return {}
    with config_path.open(encoding="utf-8") as handle:
        config = yaml.safe_load(handle) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration file '{config_path}' must contain a mapping.")
    return config


def sanitize_run_directory(value: str | None) -> str | None:
    """Return a safe run-directory component (no absolutes, no parent traversals)."""

    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    path = Path(candidate)
    if path.is_absolute():
        raise ValueError("results.run_directory must be a relative path.")
    parts = [part for part in path.parts if part not in ("", ".", "..")]
    if not parts:
        return None
    return "/".join(parts)


def get_results_run_directory(config: Mapping[str, object] | None) -> str | None:
    """Extract ``results.run_directory`` from the configuration mapping."""

    if not isinstance(config, Mapping):
        return None
    results_cfg = config.get("results")
    if not isinstance(results_cfg, Mapping):
        return None
    raw_value = results_cfg.get("run_directory")
    if raw_value is None:
        return None
    return sanitize_run_directory(str(raw_value))


def apply_results_run_directory(
    path: Path,
    run_directory: str | None,
    *,
    repo_root: Path | None = None,
) -> Path:
    """Insert the run directory after ``results/`` for paths under the repository."""

    root = repo_root or REPO_ROOT
    absolute = path if path.is_absolute() else (root / path)
    if not run_directory:
        return absolute

    try:
        rel = absolute.relative_to(root)
    except ValueError:
        return absolute

    parts = rel.parts
    if not parts or parts[0] != "results":
        return absolute

    return (root / "results" / run_directory / Path(*parts[1:])).resolve()
