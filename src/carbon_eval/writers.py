from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

from .constants import CATEGORY_COLUMN, DEFAULT_EXPORT_FILENAME, EMISSIONS_COLUMN
from .errors import ExportWriteFailure

if TYPE_CHECKING:  # pragma: no cover
    from .evaluator import EvaluationResult

LOGGER = logging.getLogger("carbon_eval.writers")


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _target_mode(destination: Path) -> int:
    """Mode of an existing destination, else 0666 filtered by the umask."""
    try:
        return stat.S_IMODE(destination.stat().st_mode)
    except FileNotFoundError:
        return 0o666 & ~_current_umask()


def _write_atomic(df: pd.DataFrame, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            df.to_csv(fh, index=False)
        # mkstemp creates 0600 files; keep the mode a plain open() would give
        os.chmod(tmp_path, _target_mode(destination))
        os.replace(tmp_path, destination)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def export_to_table(
    result: EvaluationResult,
    destination: Path | str | None = None,
    *,
    raise_on_error: bool = False,
) -> Path | None:
    """Write ``EnergySource,Emissions_kgCO2e`` rows for each entry of ``result``.

    The file is either fully written or left untouched. Failures are logged as a
    warning and ``None`` is returned, unless ``raise_on_error`` is set.
    """
    path = Path(destination) if destination is not None else Path(DEFAULT_EXPORT_FILENAME)
    try:
        _write_atomic(result.to_frame(), path)
    except OSError as exc:
        if raise_on_error:
            raise ExportWriteFailure(path, exc) from exc
        LOGGER.warning("Failed to export data: %s", exc)
        return None
    LOGGER.info("Results exported to %s", path)
    return path


def read_table(source: Path | str) -> list[tuple[str, float]]:
    """Load ``(category, emissions)`` pairs from a file written by ``export_to_table``."""
    df = pd.read_csv(source, dtype=str, keep_default_na=False, encoding="utf-8")
    missing = [col for col in (CATEGORY_COLUMN, EMISSIONS_COLUMN) if col not in df.columns]
    if missing:
        raise ValueError(f"File '{source}' is missing columns: {missing}")
    return [
        (str(category), float(emissions))
        for category, emissions in zip(df[CATEGORY_COLUMN], df[EMISSIONS_COLUMN], strict=True)
    ]
