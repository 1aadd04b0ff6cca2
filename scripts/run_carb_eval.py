"""Evaluate a carbon footprint from the command line or an interactive prompt.

Examples::

    python scripts/run_carb_eval.py Electricity 500 NaturalGas 100 Fuel 50
    python scripts/run_carb_eval.py --interactive --plot results/breakdown.png

Output locations default to the ``carbon_eval`` section of ``config.yaml``
(``CARBON_EVAL_CONFIG_PATH`` overrides the config file); ``--output`` and
``--plot`` take precedence.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Mapping, Sequence

ROOT = Path(__file__).resolve().parents[1]

sys.path.insert(0, str(ROOT / "src"))

from carbon_eval import (  # noqa: E402
    EMISSION_FACTORS,
    EvaluationError,
    evaluate,
    export_to_table,
    plot_result,
)
from config_paths import (  # noqa: E402
    apply_results_run_directory,
    get_results_run_directory,
    load_config,
)

LOGGER = logging.getLogger("run_carb_eval")


def _to_number(token: str) -> float | str:
    try:
        return float(token)
    except ValueError:
        return token


def parse_cli_pairs(tokens: Sequence[str]) -> list[float | str]:
    """Convert ``Electricity 500 Fuel 50`` tokens into a flattened input sequence.

    Consumption tokens that are not numbers are passed through unchanged so the
    evaluator reports them.
    """
    return [_to_number(token) if index % 2 else token for index, token in enumerate(tokens)]


def prompt_pairs(input_fn: Callable[[str], str] = input) -> list[float | str]:
    options = ", ".join(EMISSION_FACTORS)
    values: list[float | str] = []
    while True:
        try:
            source = input_fn(f"Energy source ({options}; blank to finish): ").strip()
        except EOFError:
            break
        if not source:
            break
        while True:
            try:
                raw = input_fn(f"Consumption for {source}: ").strip()
            except EOFError:
                raise EvaluationError(f"No consumption given for '{source}'.") from None
            consumption = _to_number(raw)
            if isinstance(consumption, float):
                break
            LOGGER.warning("'%s' is not a number; try again.", raw)
        values.extend([source, consumption])
    return values


def _load_settings(config: Mapping[str, object]) -> dict[str, object]:
    module_cfg = config.get("carbon_eval") or {}
    if not isinstance(module_cfg, Mapping):
        raise ValueError("'carbon_eval' section of config.yaml must be a mapping.")
    run_directory = get_results_run_directory(config)

    def _resolve(key: str) -> Path | None:
        value = module_cfg.get(key)
        if not value:
            return None
        return apply_results_run_directory(Path(str(value)), run_directory, repo_root=ROOT)

    return {
        "export_file": _resolve("export_file"),
        "plot_file": _resolve("plot_file"),
        "show_plot": bool(module_cfg.get("show_plot", False)),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate kgCO2e emissions for electricity (kWh), natural gas (therms) "
        "and fuel (liters)."
    )
    parser.add_argument(
        "pairs",
        nargs="*",
        help="Alternating energy sources and consumption values, e.g. Electricity 500 Fuel 50",
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Prompt for sources and consumption"
    )
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--output", "-o", type=Path, help="CSV export path")
    parser.add_argument("--no-export", action="store_true", help="Skip the CSV export")
    parser.add_argument("--plot", type=Path, help="Save the bar chart to this image path")
    parser.add_argument("--show", action="store_true", help="Display the bar chart")
    return parser


def main(argv: Sequence[str] | None = None, input_fn: Callable[[str], str] = input) -> int:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")

    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.pairs and not args.interactive:
        parser.error("Supply energy source/consumption pairs or use --interactive.")

    config = load_config(args.config)
    settings = _load_settings(config)

    try:
        inputs = parse_cli_pairs(args.pairs)
        if args.interactive:
            inputs.extend(prompt_pairs(input_fn))
        result = evaluate(inputs)
    except EvaluationError as exc:
        LOGGER.error("%s", exc)
        return 2

    if not args.no_export:
        export_to_table(result, args.output or settings["export_file"])

    plot_path = args.plot or settings["plot_file"]
    show = args.show or settings["show_plot"]
    if result.entries and (plot_path or show):
        try:
            plot_result(result, output=plot_path, show=show)
        except OSError as exc:
            LOGGER.warning("Failed to save plot: %s", exc)
    return 0


if __name__ == "__main__":
    sys.exit(main())
