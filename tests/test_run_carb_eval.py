from pathlib import Path

import pytest
from scripts import run_carb_eval

from carbon_eval.errors import EvaluationError
from carbon_eval.writers import read_table


def _write_config(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


def _empty_config(tmp_path: Path) -> Path:
    return _write_config(tmp_path / "config.yaml", "carbon_eval: {}\n")


def test_parse_cli_pairs_converts_quantities():
    assert run_carb_eval.parse_cli_pairs(["Electricity", "500", "Fuel", "12.5"]) == [
        "Electricity",
        500.0,
        "Fuel",
        12.5,
    ]
    assert run_carb_eval.parse_cli_pairs(["Fuel", "lots"]) == ["Fuel", "lots"]
    assert run_carb_eval.parse_cli_pairs(["100", "200"]) == ["100", 200.0]


def test_prompt_pairs_retries_non_numeric_consumption():
    answers = iter(["Electricity", "abc", "500", "natural-gas", "10", ""])
    prompts: list[str] = []

    def _input(prompt: str) -> str:
        prompts.append(prompt)
        return next(answers)

    assert run_carb_eval.prompt_pairs(_input) == ["Electricity", 500.0, "natural-gas", 10.0]
    assert "electricity, natural-gas, fuel" in prompts[0]
    assert prompts[1] == prompts[2] == "Consumption for Electricity: "


def test_prompt_pairs_stops_at_end_of_input():
    def _input(prompt: str) -> str:
        raise EOFError

    assert run_carb_eval.prompt_pairs(_input) == []


def test_prompt_pairs_requires_consumption_after_source():
    answers = iter(["Fuel"])

    def _input(prompt: str) -> str:
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    with pytest.raises(EvaluationError):
        run_carb_eval.prompt_pairs(_input)


def test_main_exports_and_plots(tmp_path: Path):
    output = tmp_path / "report.csv"
    plot = tmp_path / "breakdown.png"
    code = run_carb_eval.main(
        [
            "Electricity",
            "500",
            "NaturalGas",
            "100",
            "Fuel",
            "50",
            "--config",
            str(_empty_config(tmp_path)),
            "--output",
            str(output),
            "--plot",
            str(plot),
        ]
    )

    assert code == 0
    assert read_table(output) == [
        ("Electricity", pytest.approx(200.0)),
        ("NaturalGas", pytest.approx(530.0)),
        ("Fuel", pytest.approx(115.0)),
    ]
    assert plot.exists()


def test_main_uses_default_filename_without_configured_export(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.chdir(tmp_path)
    code = run_carb_eval.main(["Fuel", "1", "--config", str(_empty_config(tmp_path))])
    assert code == 0
    assert (tmp_path / "CarbonFootprintResults.csv").exists()


def test_main_reads_output_paths_from_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(run_carb_eval, "ROOT", tmp_path)
    config = _write_config(
        tmp_path / "config.yaml",
        "carbon_eval:\n"
        "  export_file: results/footprint.csv\n"
        "  plot_file: results/footprint.png\n"
        "results:\n"
        "  run_directory: household\n",
    )
    code = run_carb_eval.main(["Electricity", "10", "--config", str(config)])

    assert code == 0
    assert (tmp_path / "results" / "household" / "footprint.csv").exists()
    assert (tmp_path / "results" / "household" / "footprint.png").exists()


@pytest.mark.parametrize(
    "pairs",
    [["Solar", "10"], ["Electricity", "-1"], ["Electricity", "500", "Fuel"], ["Fuel", "lots"]],
)
def test_main_reports_validation_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, pairs):
    monkeypatch.chdir(tmp_path)
    code = run_carb_eval.main([*pairs, "--config", str(_empty_config(tmp_path))])
    assert code == 2
    assert not (tmp_path / "CarbonFootprintResults.csv").exists()


def test_main_survives_export_failure(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    code = run_carb_eval.main(
        [
            "Electricity",
            "10",
            "--config",
            str(_empty_config(tmp_path)),
            "--output",
            str(blocker / "report.csv"),
        ]
    )
    assert code == 0


def test_main_interactive(tmp_path: Path):
    answers = iter(["fuel", "2", ""])
    output = tmp_path / "report.csv"
    code = run_carb_eval.main(
        ["--interactive", "--config", str(_empty_config(tmp_path)), "--output", str(output)],
        input_fn=lambda prompt: next(answers),
    )
    assert code == 0
    assert read_table(output) == [("fuel", pytest.approx(4.6))]


def test_main_requires_pairs_or_prompt():
    with pytest.raises(SystemExit):
        run_carb_eval.main([])


def test_main_survives_plot_failure(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    output = tmp_path / "report.csv"
    code = run_carb_eval.main(
        [
            "Fuel",
            "3",
            "--config",
            str(_empty_config(tmp_path)),
            "--output",
            str(output),
            "--plot",
            str(blocker / "chart.png"),
        ]
    )
    assert code == 0
    assert read_table(output) == [("Fuel", pytest.approx(6.9))]


def test_script_logger_uses_root_handlers():
    assert not run_carb_eval.LOGGER.name.startswith("carbon_eval")
    assert run_carb_eval.LOGGER.propagate
