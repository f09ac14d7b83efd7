from pathlib import Path

import yaml

from conftest import build_config, flat_rate_year, marginal_relief_year
from marginalrelief.backend.config.validator import (
    main,
    validate_calculator_config,
    validate_financial_year,
)
from marginalrelief.backend.config.year_config import load_calculator_config


def test_current_configuration_is_valid() -> None:
    results = validate_calculator_config(load_calculator_config())
    assert results
    assert all(not issues for issues in results.values()), results


def test_flat_rate_year_has_nothing_to_check() -> None:
    config = build_config(flat_rate_year(2022))

    assert validate_financial_year(config.find(2022)) == []


def test_validator_flags_inconsistent_fraction() -> None:
    config = build_config(marginal_relief_year(2023, marginal_relief_fraction=0.02))

    errors = validate_financial_year(config.find(2023))

    assert len(errors) == 1
    assert errors[0].startswith("marginal_relief_fraction:")
    assert "expected 0.0150" in errors[0]


def test_validator_accepts_fraction_matching_changed_thresholds() -> None:
    config = build_config(
        marginal_relief_year(2031, upper_threshold=300000, marginal_relief_fraction=0.012)
    )

    assert validate_financial_year(config.find(2031)) == []


def test_validator_flags_inverted_rates() -> None:
    config = build_config(
        marginal_relief_year(2023, small_profit_rate=0.3, marginal_relief_fraction=0)
    )

    errors = validate_financial_year(config.find(2023))

    assert any(error.startswith("rates:") for error in errors)
    assert any("fraction is zero" in error for error in errors)


def test_validator_reports_coverage_gaps() -> None:
    config = build_config(marginal_relief_year(2023), marginal_relief_year(2026))

    results = validate_calculator_config(config)

    assert results[2023] == []
    assert results[2026] == ["coverage: no configuration for financial year(s) 2024, 2025"]


def _write_config(path: Path, *entries: dict) -> Path:
    path.write_text(yaml.safe_dump({"financial_years": list(entries)}), encoding="utf-8")
    return path


def test_cli_reports_ok_years(tmp_path, capsys) -> None:
    config_file = _write_config(tmp_path / "years.yaml", flat_rate_year(2022), marginal_relief_year(2023))

    exit_code = main(["--config", str(config_file)])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == ["[2022] OK", "[2023] OK"]


def test_cli_reports_issues_and_unknown_years(tmp_path, capsys) -> None:
    config_file = _write_config(
        tmp_path / "years.yaml", marginal_relief_year(2023, marginal_relief_fraction=0.02)
    )

    exit_code = main(["2023", "2030", "--config", str(config_file)])

    output = capsys.readouterr().out.splitlines()
    assert exit_code == 1
    assert output[0] == "[2023] 1 issue(s) detected:"
    assert output[1].startswith("  - marginal_relief_fraction:")
    assert output[-1] == "[2030] not configured"


def test_cli_reports_unloadable_configuration(tmp_path, capsys) -> None:
    exit_code = main(["--config", str(tmp_path / "missing.yaml")])

    assert exit_code == 1
    assert capsys.readouterr().out.startswith("failed to load configuration:")
