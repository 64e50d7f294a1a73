"""
Test Pipeline - Verify the orchestrator and CLI run end to end

Runs against small CSV files in a temporary directory; no network access.
"""

import os
import sys
import math
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import polars as pl
import pytest
from src.coreutils.env import PipelineSettings
from src.orchestration.pipeline import RescalePipeline
from src.main import main
import logging

# Setup logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@pytest.fixture
def scores_csv(tmp_path):
    path = tmp_path / "scores.csv"
    pl.DataFrame(
        {
            "student": ["ana", "ben", "cai", "dee"],
            "cohort": ["x", "x", "y", "y"],
            "math": [55, 70, 85, 100],
            "reading": [60.0, None, 90.0, 75.0],
            "term": [1, 1, 1, 1],
        }
    ).write_csv(path)
    return path


@pytest.fixture
def settings(tmp_path):
    return PipelineSettings(output_dir=str(tmp_path / "output"), log_dir="")


def test_run_rescales_and_saves(scores_csv, settings):
    """Full run writes a dated parquet with every numeric column rescaled"""
    print("🧪 Testing RescalePipeline.run()...")

    pipeline = RescalePipeline(settings=settings)
    results = pipeline.run(scores_csv)

    assert results["rows"] == 4
    assert results["rescaled_columns"] == ["math", "reading", "term"]
    assert results["constant_columns"] == ["term"]
    assert results["output_path"].startswith(settings.output_dir)
    assert os.path.exists(results["output_path"])

    saved = pl.read_parquet(results["output_path"])
    assert saved["student"].to_list() == ["ana", "ben", "cai", "dee"]
    assert saved["math"].to_list() == pytest.approx([0.0, 1 / 3, 2 / 3, 1.0])
    assert saved["reading"].to_list()[1] is None
    assert saved["reading"].to_list()[0] == 0.0
    assert all(math.isnan(x) for x in saved["term"].to_list())


def test_run_dry_run_skips_save(scores_csv, settings):
    pipeline = RescalePipeline(settings=settings, dry_run=True)

    with patch("src.orchestration.pipeline.save_table") as mock_save:
        results = pipeline.run(scores_csv, columns=["math"])

    mock_save.assert_not_called()
    assert results["output_path"] is None
    assert results["rescaled_columns"] == ["math"]
    assert results["data"]["reading"].to_list() == [60.0, None, 90.0, 75.0]
    assert not os.path.exists(settings.output_dir)


def test_run_by_group_with_explicit_output(scores_csv, settings, tmp_path):
    output = str(tmp_path / "grouped.csv")
    pipeline = RescalePipeline(settings=settings)

    results = pipeline.run(
        scores_csv, columns=["math"], by="cohort", output_path=output
    )

    assert results["output_path"] == output
    saved = pl.read_csv(output)
    assert saved["math"].to_list() == [0.0, 1.0, 0.0, 1.0]


def test_run_rejects_non_numeric_column(scores_csv, settings):
    pipeline = RescalePipeline(settings=settings, dry_run=True)

    with pytest.raises(ValueError, match="Non-numeric"):
        pipeline.run(scores_csv, columns=["student"])


def test_run_missing_input(tmp_path, settings):
    pipeline = RescalePipeline(settings=settings, dry_run=True)

    with pytest.raises(FileNotFoundError):
        pipeline.run(tmp_path / "missing.csv")


def test_describe(scores_csv, settings):
    summary = RescalePipeline(settings=settings).describe(scores_csv)

    assert summary["column"].to_list() == ["math", "reading", "term"]
    reading = summary.filter(pl.col("column") == "reading").row(0, named=True)
    assert reading["missing"] == 1
    assert reading["mean"] == pytest.approx(75.0)


def test_get_pipeline_status(settings):
    status = RescalePipeline(settings=settings, dry_run=True).get_pipeline_status()

    assert status["dry_run"] is True
    assert status["output_dir"] == settings.output_dir


@pytest.fixture
def cli_env(monkeypatch, tmp_path):
    monkeypatch.setenv("RESCALE_OUTPUT_DIR", str(tmp_path / "cli_output"))
    monkeypatch.setenv("RESCALE_LOG_DIR", "")
    return tmp_path / "cli_output"


def test_main_rescale_command(scores_csv, cli_env, capsys):
    """CLI rescale writes output and exits 0"""
    print("🧪 Testing CLI rescale command...")

    exit_code = main(["rescale", str(scores_csv), "--columns", "math", "reading"])

    assert exit_code == 0
    assert "Rescaled 4 rows" in capsys.readouterr().out
    assert len(os.listdir(cli_env)) == 1


def test_main_describe_command(scores_csv, cli_env, capsys):
    exit_code = main(["describe", str(scores_csv), "--columns", "math"])

    assert exit_code == 0
    assert "math" in capsys.readouterr().out


def test_main_returns_1_on_failure(tmp_path, cli_env):
    exit_code = main(["rescale", str(tmp_path / "missing.csv"), "--dry-run"])

    assert exit_code == 1


def test_run_by_group_reports_constant_group(tmp_path, settings):
    path = tmp_path / "groups.csv"
    pl.DataFrame({"g": ["a", "a", "b", "b"], "v": [1, 2, 5, 5]}).write_csv(path)

    results = RescalePipeline(settings=settings, dry_run=True).run(path, by="g")

    assert results["rescaled_columns"] == ["v"]
    assert results["constant_columns"] == ["v"]
    values = results["data"]["v"].to_list()
    assert values[:2] == [0.0, 1.0]
    assert math.isnan(values[2]) and math.isnan(values[3])


def test_run_json_output_with_constant_column(scores_csv, settings, tmp_path):
    """JSON output stays readable when a column rescales to NaN"""
    from src.extract.readers import read_table

    output = str(tmp_path / "scores_rescaled.json")
    RescalePipeline(settings=settings).run(scores_csv, output_path=output)

    loaded = read_table(output)
    assert loaded["term"].to_list() == [None, None, None, None]
    assert loaded["math"].to_list() == pytest.approx([0.0, 1 / 3, 2 / 3, 1.0])
