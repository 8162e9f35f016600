import json
from unittest.mock import MagicMock

import pandas as pd
import pytest
from typer.testing import CliRunner

from tenureminer.errors import InvalidInterval
from tenureminer.io.sparql import SparqlClient
from tenureminer.pipelines import cli
from tenureminer.pipelines.flows import pipeline_ages, pipeline_all, pipeline_fetch
from tenureminer.pipelines.runner import Pipeline, Step
from tenureminer.tasks import age_timeseries, fetch_terms

runner = CliRunner()


@pytest.fixture
def raw_file(tmp_path, raw_doc):
    path = tmp_path / "terms_raw.json"
    path.write_text(json.dumps(raw_doc), encoding="utf-8")
    return path


class TestRunner:

    def test_steps_run_in_order_with_kwargs(self):
        calls = []
        p = Pipeline("demo", [
            Step("one", lambda x: calls.append(x) or x, dict(x=1)),
            Step("two", lambda: calls.append(2) or 2),
        ])
        assert p.run() == {"one": 1, "two": 2}
        assert calls == [1, 2]

    def test_step_records_elapsed_time(self):
        s = Step("one", lambda: 1)
        assert s.elapsed is None
        s.run()
        assert s.elapsed is not None and s.elapsed >= 0
        assert repr(s).startswith("Step('one'")

    def test_failure_stops_the_pipeline(self):
        later = MagicMock()

        def boom():
            raise RuntimeError("nope")

        p = Pipeline("demo", [Step("boom", boom), Step("later", later)])
        with pytest.raises(RuntimeError):
            p.run()
        later.assert_not_called()


def test_age_timeseries_task_writes_outputs(raw_file, tmp_path, config):
    outdir = tmp_path / "out"
    summary = age_timeseries.run(str(raw_file), str(outdir), config)

    samples = pd.read_csv(outdir / age_timeseries.SAMPLES_CSV)
    # Anna 1980..1990 only; her second stint and Bernd's term are outside 1979..1991
    assert samples["year"].tolist() == list(range(1980, 1991))
    assert samples["age"].tolist() == [y - 1940 for y in range(1980, 1991)]
    assert (outdir / age_timeseries.SUMMARY_CSV).exists()
    assert (outdir / age_timeseries.CHART_HTML).exists()
    assert summary["members"].tolist() == [1] * 11


def test_age_timeseries_task_without_plot(raw_file, tmp_path, config):
    outdir = tmp_path / "out"
    age_timeseries.run(str(raw_file), str(outdir), config, plot=False)
    assert not (outdir / age_timeseries.CHART_HTML).exists()


def test_fetch_task_writes_raw_document(tmp_path, raw_doc):
    client = MagicMock(spec=SparqlClient)
    client.query.return_value = raw_doc
    out = fetch_terms.run(str(tmp_path / "data" / "raw.json"), "Q1939555", client=client)

    assert json.loads(out.read_text(encoding="utf-8")) == raw_doc
    assert "wd:Q1939555" in client.query.call_args.args[0]


def test_flows_are_built_from_overrides(tmp_path, config):
    p = pipeline_ages(raw_file="in.json", outdir=str(tmp_path), config=config)
    assert [s.name for s in p.steps] == ["age_timeseries"]
    assert p.steps[0].kwargs == dict(raw_file="in.json", outdir=str(tmp_path), config=config)

    assert [s.name for s in pipeline_fetch().steps] == ["fetch_terms"]
    assert [s.name for s in pipeline_all().steps] == ["fetch_terms", "age_timeseries"]


class TestCli:

    def test_ages_command(self, raw_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli.app, [
            "ages", "--input", str(raw_file), "--outdir", "out",
            "--start", "1979", "--end", "1991", "--fallback", "2022-12-31",
        ])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "out" / age_timeseries.SUMMARY_CSV).exists()

    def test_bad_fallback_is_a_usage_error(self, raw_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli.app, ["ages", "--input", str(raw_file), "--fallback", "31.12.2022"])
        assert result.exit_code == 2

    def test_reversed_range_is_a_usage_error(self, raw_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli.app, ["ages", "--input", str(raw_file), "--start", "2000", "--end", "1990"])
        assert result.exit_code == 2

    def test_invalid_interval_exits_non_zero(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps([
            {"label": "Z", "birth_date": "1950-01-01", "tenure_start": "1990-01-01", "tenure_end": "1980-01-01"},
        ]), encoding="utf-8")
        result = runner.invoke(cli.app, ["ages", "--input", str(bad), "--outdir", "out"])
        assert result.exit_code == 1

    def test_unknown_pipeline(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli.app, ["run", "nope"])
        assert result.exit_code != 0


class TestCliInputErrors:

    def test_missing_input_file(self, tmp_path, monkeypatch, caplog):
        monkeypatch.chdir(tmp_path)
        with caplog.at_level("ERROR"):
            result = runner.invoke(cli.app, ["ages", "--input", "nope.json", "--outdir", "out"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, FileNotFoundError)
        assert "nope.json" in caplog.text

    def test_document_without_bindings(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "raw.json"
        path.write_text(json.dumps({"head": {}}), encoding="utf-8")
        result = runner.invoke(cli.app, ["ages", "--input", str(path), "--outdir", "out"])
        assert result.exit_code == 1

    def test_records_that_are_not_objects(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "raw.json"
        path.write_text(json.dumps(["a", "b"]), encoding="utf-8")
        result = runner.invoke(cli.app, ["ages", "--input", str(path), "--outdir", "out"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, AttributeError)

    def test_year_zero_is_a_usage_error(self, raw_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli.app, ["ages", "--input", str(raw_file), "--start", "0", "--end", "2"])
        assert result.exit_code == 2
