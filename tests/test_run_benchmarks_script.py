import importlib.util
from pathlib import Path

import pytest

FAST_ARGS = ["--min-time", "0.0001", "--max-time", "0", "--min-samples", "2"]


def _load_script():
    module_path = Path(__file__).resolve().parents[1] / "scripts" / "run_benchmarks.py"
    spec = importlib.util.spec_from_file_location("run_benchmarks_module", module_path)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[attr-defined]
    return module


def _write_suite(tmp_path: Path) -> Path:
    path = tmp_path / "suite.yaml"
    path.write_text(
        "engine:\n  max_samples: 4\n"
        "suites:\n"
        "  - name: clocks\n"
        "    benchmarks:\n"
        "      - name: perf\n"
        "        target: 'time:perf_counter'\n"
        "      - name: mono\n"
        "        target: 'time:monotonic'\n"
        "  - name: nothing\n"
    )
    return path


def test_main_runs_suite_file(tmp_path: Path, capsys):
    script = _load_script()
    script.main(["--suite", str(_write_suite(tmp_path)), *FAST_ARGS])
    lines = [line for line in capsys.readouterr().out.splitlines() if line]
    assert lines[0] == "Benchmarking clocks"
    assert lines[1].startswith("perf x ")
    assert lines[2].startswith("mono x ")
    assert lines[3:] == ["Done", "Benchmarking nothing", "Done"]


def test_main_async_mode_finishes_every_suite(tmp_path: Path, capsys):
    script = _load_script()
    script.main(["--suite", str(_write_suite(tmp_path)), "--async", *FAST_ARGS])
    lines = [line for line in capsys.readouterr().out.splitlines() if line]
    assert lines[:2] == ["Benchmarking clocks", "Benchmarking nothing"]
    assert lines.count("Done") == 2
    assert len(lines) == 6


def test_main_default_demo_suites(capsys):
    script = _load_script()
    script.main(FAST_ARGS)
    lines = [line for line in capsys.readouterr().out.splitlines() if line]
    assert lines[0] == "Benchmarking containers"
    assert "Benchmarking strings" in lines
    assert lines.count("Done") == 2
    assert sum("ops/sec" in line for line in lines) == 6


def test_cli_overrides_are_validated(tmp_path: Path):
    script = _load_script()
    args = script.parse_args(["--min-samples", "500", "--max-time", "0.5"])
    config = script._apply_overrides(script.BenchConfig(), args)
    assert config.engine.min_samples == 500
    assert config.engine.max_samples == 500
    assert config.engine.max_time == 0.5

    bad = script.parse_args(["--min-time", "-1"])
    with pytest.raises(ValueError):
        script._apply_overrides(script.BenchConfig(), bad)
