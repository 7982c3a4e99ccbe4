"""Unit tests for YAML job-file parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import LogrouteConfig
from core.errors import LogrouteConfigError
from core.job_spec import load_job_spec


def _write_job_file(tmp_path: Path, text: str) -> str:
    job_file = tmp_path / "job.yaml"
    job_file.write_text(text, encoding="utf-8")
    return str(job_file)


def test_load_job_spec_parses_settings(tmp_path: Path) -> None:
    """Valid job file should parse every setting and resolve relative paths."""
    spec_path = _write_job_file(
        tmp_path,
        "version: 1\n"
        "settings:\n"
        "  input_dir: logs\n"
        "  output_dir: out\n"
        "  max_workers: 2\n"
        "  compression_level: 9\n"
        "  abort_on_write_error: true\n",
    )

    spec = load_job_spec(spec_path)

    assert (
        spec.input_dir == (tmp_path / "logs").resolve()
        and spec.output_dir == (tmp_path / "out").resolve()
        and spec.max_workers == 2
        and spec.compression_level == 9
        and spec.abort_on_write_error is True
        and spec.input_suffix is None
    )


def test_apply_to_overrides_only_present_settings(tmp_path: Path) -> None:
    """Job file should leave unset fields at their configured values."""
    spec = load_job_spec(_write_job_file(tmp_path, "version: 1\nsettings:\n  max_workers: 4\n"))
    base_config = LogrouteConfig(input_dir=tmp_path / "in", output_dir=tmp_path / "out")

    config = spec.apply_to(base_config)

    assert config.max_workers == 4 and config.input_dir == tmp_path / "in"


@pytest.mark.parametrize(
    "text",
    [
        "version: 2\n",
        "settings: {}\n",
        "version: 1\nextra: true\n",
        "version: 1\nsettings:\n  unknown_key: 1\n",
        "version: 1\nsettings:\n  compression_level: 12\n",
        "version: 1\nsettings:\n  max_workers: '4'\n",
        "version: 1\nsettings:\n  abort_on_write_error: 'yes'\n",
        "version: 1\nsettings: [1, 2]\n",
        "version: [1\n",
        "",
    ],
)
def test_load_job_spec_rejects_invalid_files(tmp_path: Path, text: str) -> None:
    """Schema violations, bad YAML, and empty files should raise config errors."""
    spec_path = _write_job_file(tmp_path, text)

    with pytest.raises(LogrouteConfigError):
        load_job_spec(spec_path)

    assert Path(spec_path).exists()


def test_load_job_spec_missing_file_raises(tmp_path: Path) -> None:
    """Missing job file should raise a config error."""
    with pytest.raises(LogrouteConfigError):
        load_job_spec(str(tmp_path / "missing.yaml"))

    assert not (tmp_path / "missing.yaml").exists()
