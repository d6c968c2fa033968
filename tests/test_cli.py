import json
import sys

import pytest

import cli


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
	monkeypatch.setattr(cli, "setup_logger", lambda **kwargs: None)


def _main(monkeypatch, *argv):
	monkeypatch.setattr(sys, "argv", ["archmap", *argv])
	cli.main()


def test_analyze_prints_json(monkeypatch, capsys, sample_project):
	_main(monkeypatch, "analyze", str(sample_project))
	data = json.loads(capsys.readouterr().out)
	assert data["name"] == "proj"
	assert [n["name"] for n in data["architecture"]] == ["Button.tsx", "Home.tsx"]


def test_analyze_summary(monkeypatch, capsys, sample_project):
	_main(monkeypatch, "analyze", str(sample_project), "--summary")
	out = capsys.readouterr().out
	assert out.startswith("Project proj: 3 files")
	assert "TypeScript (2)" in out
	assert "Dependencies: 3" in out


def test_render_writes_settled_svg(monkeypatch, sample_project, tmp_path):
	output = tmp_path / "diagram.svg"
	_main(monkeypatch, "render", str(sample_project), "-o", str(output), "--mode", "structure", "--width", "500")
	svg = output.read_text()
	assert 'data-state="settled"' in svg
	assert 'data-view-mode="structure"' in svg
	assert svg.count('class="diagram-node') == 2


def test_missing_directory_exits(monkeypatch, tmp_path):
	with pytest.raises(SystemExit) as excinfo:
		_main(monkeypatch, "analyze", str(tmp_path / "nope"))
	assert "Not a directory" in str(excinfo.value.code)


def test_invalid_configuration_exits(monkeypatch, capsys, sample_project):
	monkeypatch.setattr(cli.settings, "max_concurrent_reads", 0)
	with pytest.raises(SystemExit) as excinfo:
		_main(monkeypatch, "analyze", str(sample_project))
	assert excinfo.value.code == 2
	assert "Configuration error" in capsys.readouterr().err
