import asyncio

import pytest

from archmap.errors import ReadFailure
from archmap.model import DependencyRecord
from archmap.pipeline import analyze_project, read_project_files
from archmap.sources import scan_directory


def test_analyze_local_project(sample_project):
	progress = []
	analysis = asyncio.run(analyze_project(scan_directory(str(sample_project)), on_progress=progress.append))

	assert analysis.name == "proj"
	assert [n.id for n in analysis.architecture] == [
		"proj/src/components/Button.tsx",
		"proj/src/pages/Home.tsx",
	]
	button, home = analysis.architecture
	assert button.role.value == "component"
	assert home.role.value == "page"
	assert button.dependents == ["proj/src/pages/Home.tsx"]
	assert home.dependencies == ["react", "./components/Button"]

	assert list(analysis.dependencies) == [button.id, home.id]
	assert analysis.dependencies[home.id].exports == ["Home"]

	# README.md plus the two components; logo.png and node_modules are skipped
	assert analysis.statistics.total_files == 3
	assert analysis.statistics.components == 1
	assert analysis.statistics.pages == 1

	assert [n.path for n in analysis.files] == ["proj"]
	assert progress[-1] == 100
	assert progress == sorted(progress)


def test_empty_collection():
	analysis = asyncio.run(analyze_project([]))
	assert analysis.name == "Untitled Project"
	assert analysis.statistics.total_files == 0
	assert analysis.architecture == []
	assert analysis.dependencies == {}


def test_read_failure_aborts(fake_handle):
	handles = [
		fake_handle("proj/src/ok.ts", "export const ok = 1"),
		fake_handle("proj/src/broken.ts", error=OSError("disk on fire")),
	]
	with pytest.raises(ReadFailure) as excinfo:
		asyncio.run(analyze_project(handles))
	assert excinfo.value.path == "proj/src/broken.ts"
	assert "disk on fire" in str(excinfo.value)


@pytest.mark.parametrize("error", [RuntimeError("upload closed"), ValueError("bad bytes")])
def test_any_read_error_becomes_read_failure(fake_handle, error):
	with pytest.raises(ReadFailure) as excinfo:
		asyncio.run(read_project_files([fake_handle("proj/a.ts", error=error)]))
	assert excinfo.value.__cause__ is error


def test_order_follows_input_not_completion(fake_handle):
	handles = [
		fake_handle("p/slow.ts", "export const a = 1", delay=0.05),
		fake_handle("p/fast.ts", "export const b = 1"),
		fake_handle("p/image.png", "binary"),
	]
	files = asyncio.run(read_project_files(handles, max_concurrent=4))
	assert [f.path for f in files] == ["p/slow.ts", "p/fast.ts"]


def test_custom_extractor_is_used(fake_handle):
	class StubExtractor:
		def extract(self, content, path):
			return DependencyRecord(imports=["stub"], dependencies=["stub"])

	analysis = asyncio.run(analyze_project([fake_handle("p/a.py", "x = 1")], extractor=StubExtractor()))
	assert analysis.dependencies["p/a.py"].imports == ["stub"]
	assert analysis.architecture[0].dependencies == ["stub"]
