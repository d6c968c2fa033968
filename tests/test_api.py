from fastapi.testclient import TestClient

from api import app

client = TestClient(app)


def test_analyze_endpoint(sample_project):
	resp = client.post("/analyze", json={"root_path": str(sample_project)})
	assert resp.status_code == 200
	data = resp.json()
	assert data["name"] == "proj"
	assert [n["role"] for n in data["architecture"]] == ["component", "page"]
	assert data["statistics"]["languages"]["TypeScript"] == 2


def test_analyze_rejects_missing_directory(tmp_path):
	resp = client.post("/analyze", json={"root_path": str(tmp_path / "missing")})
	assert resp.status_code == 400


def test_layout_endpoint(sample_project):
	(sample_project / "src" / "pages" / "About.tsx").write_text(
		"import { Home } from './Home.tsx'\nexport const About = () => null"
	)
	resp = client.post(
		"/layout",
		json={"root_path": str(sample_project), "view_mode": "dependencies", "width": 400, "height": 300},
	)
	assert resp.status_code == 200
	scene = resp.json()
	assert scene["state"] == "settled"
	assert scene["width"] == 400
	assert len(scene["nodes"]) == 3
	# Only imports that spell out a file name become edges
	assert [(l["source"], l["target"]) for l in scene["links"]] == [
		("proj/src/pages/About.tsx", "proj/src/pages/Home.tsx")
	]


def test_layout_rejects_empty_canvas(sample_project):
	resp = client.post("/layout", json={"root_path": str(sample_project), "width": 0})
	assert resp.status_code == 400
