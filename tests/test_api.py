from fastapi.testclient import TestClient

from api import app


client = TestClient(app)


def test_analyze_endpoint(sample_crate):
	response = client.post("/analyze", json={"crate_path": str(sample_crate)})
	assert response.status_code == 200
	body = response.json()
	assert body["facts"]["crate_name"] == "sample"
	assert [m["path"] for m in body["facts"]["modules"]] == ["alpha", "alpha::delta", "beta", "crate", "gamma"]
	assert {"from_module": "gamma", "to_module": "crate", "kind": "reference"} in body["facts"]["edges"]
	assert body["mermaid"].startswith("flowchart TD\n")
	assert body["summary"].startswith("Crate sample: 5 modules")


def test_analyze_excluding_tests(make_crate):
	crate = make_crate({"src/lib.rs": "mod tests {}\n"}, name="t")
	response = client.post("/analyze", json={"crate_path": str(crate), "crate_name": "named", "exclude_tests": True})
	assert response.status_code == 200
	facts = response.json()["facts"]
	assert facts["crate_name"] == "named"
	assert [m["path"] for m in facts["modules"]] == ["crate"]
	assert facts["edges"] == []


def test_invalid_path(tmp_path):
	response = client.post("/analyze", json={"crate_path": str(tmp_path / "missing")})
	assert response.status_code == 400


def test_analysis_error(tmp_path):
	response = client.post("/analyze", json={"crate_path": str(tmp_path)})
	assert response.status_code == 422
	assert response.json()["detail"].startswith("No crate root found")
