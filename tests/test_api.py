"""Tests for the FastAPI endpoints."""


def _upload(content: bytes, filename: str = "data.csv"):
    return {"file": (filename, content, "text/csv")}


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_profile_endpoint(client, sample_csv):
    response = client.post("/profile/", files=_upload(sample_csv))
    assert response.status_code == 200

    payload = response.json()
    assert payload["columns"] == ["id", "name", "value", "score"]
    assert payload["numericColumns"] == ["id", "value", "score"]
    assert payload["categoricalColumns"] == ["name"]
    assert payload["rows"][0] == {"id": 1.0, "name": "Alice", "value": 100.0, "score": 4.0}
    assert payload["rows"][3]["value"] is None

    value_stats = next(s for s in payload["stats"] if s["name"] == "value")
    assert value_stats["nullCount"] == 1
    assert value_stats["mean"] == 200.0
    assert payload["correlations"]["id"]["id"] == 1.0


def test_profile_rejects_non_csv(client, sample_csv):
    response = client.post("/profile/", files=_upload(sample_csv, "data.txt"))
    assert response.status_code == 400


def test_profile_rejects_unparseable_csv(client):
    response = client.post("/profile/", files=_upload(b"a,b\n1,2\n3,4,5,6\n"))
    assert response.status_code == 400


def test_profile_missing_file(client):
    response = client.post("/profile/")
    assert response.status_code == 422


def test_profile_empty_csv(client):
    response = client.post("/profile/", files=_upload(b""))
    assert response.status_code == 200
    assert response.json()["columns"] == []


def test_preview_endpoint(client, sample_csv):
    response = client.post("/preview/?page=0", files=_upload(sample_csv))
    assert response.status_code == 200
    payload = response.json()
    assert payload["totalRows"] == 4
    assert payload["totalPages"] == 1
    assert len(payload["rows"]) == 4


def test_histograms_endpoint(client, sample_csv):
    response = client.post("/histograms/", files=_upload(sample_csv))
    assert response.status_code == 200
    assert [h["column"] for h in response.json()] == ["id", "value", "score"]


def test_export_stats_endpoint(client, sample_csv):
    response = client.post("/export/stats/", files=_upload(sample_csv))
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]
    assert response.text.startswith("Column,Type,Count")


def test_export_correlations_endpoint(client, sample_csv):
    response = client.post("/export/correlations/", files=_upload(sample_csv))
    assert response.status_code == 200
    assert response.text.startswith("Variable,id,value,score")


def test_export_correlations_needs_two_numeric_columns(client):
    response = client.post("/export/correlations/", files=_upload(b"a,b\n1,x\n2,y\n"))
    assert response.status_code == 400


def test_export_report_endpoint(client, sample_csv):
    response = client.post("/export/report/", files=_upload(sample_csv))
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")
