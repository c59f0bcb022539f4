"""
Tests for the Flask JSON API, backed by a file store in a temporary directory.
"""
import json

import pytest

from app import app
from storage import FileStore


@pytest.fixture
def store(tmp_path, monkeypatch):
    file_store = FileStore(str(tmp_path / "data"))
    monkeypatch.setitem(app.config, "CLIENT_STORE", file_store)
    return file_store


@pytest.fixture
def client(store):
    return app.test_client()


@pytest.fixture
def jane(client):
    resp = client.post("/api/clients", json={"name": "Jane Doe"})
    assert resp.status_code == 201
    return resp.get_json()


@pytest.mark.integration
class TestClientsApi:

    def test_empty_list(self, client):
        resp = client.get("/api/clients")
        assert resp.status_code == 200
        assert resp.get_json() == []
        assert resp.headers["Access-Control-Allow-Origin"] == "*"

    def test_create(self, client, jane):
        assert jane["clientName"] == "Jane Doe"
        assert jane["id"].startswith("c_")
        assert jane["answers"] == {}
        listed = client.get("/api/clients").get_json()
        assert listed == [{"id": jane["id"], "name": "Jane Doe",
                           "createdAt": jane["createdAt"], "updatedAt": jane["updatedAt"]}]

    def test_create_without_name(self, client):
        resp = client.post("/api/clients", json={"name": "  "})
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Name required"}

    def test_create_with_bad_json(self, client):
        resp = client.post("/api/clients", data="{oops", content_type="application/json")
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Invalid JSON"}

    def test_get(self, client, jane):
        resp = client.get(f"/api/clients/{jane['id']}")
        assert resp.status_code == 200
        assert resp.get_json()["clientName"] == "Jane Doe"

    def test_get_missing(self, client):
        resp = client.get("/api/clients/c_0_missing")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Not found"}

    def test_get_invalid_id(self, client):
        resp = client.get("/api/clients/bad.id")
        assert resp.status_code == 400

    def test_put_merges(self, client, jane):
        resp = client.put(f"/api/clients/{jane['id']}", json={"advisor": "Sam Smith"})
        assert resp.status_code == 200
        resp = client.put(f"/api/clients/{jane['id']}", json={"answers": {"q1": {"value": "Jane"}}})
        body = resp.get_json()
        assert body["advisor"] == "Sam Smith"
        assert body["clientName"] == "Jane Doe"
        assert body["answers"] == {"q1": {"value": "Jane"}}
        assert body["updatedAt"] >= jane["updatedAt"]

    def test_put_renames_index_entry(self, client, jane):
        client.put(f"/api/clients/{jane['id']}", json={"clientName": "Jane Q. Doe"})
        assert client.get("/api/clients").get_json()[0]["name"] == "Jane Q. Doe"

    def test_delete(self, client, jane):
        resp = client.delete(f"/api/clients/{jane['id']}")
        assert resp.status_code == 200
        assert resp.get_json() == {"deleted": jane["id"]}
        assert client.get(f"/api/clients/{jane['id']}").status_code == 404
        assert client.get("/api/clients").get_json() == []

    def test_preflight(self, client):
        resp = client.open("/api/clients", method="OPTIONS")
        assert resp.status_code == 204
        assert "PUT" in resp.headers["Access-Control-Allow-Methods"]
        assert resp.headers["Access-Control-Allow-Headers"] == "Content-Type"

    def test_unknown_route(self, client):
        resp = client.get("/api/nothing-here")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Not found"}

    def test_unexpected_error_is_500_and_app_keeps_serving(self, client, store, monkeypatch):
        def broken():
            raise RuntimeError("index exploded")

        monkeypatch.setattr(store, "list_clients", broken)
        resp = client.get("/api/clients")
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "index exploded"}

        monkeypatch.undo()
        monkeypatch.setitem(app.config, "CLIENT_STORE", store)
        assert client.get("/api/clients").status_code == 200
        assert client.get("/api/schemas").status_code == 200


@pytest.mark.integration
class TestQuestionnaireApi:

    def test_schemas(self, client):
        assert client.get("/api/schemas").get_json() == ["cps", "ips"]
        ips = client.get("/api/schemas/ips").get_json()
        assert len(ips["sections"]) == 10
        assert ips["sections"][0]["startNumber"] == 1
        assert client.get("/api/schemas/xyz").status_code == 400

    def test_answer_action_and_progress(self, client, store, jane):
        resp = client.post(f"/api/clients/{jane['id']}/answers/q2",
                           json={"action": "toggle_option", "option": "Married"})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["questionId"] == "q2"
        assert body["answer"] == {"selections": ["Married"]}
        assert store.read_client(jane["id"]).answers["q2"] == {"selections": ["Married"]}

        progress = client.get(f"/api/clients/{jane['id']}/progress").get_json()
        assert progress["ips"]["answered"] == 1
        assert progress["ips"]["total"] == 54
        assert progress["ips"]["firstUnanswered"] == "q1"
        assert progress["cps"]["answered"] == 0

    def test_answer_action_errors(self, client, jane):
        url = f"/api/clients/{jane['id']}/answers"
        assert client.post(f"{url}/q2", json={"option": "Married"}).status_code == 400
        assert client.post(f"{url}/q2", json={"action": "toggle_option", "option": "Eloped"}).status_code == 400
        assert client.post(f"{url}/q999", json={"action": "set_value", "value": "x"}).status_code == 404

    def test_answer_body_keys_do_not_clash(self, client, jane):
        resp = client.post(f"/api/clients/{jane['id']}/answers/q1",
                           json={"action": "set_value", "value": "x", "question": "y", "answer": "z"})
        assert resp.status_code == 200
        assert resp.get_json()["answer"] == {"value": "x"}

    def test_export_txt(self, client, jane):
        resp = client.get(f"/api/clients/{jane['id']}/export/ips/txt")
        assert resp.status_code == 200
        assert resp.mimetype == "text/plain"
        assert "IPS_LLM_Jane_Doe.txt" in resp.headers["Content-Disposition"]
        text = resp.get_data(as_text=True)
        assert text.startswith("=" * 72)
        assert "Client Name: Jane Doe" in text
        resp.close()

    def test_export_json(self, client, jane):
        resp = client.get(f"/api/clients/{jane['id']}/export/cps/json")
        assert resp.status_code == 200
        assert resp.mimetype == "application/json"
        assert "Client_Data_Jane_Doe.json" in resp.headers["Content-Disposition"]
        assert json.loads(resp.get_data(as_text=True))["id"] == jane["id"]
        resp.close()

    def test_export_bad_format(self, client, jane):
        assert client.get(f"/api/clients/{jane['id']}/export/ips/pdf").status_code == 400
        assert client.get(f"/api/clients/{jane['id']}/export/xyz/txt").status_code == 400
        assert client.get("/api/clients/c_0_missing/export/ips/txt").status_code == 404
