from pathlib import Path

from fastapi.testclient import TestClient

from src.taskbeat.domain.models import MASK_TOKEN
from src.taskbeat.presentation.app import create_app
from tests.conftest import StubAuditRecorder, StubTaskStore


def test_queue_task_accepts_and_masks(api_app) -> None:
    app, store, _ = api_app
    body = {
        "id": "t1",
        "containsPHI": True,
        "payload": {"patientName": "Angela", "phone": "9491203489"},
    }

    with TestClient(app) as client:
        response = client.post("/queue", json=body)

        assert response.status_code == 202
        assert response.json() == {"status": "task queued"}
        saved = store.get("t1")
        assert saved.payload == {"patientName": MASK_TOKEN, "phone": MASK_TOKEN}
        assert saved.created_at is not None


def test_queue_task_masks_every_sensitive_field(api_app) -> None:
    app, store, _ = api_app
    body = {
        "id": "integration2",
        "containsPHI": True,
        "payload": {
            "patientName": "Angela",
            "phone": "9491203489",
            "dob": "6/7/2001",
            "diagnosis": "Flu",
        },
    }

    with TestClient(app) as client:
        response = client.post("/queue", json=body)

    assert response.status_code == 202
    assert set(store.get("integration2").payload.values()) == {MASK_TOKEN}


def test_queue_task_writes_audit_line(api_app) -> None:
    app, _, audit = api_app

    with TestClient(app) as client:
        response = client.post(
            "/queue", json={"id": "random_test", "payload": {"patientName": "Randy"}}
        )

    # Leaving the client drains the worker.
    assert response.status_code == 202
    assert "TaskID=random_test" in Path(audit.path).read_text()


def test_queue_task_missing_id(api_app) -> None:
    app, store, _ = api_app

    with TestClient(app) as client:
        response = client.post(
            "/queue", json={"containsPHI": True, "payload": {"patientName": "Brad"}}
        )

    assert response.status_code == 400
    assert "missing" in response.text
    assert store.keys() == []


def test_queue_task_empty_payload(api_app) -> None:
    app, _, _ = api_app

    with TestClient(app) as client:
        response = client.post("/queue", json={"id": "t1", "payload": {}})

    assert response.status_code == 400
    assert "empty" in response.text


def test_queue_task_invalid_key(api_app) -> None:
    app, store, _ = api_app

    with TestClient(app) as client:
        response = client.post(
            "/queue",
            json={"id": "task1", "containsPHI": True, "payload": {"patientName": "Brad", "pirate": "har"}},
        )

    assert response.status_code == 400
    assert "invalid key" in response.text
    assert store.get("task1") is None


def test_queue_task_malformed_json(api_app) -> None:
    app, _, _ = api_app

    with TestClient(app) as client:
        response = client.post(
            "/queue", content=b"har har", headers={"Content-Type": "application/json"}
        )

    assert response.status_code == 400
    assert "Invalid" in response.text


def test_queue_task_store_failure_returns_500(env_settings) -> None:
    store = StubTaskStore(fail_puts=True)
    audit = StubAuditRecorder()
    app = create_app(store=store, audit=audit)

    with TestClient(app) as client:
        response = client.post("/queue", json={"id": "fail1", "payload": {"phone": "1234567890"}})

    assert response.status_code == 500
    assert "Failed to save task" in response.text
    assert audit.recorded == []


def test_queue_route_only_accepts_post(api_app) -> None:
    app, _, _ = api_app

    with TestClient(app) as client:
        response = client.get("/queue")

    assert response.status_code == 405


def test_newline_in_id_writes_a_single_audit_line(api_app) -> None:
    app, _, audit = api_app
    forged_id = "a\n2024-01-01T00:00:00+00:00 = TaskBeat Queue TaskID=forged PHI=false"

    with TestClient(app) as client:
        response = client.post("/queue", json={"id": forged_id, "payload": {"dob": "1/1/1990"}})

    assert response.status_code == 202
    lines = Path(audit.path).read_text().splitlines()
    assert len(lines) == 1
    assert "TaskID=a\\n2024-01-01" in lines[0]
