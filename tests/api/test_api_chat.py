from fastapi.testclient import TestClient

from core.errors import CompletionFailed
from professor.api.app import create_app


def test_chat_round_trip(api, services):
    r = api.post("/api/chat", json={"message": "Hi", "sessionId": "s1"})
    assert r.status_code == 200
    assert r.json() == {"response": "reply 1: Hi"}
    assert len(services.sessions.history("s1")) == 2


def test_chat_requires_message_and_session(api, services):
    assert api.post("/api/chat", json={"sessionId": "s1"}).status_code == 400
    r = api.post("/api/chat", json={"message": "Hi"})
    assert r.status_code == 400
    assert r.json() == {"error": "Message and sessionId are required"}
    assert len(services.sessions) == 0


def test_chat_provider_failure_is_generic_500(api, services, stub_client):
    stub_client.fail = True
    r = api.post("/api/chat", json={"message": "Hi", "sessionId": "s1"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to process message"}
    assert "overloaded" not in r.text
    history = services.sessions.history("s1")
    assert [t.role for t in history] == ["user"]


def test_chat_tracks_student_activity(api, services):
    teacher_id = api.post(
        "/api/teacher/register",
        json={"name": "A", "email": "a@x.com", "password": "p"},
    ).json()["teacherId"]
    code = api.post(
        "/api/teacher/create-class",
        json={"teacherId": teacher_id, "className": "Bio 101"},
    ).json()["class"]["joinCode"]
    student_id = api.post(
        "/api/student/join", json={"joinCode": code, "studentName": "Sam"}
    ).json()["studentId"]
    r = api.post(
        "/api/chat",
        json={
            "message": "Hi",
            "sessionId": "s1",
            "studentId": student_id,
            "promptTitle": "Design an Experiment",
        },
    )
    assert r.status_code == 200
    classes = api.get(f"/api/teacher/{teacher_id}/classes").json()["classes"]
    assert classes[0]["recentActivity"] == 1
    activity = classes[0]["conversations"][0]
    assert activity["promptTitle"] == "Design an Experiment"
    assert activity["messageCount"] == 2
    students = api.get(f"/api/teacher/{teacher_id}/students").json()["students"]
    assert students[0]["conversationCount"] == 1


def test_clear_is_idempotent(api, services):
    api.post("/api/chat", json={"message": "Hi", "sessionId": "s1"})
    assert api.post("/api/clear", json={"sessionId": "s1"}).json() == {
        "success": True
    }
    assert api.post("/api/clear", json={"sessionId": "s1"}).json() == {
        "success": True
    }
    assert api.post("/api/clear", json={}).json() == {"success": True}
    assert "s1" not in services.sessions


def test_unexpected_client_error_is_masked(services, stub_client, monkeypatch):
    def explode(system_prompt, turns):
        raise RuntimeError("secret stack detail")

    monkeypatch.setattr(stub_client, "complete", explode)
    client = TestClient(create_app(services), raise_server_exceptions=False)
    r = client.post("/api/chat", json={"message": "Hi", "sessionId": "s1"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to process message"}
    assert "secret" not in r.text


def test_completion_failed_class_maps_to_500():
    assert CompletionFailed.status == 500


def test_unhandled_route_error_is_internal(services, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("registry corrupted")

    monkeypatch.setattr(services.registry, "authenticate", explode)
    client = TestClient(create_app(services), raise_server_exceptions=False)
    r = client.post("/api/teacher/login", json={"email": "a", "password": "b"})
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}
