# /tests/test_routers.py

from fastapi.testclient import TestClient

from app.core import config
from app.core.http_errors import ERROR_KIND_HEADER
from app.main import app


def _class_payload(school, **overrides):
    payload = {
        "name": "9A",
        "classGroupId": school.group,
        "campusId": school.campus,
        "capacity": 30,
        "status": "ACTIVE",
        "classTutorId": school.alice,
        "teacherIds": [school.alice],
    }
    payload.update(overrides)
    return payload


# --- Health & Auth ---

def test_health_check(anonymous_client):
    response = anonymous_client.get("/")

    assert response.status_code == 200
    assert response.json()["version"] == config.APP_VERSION


def test_class_procedures_require_a_caller(anonymous_client):
    response = anonymous_client.get("/api/classes")

    assert response.status_code == 401
    assert response.json()["detail"] == "You must be logged in to access this resource"
    assert response.headers[ERROR_KIND_HEADER] == "UNAUTHORIZED"


def test_unknown_caller_is_anonymous(anonymous_client):
    response = anonymous_client.get("/api/classes", headers={config.USER_HEADER: "usr_ghost"})

    assert response.status_code == 401


# --- Classes ---

def test_create_then_fetch_class(client, school):
    created = client.post("/api/classes", json=_class_payload(school))
    assert created.status_code == 201
    class_id = created.json()["id"]

    listed = client.get("/api/classes")
    schedule = client.get(f"/api/classes/{class_id}/schedule")

    assert [c["id"] for c in listed.json()] == [class_id]
    assert schedule.status_code == 200
    assert schedule.json()["teachers"][0]["isClassTeacher"] is True


def test_create_class_validation_error(client, school):
    response = client.post("/api/classes", json=_class_payload(school, capacity=0, name=""))

    assert response.status_code == 422


def test_search_classes_query_aliases(client, school, make_class):
    make_class("9A")
    make_class("9B", status="INACTIVE")

    active = client.get("/api/classes/search", params={"classGroupId": school.group})
    inactive = client.get("/api/classes/search", params={"status": "INACTIVE"})

    assert [c["name"] for c in active.json()] == ["9A"]
    assert [c["name"] for c in inactive.json()] == ["9B"]


def test_unknown_class_lookups(client):
    assert client.get("/api/classes/cls_missing").json() is None
    assert client.get("/api/classes/cls_missing/schedule").status_code == 404

    details = client.get("/api/classes/cls_missing/details")
    assert details.status_code == 404
    assert details.json()["detail"] == "Class not found"


def test_delete_class(client, make_class):
    class_id = make_class("Doomed")

    deleted = client.delete(f"/api/classes/{class_id}")
    again = client.delete(f"/api/classes/{class_id}")

    assert deleted.status_code == 200
    assert deleted.json()["name"] == "Doomed"
    assert again.status_code == 404
    assert again.headers[ERROR_KIND_HEADER] == "NOT_FOUND"


def test_update_class(client, school, make_class):
    class_id = make_class()

    response = client.put(f"/api/classes/{class_id}", json=_class_payload(school, name="9A Prime", teacherIds=[school.bob], classTutorId=None))

    assert response.status_code == 200
    assert response.json()["name"] == "9A Prime"
    assert [t["userId"] for t in response.json()["teachers"]] == [school.bob]


def test_gradebook_endpoint(client, make_class):
    class_id = make_class()

    first = client.get(f"/api/classes/{class_id}/gradebook")
    second = client.get(f"/api/classes/{class_id}/gradebook")

    assert first.status_code == 200
    assert first.json()["id"] == second.json()["id"]
    assert client.get("/api/classes/cls_missing/gradebook").status_code == 404


def test_analytics_endpoints_need_a_window(client, make_class):
    class_id = make_class()
    window = {"startDate": "2024-03-01T00:00:00", "endDate": "2024-03-31T23:59:59"}

    assert client.get(f"/api/classes/{class_id}/analytics/attendance").status_code == 422
    attendance = client.get(f"/api/classes/{class_id}/analytics/attendance", params=window)
    performance = client.get(f"/api/classes/{class_id}/analytics/performance", params=window)
    history = client.get(f"/api/classes/{class_id}/analytics/history", params=window)

    assert attendance.json() == {"trends": [], "averageAttendance": 0}
    assert performance.json() == {"data": [], "subjectWise": []}
    assert history.json() == {"studentGrowth": 0, "historicalData": []}


def test_mine_lists_classes_of_the_calling_teacher(override_db, school, client):
    client.post("/api/classes", json=_class_payload(school, teacherIds=[school.alice]))
    client.post("/api/classes", json=_class_payload(school, name="9B", teacherIds=[], classTutorId=None))
    alice = TestClient(app, headers={config.USER_HEADER: school.alice})

    assert [c["name"] for c in alice.get("/api/classes/mine").json()] == ["9A"]


# --- Teachers & Subjects ---

def test_teacher_endpoints(client, school):
    created = client.post("/api/teachers", json={"name": "Carol", "subjectIds": [school.physics]})
    assert created.status_code == 201
    teacher_id = created.json()["id"]

    updated = client.put(f"/api/teachers/{teacher_id}", json={"specialization": "Optics"})
    fetched = client.get(f"/api/teachers/{teacher_id}")
    searched = client.get("/api/teachers/search", params={"subjectId": school.physics})

    assert updated.json()["teacherProfile"]["specialization"] == "Optics"
    assert fetched.json()["teacherProfile"]["subjectIds"] == [school.physics]
    assert [t["id"] for t in searched.json()] == [teacher_id]
    assert client.get("/api/teachers/usr_missing").json() is None
    assert client.delete("/api/teachers/usr_missing").status_code == 404


def test_subject_endpoints(client, school):
    searched = client.get("/api/subjects/search")
    created = client.post("/api/subjects", json={"code": "BIO", "name": "Biology"})

    assert [s["code"] for s in searched.json()] == ["MATH", "PHY"]
    assert created.status_code == 201
    assert client.get(f"/api/subjects/{created.json()['id']}").json()["name"] == "Biology"
    assert client.get("/api/subjects/sub_missing").status_code == 404
