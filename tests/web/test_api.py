import pytest

from gradewise.database.store import InMemoryKeyValueStore
from gradewise.main import create_app

from ..conftest import SCHOOL_LAT, SCHOOL_LON


class StaticAnalyzer:
    def analyze(self, prompt, payload):
        return f"Performance analysis for {payload['student']['name']}: fine."


@pytest.fixture
def app():
    app = create_app("gradewise.config.testing", store=InMemoryKeyValueStore())
    container = app.extensions["gradewise.container"]
    container.user_service.add_user(name="Guru Contoh", email="guru@sekolah.id", password="password")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, email, password):
    return client.post("/api/login", json={"email": email, "password": password})


@pytest.fixture
def teacher(client):
    assert _login(client, "guru@sekolah.id", "password").status_code == 200
    return client


def _create_student(client, email="andi@sekolah.id"):
    resp = client.post(
        "/api/students",
        json={"name": "Andi Saputra", "email": email, "password": "secret1", "phone": "0812"},
    )
    assert resp.status_code == 201
    return resp.get_json()["student"]


def test_login_rejects_wrong_password(client):
    resp = _login(client, "guru@sekolah.id", "nope")

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Wrong email or password"}


def test_routes_require_login(client):
    assert client.get("/api/students").status_code == 401
    assert client.get("/api/leaderboard").status_code == 401


def test_teacher_manages_students_and_ratings(teacher):
    student = _create_student(teacher)
    assert student["device_registered"] is False

    category = teacher.post("/api/categories", json={"name": "Discipline"}).get_json()["category"]
    assert category["id"].startswith("manual:")

    resp = teacher.post(
        "/api/ratings",
        json={"student_id": student["id"], "date": "2025-01-06", "ratings": {category["id"]: 4}},
    )
    assert resp.status_code == 200
    rating = resp.get_json()["rating"]
    assert rating["id"] == f"{student['id']}-2025-01-06"
    assert rating["average"] == 4.0

    listed = teacher.get(f"/api/ratings?student_id={student['id']}").get_json()
    assert [r["id"] for r in listed] == [rating["id"]]


def test_attendance_category_is_protected(teacher):
    assert teacher.post("/api/categories", json={"name": "Attendance"}).status_code == 403
    assert teacher.delete("/api/categories/system:attendance").status_code == 403


def test_invalid_rating_payload(teacher):
    student = _create_student(teacher)

    resp = teacher.post("/api/ratings", json={"student_id": student["id"], "ratings": {"system:attendance": 5}})
    assert resp.status_code == 403

    resp = teacher.post("/api/ratings", json={"student_id": student["id"], "ratings": [1, 2]})
    assert resp.status_code == 400


def test_recap_csv_download(teacher):
    _create_student(teacher)

    resp = teacher.get("/api/recap.csv?period=all-time")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "gradewise_recap_all-time_" in resp.headers["Content-Disposition"]
    assert resp.data.startswith(b"\xef\xbb\xbf")
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0].startswith("Student Name,Total Points")
    assert lines[1] == '"Andi Saputra",0,0.00,0,0.0,N/A'


def test_recap_rejects_unknown_period(teacher):
    assert teacher.get("/api/recap?period=yearly").status_code == 400


def test_delete_student_and_last_teacher_guard(teacher, app):
    student = _create_student(teacher)

    assert teacher.delete(f"/api/students/{student['id']}").status_code == 200
    assert teacher.get(f"/api/students/{student['id']}").status_code == 404

    me = teacher.get("/api/me").get_json()
    assert teacher.delete(f"/api/users/{me['id']}").status_code == 400


def test_student_routes(teacher, client):
    _create_student(teacher)
    teacher.post("/api/logout")

    assert _login(client, "andi@sekolah.id", "secret1").status_code == 200
    assert client.get("/api/students").status_code == 403

    profile = client.get("/api/student/profile").get_json()
    assert profile["phone"] == "0812"

    resp = client.post(
        "/api/student/check-in",
        json={"latitude": SCHOOL_LAT + 0.01, "longitude": SCHOOL_LON, "device_id": "phone-1"},
    )
    assert resp.status_code == 400
    assert "too far" in resp.get_json()["message"]

    resp = client.post("/api/student/check-in", json={"device_id": "phone-1", "geolocation_error": 3})
    assert resp.status_code == 400

    resp = client.post("/api/student/absence", json={"status": "sick", "reason": "Fever"})
    assert resp.status_code == 200
    assert resp.get_json()["record"]["status"] == "sick"

    history = client.get("/api/student/attendance").get_json()
    assert history["today"]["status"] == "sick"
    assert client.get("/api/leaderboard").status_code == 200


def test_analysis_unavailable_without_analyzer(teacher):
    student = _create_student(teacher)

    resp = teacher.post(f"/api/students/{student['id']}/analysis")

    assert resp.status_code == 503


def test_analysis_with_analyzer():
    app = create_app("gradewise.config.testing", store=InMemoryKeyValueStore(), analyzer=StaticAnalyzer())
    app.extensions["gradewise.container"].user_service.add_user(
        name="Guru Contoh", email="guru@sekolah.id", password="password"
    )
    client = app.test_client()
    _login(client, "guru@sekolah.id", "password")
    student = _create_student(client)

    resp = client.post(f"/api/students/{student['id']}/analysis")

    assert resp.status_code == 200
    assert resp.get_json()["analysis"] == "Performance analysis for Andi Saputra: fine."


def test_settings_update(teacher):
    resp = teacher.put("/api/settings", json={"check_in_radius": 200, "late_time": "07:30"})

    assert resp.status_code == 200
    settings = teacher.get("/api/settings").get_json()
    assert settings["check_in_radius"] == 200
    assert settings["late_time"] == "07:30"
    assert settings["school_name"] == "SMKN 3 SOPPENG"

    assert teacher.put("/api/settings", json={"check_in_radius": 5}).status_code == 400


def test_unknown_route_is_json(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
