def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Latency-Ms" in response.headers


def test_evaluate_endpoint(client):
    response = client.post("/v1/marks/evaluate", json={"ca_score": "14.5", "exam_score": 17, "coefficient": 2})
    assert response.status_code == 200
    assert response.json()["data"] == {"average": 15.75, "weighted": 31.5, "grade": "C", "remark": "Good"}


def test_evaluate_endpoint_fails_soft(client):
    response = client.post("/v1/marks/evaluate", json={"ca_score": None, "exam_score": "abc", "coefficient": "x"})
    assert response.status_code == 200
    assert response.json()["data"] == {"average": None, "weighted": None, "grade": None, "remark": None}


def test_annual_averages_endpoint(client, school):
    response = client.post("/v1/averages/annual", json={"academic_year_id": 2, "level_id": 2})
    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["summary"]["total_students"] == 3
    assert body["students"][0]["student_name"] == "Alice"
    assert body["students"][0]["position"] == 1


def test_missing_year_is_a_bad_request(client, school):
    response = client.post("/v1/averages/annual", json={"level_id": 2})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == {"code": "BAD_REQUEST", "message": "academic_year_id is required"}


def test_rankings_endpoint(client, school):
    response = client.get("/v1/rankings/", params={"academic_year_id": 2, "level_id": 2, "term_id": 22})
    students = response.json()["data"]["students"]
    assert [s["student_name"] for s in students] == ["Alice", "Bob", "Carol"]
    assert [s["average"] for s in students] == [15.83, 12.0, 0.0]


def test_student_position_endpoint(client, school):
    response = client.get("/v1/rankings/student/1", params={"academic_year_id": 2})
    assert response.json()["data"]["position"] == 1
    assert response.json()["data"]["total"] == 3


def test_report_card_endpoint(client, school):
    response = client.get("/v1/marks/report", params={"student_id": 1, "academic_year_id": 2, "term_id": 21})
    data = response.json()["data"]
    assert data["average"] == 14.83
    assert data["annual_average"] == 15.33
    assert data["position"] == 1
    assert [t["term_id"] for t in data["terms"]] == [21]
    assert data["terms"][0]["subjects"][0]["grade"] == "D"


def test_mutating_endpoints_require_token(client, school):
    assert client.post("/v1/repeaters/check", json={}).status_code == 401
    response = client.post(
        "/v1/promotions/run",
        json={"academic_year_id": 2, "next_academic_year_id": 3},
        headers={"Authorization": "Bearer wrong"},
    )
    assert response.status_code == 401


def test_repeaters_endpoint(client, school, auth_headers):
    response = client.post("/v1/repeaters/check", json={"academic_year_id": 2}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["summary"]["status_updates_made"] == 2


def test_promotions_endpoint(client, school, auth_headers):
    payload = {"academic_year_id": 2, "next_academic_year_id": 3, "level_id": 2}
    first = client.post("/v1/promotions/run", json=payload, headers=auth_headers).json()
    second = client.post("/v1/promotions/run", json=payload, headers=auth_headers).json()
    assert first["summary"]["enrollments_created"] == 3
    assert second["summary"]["enrollments_created"] == 0
    assert first["summary"]["promotion_rate"] == 33


def test_promotion_threshold_is_validated(client, school, auth_headers):
    payload = {"academic_year_id": 2, "next_academic_year_id": 3, "pass_threshold": 25}
    response = client.post("/v1/promotions/run", json=payload, headers=auth_headers)
    assert response.status_code == 422


def test_closed_year_cannot_be_promoted(client, school, auth_headers):
    payload = {"academic_year_id": 4, "next_academic_year_id": 2}
    response = client.post("/v1/promotions/run", json=payload, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "YEAR_CLOSED"


def test_statistics_endpoint(client, school):
    response = client.get("/v1/statistics/subjects", params={"academic_year_id": 2, "term_id": 21})
    assert response.status_code == 200
    subjects = [s["subject"] for s in response.json()["data"]["statistics"]]
    assert subjects == ["Mathematics", "English", "Physics"]

    data = response.json()["data"]
    assert [s["student_name"] for s in data["top_students"]] == ["Dan", "Alice", "Bob"]
    assert data["pass_fail"]["passed"]["total"] == 2
    assert data["department_performance"][0]["department_name"] == "Building"


def test_scoring_config_endpoint(client):
    data = client.get("/v1/config/scoring").json()["data"]
    assert data["grade_bands"][0] == {"grade": "A", "min": 18.5, "remark": "Excellent"}
    assert data["promotion"] == {"pass_threshold": 12.0, "max_promotable_level": 2}
    assert data["statistics"] == {
        "pass_mark": 10.0,
        "low_mark": 5.0,
        "student_pass_average": 12.0,
        "pass_rate_weight": 0.65,
        "average_weight": 0.35,
    }
