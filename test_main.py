from fastapi.testclient import TestClient

from main import app

client = TestClient(app)

LORDS = {"Ketu", "Venus", "Sun", "Moon", "Mars", "Rahu", "Jupiter", "Saturn", "Mercury"}


def test_root_banner():
    r = client.get("/")
    assert r.status_code == 200
    assert "/horoscope" in r.text and "/dasha" in r.text and "/match" in r.text


def test_health():
    r = client.get("/api/health")
    assert r.status_code == 200, r.text
    j = r.json()
    assert j["status"] == "ok"
    assert any(e.startswith("GET /match") for e in j["endpoints"])


def test_request_id_is_echoed():
    r = client.get("/api/health", headers={"X-Request-ID": "rid-test-01"})
    assert r.headers["X-Request-ID"] == "rid-test-01"
    assert client.get("/api/health").headers.get("X-Request-ID")


def test_horoscope_for_date():
    r = client.get("/horoscope", params={"date": "1992-04-12"})
    assert r.status_code == 200, r.text
    j = r.json()
    assert j["date"] == "Sun Apr 12 1992"
    assert j["sun_sign"] == "Meena"
    assert j["moon_sign"] == "Kataka"
    assert j["moon_star"] == "Ashlesha"


def test_horoscope_defaults_to_now():
    r = client.get("/horoscope")
    assert r.status_code == 200, r.text
    assert set(r.json()) >= {"date", "sun_sign", "moon_sign", "moon_star"}


def test_horoscope_invalid_date():
    r = client.get("/horoscope", params={"date": "not-a-date"})
    assert r.status_code == 400
    assert r.json()["error"].startswith("Invalid Date")


def test_dasha():
    r = client.get("/dasha", params={"date": "1992-04-12", "time": "00:00"})
    assert r.status_code == 200, r.text
    j = r.json()
    assert j["birth_date"] == "Sun Apr 12 1992"
    assert j["birth_star"] == "Ashlesha"
    assert j["current_status"]["running_dasha"] in LORDS
    assert j["current_status"]["time_remaining"].endswith(" years")


def test_dasha_requires_date():
    r = client.get("/dasha")
    assert r.status_code == 400
    assert r.json() == {"error": "Please provide ?date=YYYY-MM-DD"}


def test_dasha_rejects_bad_time():
    r = client.get("/dasha", params={"date": "1998-05-15", "time": "7pm"})
    assert r.status_code == 400
    assert "error" in r.json()


def test_dasha_rejects_future_birth():
    r = client.get("/dasha", params={"date": "2999-01-01"})
    assert r.status_code == 400
    assert "later" in r.json()["error"]


def test_blank_time_uses_default_birth_time():
    blank = client.get("/dasha/timeline", params={"date": "1998-05-15", "time": ""})
    noon = client.get("/dasha/timeline", params={"date": "1998-05-15", "time": "12:00"})
    assert blank.status_code == 200, blank.text
    assert blank.json()["periods"] == noon.json()["periods"]


def test_dasha_timeline():
    r = client.get("/dasha/timeline", params={"date": "1992-04-12", "time": "00:00"})
    assert r.status_code == 200, r.text
    j = r.json()
    assert j["system"] == "Vimshottari"
    assert j["periods"][0]["lord"] == "Mercury"
    assert j["periods"][0]["start"] == "1992-04-12"
    assert len(j["periods"]) == 10
    assert j["current"]["maha_dasha"] in LORDS


def test_match_by_dates():
    r = client.get("/match", params={"b_date": "1992-04-12", "g_date": "1992-04-12"})
    assert r.status_code == 200, r.text
    j = r.json()
    assert j["boy"] == {"star": "Ashlesha", "rasi": "Kataka"}
    assert j["compatibility"] == {"score": "3/10", "status": "Poor", "count_from_girl": 1}


def test_match_by_names():
    r = client.get("/match", params={
        "boy_star": "Bharani", "girl_star": "Ashwini", "boy_rasi": "Thula", "girl_rasi": "Mesha",
    })
    assert r.status_code == 200, r.text
    assert r.json()["compatibility"] == {"score": "10/10", "status": "Excellent", "count_from_girl": 2}


def test_match_unknown_star_name():
    r = client.get("/match", params={
        "boy_star": "Sirius", "girl_star": "Ashwini", "boy_rasi": "Thula", "girl_rasi": "Mesha",
    })
    assert r.status_code == 400
    assert "Sirius" in r.json()["error"]


def test_match_requires_dates():
    r = client.get("/match", params={"b_date": "1995-10-10"})
    assert r.status_code == 400
    assert r.json() == {"error": "Please provide birth dates: ?b_date=YYYY-MM-DD&g_date=YYYY-MM-DD"}


def test_match_invalid_date():
    r = client.get("/match", params={"b_date": "1995-02-30", "g_date": "1998-05-15"})
    assert r.status_code == 400


def test_pdf_report():
    r = client.get("/report", params={"date": "1992-04-12", "time": "00:00", "name": "Test"})
    assert r.status_code == 200, r.text
    assert r.headers["content-type"] == "application/pdf"
    assert r.content.startswith(b"%PDF")


def test_unknown_route_uses_error_envelope():
    r = client.get("/nope")
    assert r.status_code == 404
    assert "error" in r.json()
