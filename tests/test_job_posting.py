from datetime import datetime

from app.core.background import wait_for_background_tasks
from app.models.job_posting import JobPosting
from app.repositories.job_posting_repo import JobPostingRepository
from app.services.job_posting_service import JobPostingService


def posting_payload(**overrides):
    payload = {
        "title": "Build a REST API",
        "description": "FastAPI + MySQL\n\nRemote is fine",
        "budget": 1000,
        "currency": "USD",
        "budget_type": "fixed",
        "skills": ["Python", "FastAPI"],
        "location": "remote",
    }
    payload.update(overrides)
    return payload


def create_posting(client, headers, **overrides):
    resp = client.post("/job/posting", json=posting_payload(**overrides), headers=headers)
    assert resp.status_code == 204, resp.text
    mine = client.get("/job/postings/my", headers=headers).json()
    return mine[0]


def test_create_and_get_posting(client, make_user):
    user_id, headers = make_user("employer")
    posting = create_posting(client, headers, expires_at=1893456000)

    resp = client.get(f"/job/posting/{posting['id']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["user_id"] == user_id
    assert body["status"] == "open"
    assert body["skills"] == ["Python", "FastAPI"]
    assert body["description_html"] == "<p>FastAPI + MySQL</p>\n<p>Remote is fine</p>"
    assert body["expires_at"] == 1893456000
    assert body["application_count"] == 0


def test_expires_at_zero_means_no_expiry(client, make_user):
    _, headers = make_user("employer")
    posting = create_posting(client, headers)
    assert posting["expires_at"] == 0


def test_get_missing_posting_is_not_found(client):
    assert client.get("/job/posting/does-not-exist").status_code == 404


def test_create_requires_title(client, make_user):
    _, headers = make_user("employer")
    resp = client.post("/job/posting", json=posting_payload(title=""), headers=headers)
    assert resp.status_code == 400


def test_list_postings_with_filters(client, make_user):
    _, headers = make_user("employer")
    create_posting(client, headers, title="Go backend", skills=["Go"], budget=500, location="Berlin")
    create_posting(client, headers, title="React app", skills=["React"], budget=2000, currency="EUR")

    body = client.get("/job/postings").json()
    assert body["count"] == 2

    body = client.get("/job/postings", params={"skills": "go"}).json()
    assert [p["title"] for p in body["list"]] == ["Go backend"]

    body = client.get("/job/postings", params={"min_budget": 1000}).json()
    assert [p["title"] for p in body["list"]] == ["React app"]

    body = client.get("/job/postings", params={"location": "berlin"}).json()
    assert body["count"] == 1

    body = client.get("/job/postings", params={"currency": "EUR"}).json()
    assert body["count"] == 1

    body = client.get("/job/postings", params={"status": "closed"}).json()
    assert body["count"] == 0


def test_list_postings_rejects_unknown_status(client):
    resp = client.get("/job/postings", params={"status": "archived"})
    assert resp.status_code == 400


def test_update_posting_status_transitions(client, make_user):
    _, headers = make_user("employer")
    posting = create_posting(client, headers)

    resp = client.put(
        "/job/posting",
        json=posting_payload(id=posting["id"], title="Renamed", status="closed"),
        headers=headers,
    )
    assert resp.status_code == 204
    body = client.get(f"/job/posting/{posting['id']}").json()
    assert body["title"] == "Renamed"
    assert body["status"] == "closed"

    # closed -> filled 不允許
    resp = client.put(
        "/job/posting",
        json=posting_payload(id=posting["id"], status="filled"),
        headers=headers,
    )
    assert resp.status_code == 400

    # closed -> open -> filled，之後 filled 不可再變更
    for new_status in ["open", "filled"]:
        resp = client.put(
            "/job/posting",
            json=posting_payload(id=posting["id"], status=new_status),
            headers=headers,
        )
        assert resp.status_code == 204
    resp = client.put(
        "/job/posting",
        json=posting_payload(id=posting["id"], status="open"),
        headers=headers,
    )
    assert resp.status_code == 400


def test_only_owner_can_update_or_delete(client, make_user):
    _, owner_headers = make_user("employer")
    _, other_headers = make_user("intruder")
    posting = create_posting(client, owner_headers)

    resp = client.put("/job/posting", json=posting_payload(id=posting["id"], status="open"), headers=other_headers)
    assert resp.status_code == 403
    resp = client.delete(f"/job/posting/{posting['id']}", headers=other_headers)
    assert resp.status_code == 403


def test_delete_posting(client, make_user):
    _, headers = make_user("employer")
    posting = create_posting(client, headers)

    resp = client.delete(f"/job/posting/{posting['id']}", headers=headers)
    assert resp.status_code == 204
    assert client.get(f"/job/posting/{posting['id']}").status_code == 404
    assert client.get("/job/postings/my", headers=headers).json() == []


def test_get_posting_increments_views_in_background(run_db):
    async def scenario(session):
        posting = JobPosting(user_id="u1", title="t", description="d")
        await JobPostingRepository(session).create_job_posting(posting)

        resp = await JobPostingService(session).get_job_posting(posting.id)
        # 回應不等待背景累加
        assert resp.views_count == 0

        await wait_for_background_tasks()
        await session.refresh(posting)
        return posting.views_count

    assert run_db(scenario) == 1


def test_list_postings_newest_first(client, run_db):
    async def seed(session):
        session.add_all([
            JobPosting(user_id="u1", title="t1", description="d", created_at=datetime(2024, 1, 2)),
            JobPosting(user_id="u1", title="t2", description="d", created_at=datetime(2024, 1, 3)),
            JobPosting(user_id="u1", title="t0", description="d", created_at=datetime(2024, 1, 1)),
        ])
        await session.commit()

    run_db(seed)

    body = client.get("/job/postings").json()
    assert [p["title"] for p in body["list"]] == ["t2", "t1", "t0"]


def test_update_without_status_is_bad_request(client, make_user):
    _, headers = make_user("employer")
    posting = create_posting(client, headers)
    client.put(
        "/job/posting",
        json=posting_payload(id=posting["id"], status="closed"),
        headers=headers,
    )

    resp = client.put("/job/posting", json=posting_payload(id=posting["id"]), headers=headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "請求格式錯誤"

    body = client.get(f"/job/posting/{posting['id']}").json()
    assert body["status"] == "closed"
