from fastapi import HTTPException
import pytest

from app.models.job_application import JobApplication
from app.repositories.job_application_repo import JobApplicationRepository
from app.repositories.job_posting_repo import JobPostingRepository


def create_posting(client, headers):
    resp = client.post(
        "/job/posting",
        json={"title": "Landing page", "description": "Need a landing page", "budget": 300},
        headers=headers,
    )
    assert resp.status_code == 204
    return client.get("/job/postings/my", headers=headers).json()[0]["id"]


def apply(client, headers, job_id, **overrides):
    payload = {"job_id": job_id, "cover_letter": "I can do it", "proposed_rate": 40, "currency": "USD"}
    payload.update(overrides)
    return client.post("/job/application", json=payload, headers=headers)


@pytest.fixture
def posting(client, make_user):
    owner_id, owner_headers = make_user("employer")
    job_id = create_posting(client, owner_headers)
    return job_id, owner_headers


def test_apply_increments_application_count(client, make_user, posting):
    job_id, _ = posting
    _, headers = make_user("worker")

    resp = apply(client, headers, job_id)
    assert resp.status_code == 204

    body = client.get(f"/job/posting/{job_id}").json()
    assert body["application_count"] == 1

    mine = client.get("/job/applications", headers=headers).json()
    assert mine["count"] == 1
    assert mine["list"][0]["status"] == "pending"
    assert mine["list"][0]["job_id"] == job_id


def test_second_application_is_rejected(client, make_user, posting):
    job_id, _ = posting
    _, headers = make_user("worker")
    apply(client, headers, job_id)

    resp = apply(client, headers, job_id, cover_letter="again")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "你已經應徵過此職缺"

    mine = client.get("/job/applications", headers=headers).json()
    assert mine["count"] == 1


def test_apply_to_missing_job_creates_nothing(client, make_user):
    _, headers = make_user("worker")
    resp = apply(client, headers, "missing-job")
    assert resp.status_code == 404
    assert client.get("/job/applications", headers=headers).json()["count"] == 0


def test_owner_lists_applications_for_posting(client, make_user, posting):
    job_id, owner_headers = posting
    for name in ["worker1", "worker2"]:
        _, headers = make_user(name)
        apply(client, headers, job_id)

    body = client.get("/job/applications", params={"job_id": job_id}, headers=owner_headers).json()
    assert body["count"] == 2

    _, stranger_headers = make_user("stranger")
    resp = client.get("/job/applications", params={"job_id": job_id}, headers=stranger_headers)
    assert resp.status_code == 403


def test_applications_list_is_restricted_to_caller(client, make_user, posting):
    job_id, _ = posting
    worker1_id, headers1 = make_user("worker1")
    _, headers2 = make_user("worker2")
    apply(client, headers1, job_id)

    # 不帶 job_id 時只看得到自己的應徵，即使指定他人的 applicant_id
    body = client.get("/job/applications", params={"applicant_id": worker1_id}, headers=headers2).json()
    assert body["count"] == 0


def test_application_status_permissions(client, make_user, posting):
    job_id, owner_headers = posting
    _, worker_headers = make_user("worker")
    apply(client, worker_headers, job_id)
    application_id = client.get("/job/applications", headers=worker_headers).json()["list"][0]["id"]

    # 應徵者不能接受自己的應徵
    resp = client.put(
        "/job/application/status",
        json={"id": application_id, "status": "accepted"},
        headers=worker_headers,
    )
    assert resp.status_code == 403

    # 刊登者不能替應徵者撤回
    resp = client.put(
        "/job/application/status",
        json={"id": application_id, "status": "withdrawn"},
        headers=owner_headers,
    )
    assert resp.status_code == 403

    resp = client.put(
        "/job/application/status",
        json={"id": application_id, "status": "accepted"},
        headers=owner_headers,
    )
    assert resp.status_code == 204

    # accepted 之後不能再撤回
    resp = client.put(
        "/job/application/status",
        json={"id": application_id, "status": "withdrawn"},
        headers=worker_headers,
    )
    assert resp.status_code == 400

    body = client.get("/job/applications", params={"job_id": job_id}, headers=owner_headers).json()
    assert body["list"][0]["status"] == "accepted"


def test_applicant_can_withdraw(client, make_user, posting):
    job_id, _ = posting
    _, headers = make_user("worker")
    apply(client, headers, job_id)
    application_id = client.get("/job/applications", headers=headers).json()["list"][0]["id"]

    resp = client.put(
        "/job/application/status",
        json={"id": application_id, "status": "withdrawn"},
        headers=headers,
    )
    assert resp.status_code == 204

    body = client.get("/job/applications", params={"status": "withdrawn"}, headers=headers).json()
    assert body["count"] == 1


def test_update_missing_application_is_not_found(client, make_user):
    _, headers = make_user("worker")
    resp = client.put(
        "/job/application/status",
        json={"id": "missing", "status": "withdrawn"},
        headers=headers,
    )
    assert resp.status_code == 404


def test_storage_unique_constraint_maps_to_bad_request(run_db):
    async def scenario(session):
        repo = JobApplicationRepository(session)
        await repo.create_job_application(JobApplication(job_id="j1", applicant_id="u1"))
        with pytest.raises(HTTPException) as exc_info:
            await repo.create_job_application(JobApplication(job_id="j1", applicant_id="u1"))
        remaining = await repo.get_job_applications_by_job_id("j1")
        return exc_info.value, remaining

    exc, remaining = run_db(scenario)
    assert exc.status_code == 400
    assert exc.detail == "你已經應徵過此職缺"
    assert len(remaining) == 1


def test_counter_failure_keeps_application(client, make_user, posting, monkeypatch):
    job_id, _ = posting
    _, headers = make_user("worker")

    async def failing_increment(self, posting_id):
        raise HTTPException(500, "資料庫錯誤")

    monkeypatch.setattr(JobPostingRepository, "increment_application_count", failing_increment)

    resp = apply(client, headers, job_id)
    assert resp.status_code == 204

    mine = client.get("/job/applications", headers=headers).json()
    assert mine["count"] == 1
    assert client.get(f"/job/posting/{job_id}").json()["application_count"] == 0
