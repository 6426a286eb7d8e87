from fastapi import HTTPException
import pytest

from app.models.freelancer_profile import FreelancerProfile
from app.models.user import User
from app.schemas.freelancer_schema import HireFreelancerReq
from app.services.hire_service import HireService
from app.services.site_info_service import SiteInfoService
from app.schemas.user_schema import SiteGeneralResp


class RecordingEmailService:
    def __init__(self):
        self.sent = []

    async def send(self, to_email, subject, html_body):
        self.sent.append((to_email, subject, html_body))
        return True


class FailingEmailService:
    async def send(self, to_email, subject, html_body):
        raise RuntimeError("smtp down")


class StaticSiteInfoService(SiteInfoService):
    async def get_site_general(self):
        return SiteGeneralResp(name="Gig Hub", site_url="https://gighub.example")


async def seed(session, contact_email=None):
    session.add_all([
        User(user_id="freelancer", email="free@example.com", username="freelancer",
             display_name="Free Lancer", password_hash="x"),
        User(user_id="client", email="client@example.com", username="client",
             display_name="", password_hash="x"),
        FreelancerProfile(user_id="freelancer", contact_email=contact_email),
    ])
    await session.commit()


def hire_req(**overrides):
    data = {
        "freelancer_user_id": "freelancer",
        "subject": "Project offer",
        "message": "Let's <b>work</b> together",
        "login_user_id": "client",
    }
    data.update(overrides)
    return HireFreelancerReq(**data)


def test_hire_uses_profile_contact_email(run_db):
    email_service = RecordingEmailService()

    async def scenario(session):
        await seed(session, contact_email="work@example.com")
        service = HireService(session, email_service=email_service, site_info_service=StaticSiteInfoService())
        return await service.hire_freelancer(hire_req())

    resp = run_db(scenario)
    assert resp.success is True
    assert resp.message == "Hiring message sent successfully"

    assert len(email_service.sent) == 1
    to_email, subject, body = email_service.sent[0]
    assert to_email == "work@example.com"
    assert subject == "Project offer"
    assert "Gig Hub" in body
    assert "Hello Free Lancer" in body
    # 沒有 display_name 時使用 username
    assert "<strong>client</strong>" in body
    assert "client@example.com" in body
    assert "Let's <b>work</b> together" in body


def test_hire_falls_back_to_account_email(run_db):
    email_service = RecordingEmailService()

    async def scenario(session):
        await seed(session)
        await HireService(session, email_service=email_service).hire_freelancer(hire_req())

    run_db(scenario)
    assert email_service.sent[0][0] == "free@example.com"


def test_hire_email_failure_is_not_surfaced(run_db):
    async def scenario(session):
        await seed(session)
        return await HireService(session, email_service=FailingEmailService()).hire_freelancer(hire_req())

    assert run_db(scenario).success is True


@pytest.mark.parametrize("overrides", [
    {"freelancer_user_id": "nobody"},
    {"freelancer_user_id": "client"},  # 沒有工作者 Profile
    {"login_user_id": "ghost"},
])
def test_hire_not_found(run_db, overrides):
    email_service = RecordingEmailService()

    async def scenario(session):
        await seed(session)
        with pytest.raises(HTTPException) as exc_info:
            await HireService(session, email_service=email_service).hire_freelancer(hire_req(**overrides))
        return exc_info.value

    assert run_db(scenario).status_code == 404
    assert email_service.sent == []


def test_hire_endpoint(client, make_user):
    freelancer_id, freelancer_headers = make_user("freelancer")
    client.post("/freelancer/profile", json={"skills": ["Go"]}, headers=freelancer_headers)
    _, client_headers = make_user("client")

    resp = client.post(
        "/freelancer/hire",
        json={"freelancer_user_id": freelancer_id, "subject": "Hi", "message": "Interested?"},
        headers=client_headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Hiring message sent successfully"}


def test_hire_endpoint_validates_body(client, make_user):
    _, headers = make_user("client")
    resp = client.post("/freelancer/hire", json={"freelancer_user_id": "x", "subject": ""}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "請求格式錯誤"
