from __future__ import annotations

from sponsor_tracker.models.application import Application
from sponsor_tracker.models.application_status import ApplicationStatus
from sponsor_tracker.models.application_update import ApplicationUpdate


def _create(client, company_id: int):
    res = client.post(
        "/applications",
        json={"company_source": "existing", "company_id": company_id, "role": "Engineer", "notes": "mine"},
    )
    assert res.status_code == 201
    return res.json()


def test_user_cannot_touch_other_users_application(users, companies, client_for, db_session):
    user_a, user_b = users

    with client_for(user_a) as c_a:
        app = _create(c_a, companies["A"].id)

    with client_for(user_b) as c_b:
        assert c_b.get(f"/applications/{app['id']}").status_code == 404
        assert c_b.put(f"/applications/{app['id']}", json={"status": "OFFER"}).status_code == 404
        assert c_b.post(f"/applications/{app['id']}/updates", json={"note": "sneaky"}).status_code == 404
        assert c_b.delete(f"/applications/{app['id']}").status_code == 404

    db_session.expire_all()
    row = db_session.query(Application).filter_by(id=app["id"]).one()
    assert row.status.value == "APPLIED"
    assert row.user_id == user_a.id
    notes = [u.note for u in db_session.query(ApplicationUpdate).filter_by(application_id=app["id"])]
    assert notes == ["Initial note: mine"]


def test_user_list_only_returns_their_applications(users, companies, client_for):
    user_a, user_b = users

    with client_for(user_a) as c_a:
        _create(c_a, companies["A"].id)
        _create(c_a, companies["B"].id)

    with client_for(user_b) as c_b:
        _create(c_b, companies["A"].id)

    with client_for(user_a) as c_a2:
        res = c_a2.get("/applications")
        assert res.status_code == 200
        assert len(res.json()) == 2

    with client_for(user_b) as c_b2:
        res = c_b2.get("/applications")
        assert res.status_code == 200
        assert len(res.json()) == 1


def test_dashboard_is_per_user(users, companies, client_for, make_application):
    user_a, user_b = users
    make_application(user_b, companies["A"], status=ApplicationStatus.OFFER)

    with client_for(user_a) as c_a:
        body = c_a.get("/stats/dashboard").json()
        assert body["total"] == 0
