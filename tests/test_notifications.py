from app.services import notification_service

from conftest import auth_headers


def _seed(db, user, n):
    return [
        notification_service.notify(db, user_id=user.id, type="system", title=f"Note {i}", message="hello")
        for i in range(n)
    ]


def test_list_and_unread_count(db, client, employer):
    _seed(db, employer, 3)
    headers = auth_headers(employer)

    rows = client.get("/notifications", headers=headers).json()
    assert len(rows) == 3
    assert all(r["is_read"] is False for r in rows)
    assert client.get("/notifications/unread-count", headers=headers).json() == {"count": 3}
    assert len(client.get("/notifications", params={"limit": 2}, headers=headers).json()) == 2


def test_mark_read(db, client, employer):
    first, _ = _seed(db, employer, 2)
    headers = auth_headers(employer)

    r = client.post(f"/notifications/{first.id}/read", headers=headers)
    assert r.status_code == 200
    assert r.json()["is_read"] is True

    unread = client.get("/notifications", params={"unread_only": True}, headers=headers).json()
    assert len(unread) == 1
    assert unread[0]["id"] != str(first.id)


def test_cannot_mark_someone_elses_notification(db, client, employer, headhunter):
    (note,) = _seed(db, headhunter, 1)
    r = client.post(f"/notifications/{note.id}/read", headers=auth_headers(employer))
    assert r.status_code == 404
    assert r.json()["detail"] == "Notification not found"


def test_read_all(db, client, employer, headhunter):
    _seed(db, employer, 2)
    _seed(db, headhunter, 1)

    assert client.post("/notifications/read-all", headers=auth_headers(employer)).json() == {"updated": 2}
    assert notification_service.unread_count(db, employer.id) == 0
    assert notification_service.unread_count(db, headhunter.id) == 1
