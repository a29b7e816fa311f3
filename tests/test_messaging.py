from pathlib import Path

from app.core.config import settings
from app.services import messaging_service, notification_service

from conftest import auth_headers


def _send(client, sender, recipient, body, **extra):
    payload = {"to_user": str(recipient.id), "body": body, **extra}
    return client.post("/messages", headers=auth_headers(sender), json=payload)


def test_send_notifies_recipient_with_preview(db, client, employer, headhunter):
    long_body = "x" * 150
    r = _send(client, employer, headhunter, long_body)
    assert r.status_code == 201
    assert r.json()["is_read"] is False

    note = notification_service.list_notifications(db, headhunter.id)[0]
    assert note.type == "new_message"
    assert note.title == "New message from Dana Employer"
    assert note.message == "x" * 100 + "..."


def test_rejects_empty_and_self_messages(client, employer, headhunter):
    assert _send(client, employer, headhunter, "   ").status_code == 422
    assert _send(client, employer, employer, "hello me").status_code == 422


def test_attachment_only_message(db, client, employer, headhunter):
    attachment = {"name": "brief.pdf", "url": "http://x/brief.pdf", "type": "application/pdf", "size": 10}
    r = _send(client, employer, headhunter, "", attachments=[attachment])
    assert r.status_code == 201
    assert r.json()["attachments"][0]["name"] == "brief.pdf"
    assert notification_service.list_notifications(db, headhunter.id)[0].message == "Sent 1 attachment(s)"


def test_conversation_is_oldest_first_and_marks_read(client, employer, headhunter, open_job):
    job = {"job_id": str(open_job.id)}
    _send(client, employer, headhunter, "first", **job)
    _send(client, headhunter, employer, "second", **job)
    _send(client, employer, headhunter, "unrelated direct message")

    params = {"with": str(employer.id), "job": str(open_job.id)}
    rows = client.get("/messages/conversation", params=params, headers=auth_headers(headhunter)).json()
    assert [m["body"] for m in rows] == ["first", "second"]

    summaries = client.get("/messages/conversations", headers=auth_headers(headhunter)).json()
    by_job = {s["job_id"]: s for s in summaries}
    assert by_job[str(open_job.id)]["unread_count"] == 0
    assert by_job[str(open_job.id)]["job_title"] == "Backend Engineer"
    assert by_job[None]["unread_count"] == 1
    assert by_job[None]["other_user_name"] == "Dana Employer"
    assert summaries[0]["last_message"]["body"] == "unrelated direct message"


def test_reply_carries_preview(client, employer, headhunter):
    original = _send(client, employer, headhunter, "Can you start next week?").json()
    _send(client, headhunter, employer, "Yes", reply_to=original["id"])

    rows = client.get("/messages/conversation", params={"with": str(headhunter.id)},
                      headers=auth_headers(employer)).json()
    reply = rows[-1]
    assert reply["replied_message"]["body"] == "Can you start next week?"
    assert reply["replied_message"]["sender_name"] == "Dana Employer"


def test_reply_must_belong_to_conversation(client, employer, headhunter, other_headhunter):
    foreign = _send(client, employer, other_headhunter, "private").json()
    assert _send(client, employer, headhunter, "hi", reply_to=foreign["id"]).status_code == 422


def test_edit_by_sender_only(client, employer, headhunter):
    msg = _send(client, employer, headhunter, "typo heer").json()
    r = client.patch(f"/messages/{msg['id']}", headers=auth_headers(employer), json={"body": "typo here"})
    assert r.status_code == 200
    assert r.json()["body"] == "typo here"
    assert r.json()["edited_at"] is not None

    assert client.patch(f"/messages/{msg['id']}", headers=auth_headers(headhunter),
                        json={"body": "hijack"}).status_code == 403


def test_star_and_delete_conversation(client, employer, headhunter):
    _send(client, employer, headhunter, "one")
    _send(client, headhunter, employer, "two")
    headers = auth_headers(employer)
    star = {"other_user_id": str(headhunter.id)}

    assert client.post("/messages/star", headers=headers, json=star).json() == {"starred": True}
    assert client.post("/messages/star", headers=headers, json=star).json() == {"starred": True}
    assert client.get("/messages/conversations", headers=headers).json()[0]["is_starred"] is True

    assert client.request("DELETE", "/messages/star", headers=headers, json=star).json() == {"starred": False}
    assert client.get("/messages/conversations", headers=headers).json()[0]["is_starred"] is False

    r = client.delete("/messages/conversation", params={"with": str(headhunter.id)}, headers=headers)
    assert r.json() == {"deleted": 2}
    assert client.get("/messages/conversations", headers=headers).json() == []


def test_upload_attachments_stores_files(client, employer):
    files = [("files", ("cv.pdf", b"%PDF-1.4 fake", "application/pdf"))]
    r = client.post("/messages/attachments", headers=auth_headers(employer), files=files)
    assert r.status_code == 201
    att = r.json()[0]
    assert att["name"] == "cv.pdf"
    assert att["size"] == len(b"%PDF-1.4 fake")
    assert f"/storage/message-attachments/{employer.id}/" in att["url"]
    assert att["url"].endswith(".pdf")

    object_path = att["url"].split("/storage/message-attachments/", 1)[1]
    stored = Path(settings.STORAGE_DIR) / "message-attachments" / object_path
    assert stored.read_bytes() == b"%PDF-1.4 fake"


def test_upload_helper_returns_descriptors(employer):
    out = messaging_service.upload_attachments(employer, [("notes.txt", "text/plain", b"hello")])
    assert out[0]["type"] == "text/plain"
    assert out[0]["url"].endswith(".txt")
