import os
import time
from datetime import timedelta

from classroom_qa.core.config import settings
from classroom_qa.models.image import Image
from classroom_qa.services.image_service import sweep_orphaned_uploads
from classroom_qa.workers import queue as work_queue

PNG = b"\x89PNG\r\n\x1a\n fake image body"


def _upload(client, headers, name="cat.png", data=PNG, content_type="image/png"):
    return client.post("/api/uploads", files={"image": (name, data, content_type)}, headers=headers)


def test_upload_stores_file_under_generated_name(client, student, storage):
    headers, _ = student
    response = _upload(client, headers)
    assert response.status_code == 201
    image = response.json()["image"]
    assert image["filename"].endswith(".png")
    assert image["filename"] != "cat.png"
    assert image["path"] == f"/uploads/{image['filename']}"
    assert image["originalName"] == "cat.png"
    assert (storage.root / image["filename"]).read_bytes() == PNG


def test_uploads_never_collide(client, student):
    headers, _ = student
    names = {_upload(client, headers).json()["image"]["filename"] for _ in range(3)}
    assert len(names) == 3


def test_upload_requires_auth(client):
    assert _upload(client, {}).status_code == 401


def test_upload_rejects_other_types(client, student):
    headers, _ = student
    response = _upload(client, headers, name="notes.pdf", data=b"%PDF", content_type="application/pdf")
    assert response.status_code == 400
    assert "error" in response.json()


def test_upload_rejects_large_files(client, student, monkeypatch):
    headers, _ = student
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 10)
    response = _upload(client, headers, data=b"x" * 11)
    assert response.status_code == 400


def test_upload_over_limit_stores_nothing(client, student, storage, monkeypatch):
    headers, _ = student
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 1024)
    response = _upload(client, headers, data=b"x" * (64 * 1024))
    assert response.status_code == 400
    assert list(storage.root.iterdir()) == []


def test_stored_extension_follows_content_type(client, student, storage):
    headers, _ = student
    response = _upload(
        client, headers, name="evil.html", data=b"<script>alert(1)</script>", content_type="image/png"
    )
    assert response.status_code == 201
    image = response.json()["image"]
    assert image["filename"].endswith(".png")
    assert image["originalName"] == "evil.html"
    assert [p.suffix for p in storage.root.iterdir()] == [".png"]


def test_upload_without_file_is_400(client, student):
    headers, _ = student
    assert client.post("/api/uploads", headers=headers).status_code == 400


def test_delete_upload(client, student, storage):
    headers, _ = student
    filename = _upload(client, headers).json()["image"]["filename"]

    assert client.delete(f"/api/uploads/{filename}", headers=headers).status_code == 200
    assert not (storage.root / filename).exists()
    assert client.delete(f"/api/uploads/{filename}", headers=headers).status_code == 404


def test_images_attach_to_question_and_answer(client, student, lecture):
    headers, _ = student
    q_img = _upload(client, headers).json()["image"]
    a_img = _upload(client, headers, name="dog.webp", content_type="image/webp").json()["image"]

    question = client.post(
        "/api/questions",
        json={"title": "Q", "content": "c", "lectureId": lecture["id"], "images": [q_img]},
        headers=headers,
    ).json()["question"]
    assert [(i["filename"], i["path"]) for i in question["images"]] == [(q_img["filename"], q_img["path"])]

    answer = client.post(
        f"/api/questions/{question['id']}/answers",
        json={"content": "pic", "images": [{"filename": a_img["filename"], "path": a_img["path"]}]},
        headers=headers,
    ).json()["answer"]
    assert [i["filename"] for i in answer["images"]] == [a_img["filename"]]


def test_same_image_cannot_be_attached_twice(client, student, lecture):
    headers, _ = student
    img = _upload(client, headers).json()["image"]
    body = {"title": "Q", "content": "c", "lectureId": lecture["id"], "images": [img]}
    assert client.post("/api/questions", json=body, headers=headers).status_code == 201
    assert client.post("/api/questions", json=body, headers=headers).status_code == 400


def test_unknown_image_cannot_be_attached(client, student, lecture, db_session):
    headers, _ = student
    response = client.post(
        "/api/questions",
        json={
            "title": "Q",
            "content": "c",
            "lectureId": lecture["id"],
            "images": [{"filename": "does-not-exist.png"}],
        },
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Unknown image"}
    assert db_session.query(Image).count() == 0


def test_image_path_is_derived_from_filename(client, student, lecture):
    headers, _ = student
    img = _upload(client, headers).json()["image"]
    question = client.post(
        "/api/questions",
        json={
            "title": "Q",
            "content": "c",
            "lectureId": lecture["id"],
            "images": [{"filename": img["filename"], "path": "https://evil.example.com/x.png"}],
        },
        headers=headers,
    ).json()["question"]
    assert question["images"][0]["path"] == img["path"]


def test_sweep_removes_only_old_unreferenced_files(db_session, storage, client, student, lecture):
    headers, _ = student
    attached = _upload(client, headers).json()["image"]
    client.post(
        "/api/questions",
        json={"title": "Q", "content": "c", "lectureId": lecture["id"], "images": [attached]},
        headers=headers,
    )
    orphan = _upload(client, headers).json()["image"]["filename"]
    fresh = _upload(client, headers).json()["image"]["filename"]

    an_hour_ago = time.time() - 3600
    for name in (attached["filename"], orphan):
        os.utime(storage.root / name, (an_hour_ago, an_hour_ago))

    removed = sweep_orphaned_uploads(db_session, storage, max_age=timedelta(minutes=30))
    assert removed == [orphan]
    assert (storage.root / attached["filename"]).exists()
    assert (storage.root / fresh).exists()
    assert db_session.query(Image).count() == 1


def test_cleanup_not_scheduled_when_disabled(monkeypatch):
    monkeypatch.setattr(settings, "CLEANUP_ON_DELETE", False)
    assert work_queue.schedule_cleanup_after_delete(["a.png"]) is None


def test_cleanup_scheduled_after_delete(client, student, lecture, monkeypatch):
    headers, _ = student
    calls = []
    monkeypatch.setattr(settings, "CLEANUP_ON_DELETE", True)
    monkeypatch.setattr(work_queue, "enqueue_upload_delete", lambda names: calls.append(names) or "job-1")

    img = _upload(client, headers).json()["image"]
    question = client.post(
        "/api/questions",
        json={"title": "Q", "content": "c", "lectureId": lecture["id"], "images": [img]},
        headers=headers,
    ).json()["question"]
    assert client.delete(f"/api/questions/{question['id']}", headers=headers).status_code == 200
    assert calls == [[img["filename"]]]


def test_sweep_task_uses_own_session(session_factory, storage, monkeypatch):
    from classroom_qa.workers import tasks

    stale = storage.root / "stale.png"
    stale.write_bytes(PNG)
    long_ago = time.time() - 7200
    os.utime(stale, (long_ago, long_ago))

    monkeypatch.setattr(tasks, "SessionLocal", session_factory)
    monkeypatch.setattr(tasks, "get_storage", lambda: storage)

    result = tasks.sweep_uploads_task(max_age_minutes=60)
    assert result["status"] == "success"
    assert result["removed"] == ["stale.png"]
    assert not stale.exists()


def test_delete_task_removes_fresh_files_of_deleted_question(
    session_factory, storage, client, student, lecture, monkeypatch
):
    from classroom_qa.workers import tasks

    headers, _ = student
    deleted = _upload(client, headers).json()["image"]
    kept = _upload(client, headers).json()["image"]
    question = client.post(
        "/api/questions",
        json={"title": "Q", "content": "c", "lectureId": lecture["id"], "images": [deleted]},
        headers=headers,
    ).json()["question"]
    client.post(
        "/api/questions",
        json={"title": "Q2", "content": "c", "lectureId": lecture["id"], "images": [kept]},
        headers=headers,
    )
    assert client.delete(f"/api/questions/{question['id']}", headers=headers).status_code == 200

    monkeypatch.setattr(tasks, "SessionLocal", session_factory)
    monkeypatch.setattr(tasks, "get_storage", lambda: storage)

    result = tasks.delete_uploads_task([deleted["filename"], kept["filename"], "../x.png"])
    assert result["removed"] == [deleted["filename"]]
    assert not (storage.root / deleted["filename"]).exists()
    assert (storage.root / kept["filename"]).exists()


def test_enqueue_helpers_target_maintenance_tasks(monkeypatch):
    from classroom_qa.workers import tasks

    jobs = []
    monkeypatch.setattr(
        work_queue, "enqueue_job", lambda func, *args, **kwargs: jobs.append((func, args)) or "job-1"
    )

    assert work_queue.enqueue_upload_sweep() == "job-1"
    assert work_queue.enqueue_upload_delete(("a.png", "b.png")) == "job-1"
    assert jobs == [
        (tasks.sweep_uploads_task, ()),
        (tasks.delete_uploads_task, (["a.png", "b.png"],)),
    ]
