# classroom_qa/client/api_client.py
"""
Thin HTTP client for the question board API.

Session state is an explicit ``ApiSession`` value: log in, keep the returned
session, pass it to each call. Nothing is stored globally.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import httpx


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


@dataclass(frozen=True)
class ApiSession:
    token: str | None = None
    user: dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    @property
    def is_teacher(self) -> bool:
        return self.user.get("role") == "TEACHER"

    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


ANONYMOUS_SESSION = ApiSession()


class QuestionBoardClient:
    def __init__(self, http: httpx.Client, api_prefix: str = "/api"):
        self.http = http
        self.api_prefix = api_prefix.rstrip("/")

    def _request(self, method: str, path: str, session: ApiSession | None = None, **kwargs) -> dict:
        headers = session.headers() if session else {}
        response = self.http.request(method, f"{self.api_prefix}{path}", headers=headers, **kwargs)
        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.is_error:
            raise ApiError(response.status_code, data.get("error") or "Request failed")
        return data

    # auth

    def register(
        self,
        email: str,
        password: str,
        name: str,
        role: str = "STUDENT",
        nickname: str | None = None,
        show_nickname: bool = False,
    ) -> ApiSession:
        body = {"email": email, "password": password, "name": name, "role": role}
        if role == "STUDENT":
            body.update(nickname=nickname, showNickname=show_nickname)
        data = self._request("POST", "/auth/register", json=body)
        return ApiSession(token=data["token"], user=data["user"])

    def login(self, email: str, password: str) -> ApiSession:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return ApiSession(token=data["token"], user=data["user"])

    def me(self, session: ApiSession) -> dict:
        return self._request("GET", "/auth/me", session)["user"]

    def update_profile(
        self,
        session: ApiSession,
        nickname: str | None = None,
        show_nickname: bool | None = None,
    ) -> ApiSession:
        body = {}
        if nickname is not None:
            body["nickname"] = nickname
        if show_nickname is not None:
            body["showNickname"] = show_nickname
        user = self._request("PUT", "/auth/profile", session, json=body)["user"]
        return ApiSession(token=session.token, user=user)

    # lectures and tags

    def list_lectures(self, session: ApiSession) -> list[dict]:
        return self._request("GET", "/lectures", session)["lectures"]

    def get_lecture(self, session: ApiSession, lecture_id: int) -> dict:
        return self._request("GET", f"/lectures/{lecture_id}", session)["lecture"]

    def create_lecture(self, session: ApiSession, name: str, description: str | None = None) -> dict:
        body = {"name": name, "description": description}
        return self._request("POST", "/lectures", session, json=body)["lecture"]

    def delete_lecture(self, session: ApiSession, lecture_id: int) -> None:
        self._request("DELETE", f"/lectures/{lecture_id}", session)

    def list_tags(self, session: ApiSession, lecture_id: int) -> list[dict]:
        return self._request("GET", f"/lectures/{lecture_id}/tags", session)["tags"]

    def create_tag(self, session: ApiSession, lecture_id: int, name: str) -> dict:
        return self._request("POST", f"/lectures/{lecture_id}/tags", session, json={"name": name})["tag"]

    def delete_tag(self, session: ApiSession, lecture_id: int, tag_id: int) -> None:
        self._request("DELETE", f"/lectures/{lecture_id}/tags/{tag_id}", session)

    # questions and answers

    def list_questions(
        self,
        session: ApiSession,
        lecture_id: int | None = None,
        tag_ids: Iterable[int] = (),
        resolved: bool | None = None,
    ) -> list[dict]:
        params = {}
        if lecture_id is not None:
            params["lectureId"] = lecture_id
        tag_ids = list(tag_ids)
        if tag_ids:
            params["tags"] = ",".join(str(t) for t in tag_ids)
        if resolved is not None:
            params["resolved"] = "true" if resolved else "false"
        return self._request("GET", "/questions", session, params=params)["questions"]

    def get_question(self, session: ApiSession, question_id: int) -> dict:
        return self._request("GET", f"/questions/{question_id}", session)["question"]

    def create_question(
        self,
        session: ApiSession,
        title: str,
        content: str,
        lecture_id: int,
        tag_ids: Iterable[int] = (),
        images: Iterable[dict] = (),
    ) -> dict:
        body = {
            "title": title,
            "content": content,
            "lectureId": lecture_id,
            "tagIds": list(tag_ids),
            "images": list(images),
        }
        return self._request("POST", "/questions", session, json=body)["question"]

    def delete_question(self, session: ApiSession, question_id: int) -> None:
        self._request("DELETE", f"/questions/{question_id}", session)

    def resolve_question(self, session: ApiSession, question_id: int) -> dict:
        return self._request("PUT", f"/questions/{question_id}/resolve", session)["question"]

    def unresolve_question(self, session: ApiSession, question_id: int) -> dict:
        return self._request("PUT", f"/questions/{question_id}/unresolve", session)["question"]

    def update_question_tags(self, session: ApiSession, question_id: int, tag_ids: Iterable[int]) -> dict:
        body = {"tagIds": list(tag_ids)}
        return self._request("PUT", f"/questions/{question_id}/tags", session, json=body)["question"]

    def add_answer(
        self,
        session: ApiSession,
        question_id: int,
        content: str,
        images: Iterable[dict] = (),
    ) -> dict:
        body = {"content": content, "images": list(images)}
        return self._request("POST", f"/questions/{question_id}/answers", session, json=body)["answer"]

    # uploads

    def upload_image(self, session: ApiSession, path: str | Path, content_type: str) -> dict:
        path = Path(path)
        with path.open("rb") as fp:
            files = {"image": (path.name, fp, content_type)}
            return self._request("POST", "/uploads", session, files=files)["image"]

    def delete_image(self, session: ApiSession, filename: str) -> None:
        self._request("DELETE", f"/uploads/{filename}", session)
