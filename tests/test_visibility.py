import pytest

from classroom_qa.models.answer import Answer
from classroom_qa.models.question import Question
from classroom_qa.models.user import User
from classroom_qa.services.visibility import answer_author_name, question_author_name

ANON = "匿名"


def _student(nickname=None, show_nickname=False):
    return User(id=1, email="s@example.com", name="Real Student", role="STUDENT",
                nickname=nickname, show_nickname=show_nickname)


def _teacher():
    return User(id=2, email="t@example.com", name="Real Teacher", role="TEACHER",
                nickname=None, show_nickname=False)


def _question(author, show_nickname):
    return Question(id=10, title="t", content="c", author=author, show_nickname=show_nickname)


def _answer(author):
    return Answer(id=20, content="c", author=author)


class TestQuestionAuthorName:
    def test_teacher_viewer_sees_real_name(self):
        q = _question(_student(nickname="pika", show_nickname=False), show_nickname=False)
        assert question_author_name(q, "TEACHER") == "Real Student"

    def test_snapshot_flag_and_nickname_show_nickname(self):
        q = _question(_student(nickname="pika", show_nickname=False), show_nickname=True)
        # the live profile flag is irrelevant for questions
        assert question_author_name(q, "STUDENT") == "pika"

    @pytest.mark.parametrize("profile_flag", [True, False])
    def test_snapshot_off_is_anonymous_whatever_the_profile(self, profile_flag):
        q = _question(_student(nickname="pika", show_nickname=profile_flag), show_nickname=False)
        assert question_author_name(q, "STUDENT") == ANON

    def test_snapshot_on_without_nickname_is_anonymous(self):
        q = _question(_student(nickname=None, show_nickname=True), show_nickname=True)
        assert question_author_name(q, "STUDENT") == ANON

    def test_teacher_author_is_masked_for_students(self):
        q = _question(_teacher(), show_nickname=False)
        assert question_author_name(q, "STUDENT") == ANON

    def test_custom_label(self):
        q = _question(_student(), show_nickname=False)
        assert question_author_name(q, "STUDENT", anonymous_label="anonymous") == "anonymous"


class TestAnswerAuthorName:
    def test_teacher_viewer_sees_real_name(self):
        a = _answer(_student(nickname="pika", show_nickname=False))
        assert answer_author_name(a, "TEACHER") == "Real Student"

    def test_teacher_author_always_real_name(self):
        a = _answer(_teacher())
        assert answer_author_name(a, "STUDENT") == "Real Teacher"

    def test_live_profile_flag_shows_nickname(self):
        a = _answer(_student(nickname="pika", show_nickname=True))
        assert answer_author_name(a, "STUDENT") == "pika"

    def test_profile_flag_off_is_anonymous(self):
        a = _answer(_student(nickname="pika", show_nickname=False))
        assert answer_author_name(a, "STUDENT") == ANON

    def test_flag_on_without_nickname_is_anonymous(self):
        a = _answer(_student(nickname=None, show_nickname=True))
        assert answer_author_name(a, "STUDENT") == ANON
