import pytest

from classroom_qa.core.exceptions import PermissionDeniedError
from classroom_qa.models.lecture import Lecture
from classroom_qa.models.question import Question
from classroom_qa.schemas.auth import CurrentUser
from classroom_qa.services import permissions

TEACHER = CurrentUser(id=1, email="t@example.com", role="TEACHER")
OTHER_TEACHER = CurrentUser(id=2, email="t2@example.com", role="TEACHER")
STUDENT = CurrentUser(id=3, email="s@example.com", role="STUDENT")
OTHER_STUDENT = CurrentUser(id=4, email="s2@example.com", role="STUDENT")


def test_only_teachers_create_lectures():
    assert permissions.can_create_lecture(TEACHER)
    assert not permissions.can_create_lecture(STUDENT)
    with pytest.raises(PermissionDeniedError):
        permissions.ensure_can_create_lecture(STUDENT)


def test_only_owner_teacher_deletes_lecture():
    lecture = Lecture(id=1, name="L", teacher_id=TEACHER.id)
    assert permissions.can_delete_lecture(TEACHER, lecture)
    assert not permissions.can_delete_lecture(OTHER_TEACHER, lecture)
    # a student whose id happens to match is still refused
    student_with_same_id = CurrentUser(id=TEACHER.id, email="x@example.com", role="STUDENT")
    assert not permissions.can_delete_lecture(student_with_same_id, lecture)


def test_question_delete_and_retag_are_author_only():
    q = Question(id=1, author_id=STUDENT.id, lecture_id=1)
    assert permissions.can_delete_question(STUDENT, q)
    assert not permissions.can_delete_question(OTHER_STUDENT, q)
    assert not permissions.can_delete_question(TEACHER, q)
    assert permissions.can_update_question_tags(STUDENT, q)
    assert not permissions.can_update_question_tags(TEACHER, q)
    with pytest.raises(PermissionDeniedError):
        permissions.ensure_can_update_question_tags(OTHER_STUDENT, q)


def test_resolve_by_author_or_any_teacher():
    q = Question(id=1, author_id=STUDENT.id, lecture_id=1)
    assert permissions.can_set_resolved(STUDENT, q)
    assert permissions.can_set_resolved(TEACHER, q)
    assert permissions.can_set_resolved(OTHER_TEACHER, q)
    assert not permissions.can_set_resolved(OTHER_STUDENT, q)
    with pytest.raises(PermissionDeniedError):
        permissions.ensure_can_set_resolved(OTHER_STUDENT, q)
