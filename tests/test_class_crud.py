# /tests/test_class_crud.py

import pytest

from app.core.exceptions import ValidationError, NotFoundError
from app.models import class_model
from app.services import class_service
from app.services.class_helpers import crud
from factories import make_class, make_student, make_grade


def test_create_class_assigns_code_and_cycles_colors(mock_db_service):
    mock_db_service.create_class.side_effect = lambda record: record
    existing = [make_class("cls_1"), make_class("cls_2")]

    record = crud.create_class(class_model.ClassCreate(name=" 2A ", subject=" "), mock_db_service, "t1", existing)

    assert record["name"] == "2A"
    assert record["owner_id"] == "t1"
    assert record["subject"] is None
    assert len(record["class_code"]) == 6
    assert record["color"] == crud.CLASS_COLORS[2]


def test_create_class_requires_a_name(mock_db_service):
    with pytest.raises(ValidationError):
        crud.create_class(class_model.ClassCreate(name="  "), mock_db_service, "t1", [])
    mock_db_service.create_class.assert_not_called()


def test_update_class_maps_fields_to_columns(mock_db_service):
    class_room = make_class("cls_1", name="2A", subject="Math")

    updated = crud.update_class(class_room, class_model.ClassUpdate(gradeLevel="Grade 2", subject=""), mock_db_service)

    mock_db_service.update_class.assert_called_once_with("cls_1", {"grade_level": "Grade 2", "subject": None})
    assert (updated.gradeLevel, updated.subject, updated.name) == ("Grade 2", None, "2A")


def test_update_class_rejects_empty_payloads_and_names(mock_db_service):
    with pytest.raises(ValidationError):
        crud.update_class(make_class("cls_1"), class_model.ClassUpdate(), mock_db_service)
    with pytest.raises(ValidationError):
        crud.update_class(make_class("cls_1"), class_model.ClassUpdate(name=" "), mock_db_service)


def test_rename_logs_a_warning(mock_db_service, caplog):
    with caplog.at_level("WARNING"):
        crud.update_class(make_class("cls_1", name="2A"), class_model.ClassUpdate(name="2B"), mock_db_service)
    assert "renamed" in caplog.text


def test_announcements_are_prepended(mock_db_service):
    class_room = make_class("cls_1")
    first = crud.add_announcement(class_room, class_model.AnnouncementCreate(text="Trip on Monday"), mock_db_service)
    class_room = class_room.model_copy(update={"announcements": [first]})

    second = crud.add_announcement(class_room, class_model.AnnouncementCreate(text="Exam moved", type="warning"), mock_db_service)

    stored = mock_db_service.update_class.call_args.args[1]["announcements"]
    assert [a["id"] for a in stored] == [second.id, first.id]
    assert stored[0]["type"] == "warning"


def test_blank_announcement_is_rejected(mock_db_service):
    with pytest.raises(ValidationError):
        crud.add_announcement(make_class("cls_1"), class_model.AnnouncementCreate(text=" "), mock_db_service)


def test_load_class_is_scoped_to_the_owner(mock_db_service):
    mock_db_service.get_classes_for_owner.return_value = [make_class("cls_1"), make_class("cls_2", subject="Science")]

    class_room, all_classes = class_service.load_class("cls_2", "t1", mock_db_service)

    mock_db_service.get_classes_for_owner.assert_called_once_with("t1")
    assert class_room.subject == "Science"
    assert len(all_classes) == 2
    with pytest.raises(NotFoundError):
        class_service.load_class("cls_other_owner", "t1", mock_db_service)


def test_class_summaries_use_pooled_average(mock_db_service):
    students = [
        make_student("s1", grades=[make_grade("g1", 100), make_grade("g2", 100), make_grade("g3", 100)]),
        make_student("s2", grades=[make_grade("g4", 0)]),
    ]
    mock_db_service.get_classes_for_owner.return_value = [make_class("cls_1", students=students)]

    [summary] = class_service.get_all_classes_with_summary("t1", mock_db_service)

    assert (summary.studentCount, summary.classAverage) == (2, 75)
