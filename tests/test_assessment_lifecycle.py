# /tests/test_assessment_lifecycle.py

import uuid

import pytest
from unittest.mock import MagicMock

from app.core.exceptions import ValidationError, NotFoundError, PartialPropagationFailure
from app.models import class_model, student_model
from app.models.calendar_model import CalendarEventType
from app.services.assessment_helpers import lifecycle
from app.services.calendar_service import CalendarService
from app.services.class_helpers import enrollment
from factories import make_class, make_student, make_grade, make_assessment


@pytest.fixture
def mock_calendar():
    calendar = MagicMock()
    calendar.create_event.return_value = "evt_1"
    return calendar


# --- create_assessment ---

def test_create_assessment_with_calendar_sync_creates_one_event(mock_db_service, mock_calendar):
    class_room = make_class("cls_math", name="2A", subject="Math", students=[make_student("s1"), make_student("s2")])
    payload = class_model.AssessmentCreate(title="Unit 1", date="2025-03-01", maxScore=20)

    assessment = lifecycle.create_assessment(mock_db_service, mock_calendar, "t1", class_room, payload, sync_calendar=True)

    mock_calendar.create_event.assert_called_once()
    kwargs = mock_calendar.create_event.call_args.kwargs
    assert kwargs["title"] == "Unit 1 — 2A"
    assert kwargs["type"] == CalendarEventType.EXAM
    assert kwargs["related_class_id"] == "cls_math"
    assert "20" in kwargs["notes"]
    assert assessment.relatedCalendarEventId == "evt_1"

    stored = mock_db_service.update_class.call_args.args[1]["assessments"]
    assert [a["id"] for a in stored] == [assessment.id]


def test_homework_is_published_as_a_plain_event(mock_db_service, mock_calendar):
    payload = class_model.AssessmentCreate(title="Worksheet 3", type=student_model.GradeCategory.HOMEWORK)
    lifecycle.create_assessment(mock_db_service, mock_calendar, "t1", make_class("cls_math"), payload, sync_calendar=True)
    assert mock_calendar.create_event.call_args.kwargs["type"] == CalendarEventType.EVENT


def test_create_assessment_without_sync_never_calls_calendar(mock_db_service, mock_calendar):
    payload = class_model.AssessmentCreate(title="Unit 1")
    assessment = lifecycle.create_assessment(mock_db_service, mock_calendar, "t1", make_class("cls_math"), payload, sync_calendar=False)
    mock_calendar.create_event.assert_not_called()
    assert assessment.relatedCalendarEventId is None


def test_calendar_failure_does_not_block_the_assessment(mock_db_service, mock_calendar):
    mock_calendar.create_event.side_effect = RuntimeError("calendar offline")
    payload = class_model.AssessmentCreate(title="Unit 1")

    assessment = lifecycle.create_assessment(mock_db_service, mock_calendar, "t1", make_class("cls_math"), payload, sync_calendar=True)

    assert assessment.relatedCalendarEventId is None
    mock_db_service.update_class.assert_called_once()


def test_create_assessment_requires_a_title(mock_db_service, mock_calendar):
    with pytest.raises(ValidationError):
        lifecycle.create_assessment(mock_db_service, mock_calendar, "t1", make_class("cls_math"), class_model.AssessmentCreate(title=" "), sync_calendar=True)
    mock_calendar.create_event.assert_not_called()
    mock_db_service.update_class.assert_not_called()


# --- grade_assessment ---

@pytest.mark.asyncio
async def test_grading_appends_a_grade_carrying_the_assessment_fields(mock_db_service):
    assessment = make_assessment("asmt_1", title="Unit 1", max_score=20, type=student_model.GradeCategory.MIDTERM)
    manual = make_grade("g_manual", 5, 10)
    class_room = make_class("cls_math", students=[make_student("s1", grades=[manual])], assessments=[assessment])

    updated = await lifecycle.grade_assessment(mock_db_service, class_room, "asmt_1", {"s1": "17"})

    grades = updated.students[0].grades
    assert len(grades) == 2
    new = grades[1]
    assert (new.assessmentId, new.score, new.maxScore, new.date, new.type, new.title) == (
        "asmt_1", 17, 20, "2025-03-01", student_model.GradeCategory.MIDTERM, "Unit 1",
    )
    assert grades[0] == manual


@pytest.mark.asyncio
async def test_regrading_upserts_instead_of_appending(mock_db_service):
    assessment = make_assessment("asmt_1")
    class_room = make_class("cls_math", students=[make_student("s1")], assessments=[assessment])

    first = await lifecycle.grade_assessment(mock_db_service, class_room, "asmt_1", {"s1": 60})
    original_grade = first.students[0].grades[0]
    second = await lifecycle.grade_assessment(mock_db_service, first, "asmt_1", {"s1": 85})

    grades = second.students[0].grades
    assert len(grades) == 1
    assert grades[0].score == 85
    assert grades[0].id == original_grade.id


@pytest.mark.asyncio
async def test_blank_and_non_numeric_scores_are_skipped(mock_db_service):
    assessment = make_assessment("asmt_1")
    students = [make_student("s1"), make_student("s2"), make_student("s3"), make_student("s4")]
    class_room = make_class("cls_math", students=students, assessments=[assessment])

    updated = await lifecycle.grade_assessment(mock_db_service, class_room, "asmt_1", {"s1": "", "s2": "abc", "s3": None, "s4": "0"})

    written = [c.args[1] for c in mock_db_service.update_enrollment.call_args_list]
    assert written == ["s4"]
    assert [len(s.grades) for s in updated.students] == [0, 0, 0, 1]
    assert updated.students[3].grades[0].score == 0


@pytest.mark.asyncio
async def test_grading_unknown_assessment_is_not_found(mock_db_service):
    class_room = make_class("cls_math", students=[make_student("s1")])
    with pytest.raises(NotFoundError):
        await lifecycle.grade_assessment(mock_db_service, class_room, "asmt_missing", {"s1": 10})
    mock_db_service.update_enrollment.assert_not_called()


@pytest.mark.asyncio
async def test_grading_student_outside_the_class_is_not_found(mock_db_service):
    class_room = make_class("cls_math", students=[make_student("s1")], assessments=[make_assessment("asmt_1")])
    with pytest.raises(NotFoundError):
        await lifecycle.grade_assessment(mock_db_service, class_room, "asmt_1", {"s1": 10, "s_other": 9})
    mock_db_service.update_enrollment.assert_not_called()


@pytest.mark.asyncio
async def test_grading_write_failure_reports_partial_outcome(mock_db_service):
    class_room = make_class("cls_math", students=[make_student("s1"), make_student("s2")], assessments=[make_assessment("asmt_1")])
    mock_db_service.update_enrollment.side_effect = lambda class_id, student_id, fields: student_id != "s2"

    with pytest.raises(PartialPropagationFailure) as exc_info:
        await lifecycle.grade_assessment(mock_db_service, class_room, "asmt_1", {"s1": 10, "s2": 9})

    assert (exc_info.value.completed, exc_info.value.total) == (1, 2)


def test_parse_score():
    assert lifecycle.parse_score(" 12.5 ") == 12.5
    assert lifecycle.parse_score(7) == 7.0
    assert lifecycle.parse_score("nan") is None
    assert lifecycle.parse_score("") is None
    assert lifecycle.parse_score(True) is None


# --- delete_assessment ---

def test_delete_only_writes_enrollments_that_change(mock_db_service):
    students = [
        make_student("s1", grades=[make_grade("g1", 5, assessment_id="asmt_1"), make_grade("g2", 9)]),
        make_student("s2", grades=[make_grade("g3", 9)]),
        make_student("s3"),
    ]
    class_room = make_class("cls_math", students=students, assessments=[make_assessment("asmt_1"), make_assessment("asmt_2")])

    report = lifecycle.delete_assessment(mock_db_service, class_room, "asmt_1")

    remaining = mock_db_service.update_class.call_args.args[1]["assessments"]
    assert [a["id"] for a in remaining] == ["asmt_2"]
    mock_db_service.update_enrollment.assert_called_once()
    class_id, student_id, fields = mock_db_service.update_enrollment.call_args.args
    assert (class_id, student_id) == ("cls_math", "s1")
    assert [g["id"] for g in fields["grades"]] == ["g2"]
    assert report.completed == 1 and report.total == 1


def test_delete_of_an_already_deleted_assessment_is_a_no_op(mock_db_service):
    class_room = make_class("cls_math", students=[make_student("s1", grades=[make_grade("g1", 5)])])

    report = lifecycle.delete_assessment(mock_db_service, class_room, "asmt_gone")

    mock_db_service.update_class.assert_not_called()
    mock_db_service.update_enrollment.assert_not_called()
    assert report.total == 0


def test_interrupted_delete_raises_partial_failure(mock_db_service):
    students = [make_student(f"s{i}", grades=[make_grade(f"g{i}", 5, assessment_id="asmt_1")]) for i in range(3)]
    class_room = make_class("cls_math", students=students, assessments=[make_assessment("asmt_1")])
    mock_db_service.update_enrollment.side_effect = [True, False, True]

    with pytest.raises(PartialPropagationFailure) as exc_info:
        lifecycle.delete_assessment(mock_db_service, class_room, "asmt_1")

    assert (exc_info.value.completed, exc_info.value.total) == (1, 3)
    assert exc_info.value.subject_id == "asmt_1"


# --- End-to-end against the SQL gateway ---

def _load(db_service, class_id):
    return next(c for c in db_service.get_classes_for_owner("t1") if c.id == class_id)


@pytest.mark.asyncio
async def test_sibling_roster_scenario(db_service, mocker):
    """
    GIVEN: sibling classes 2A/Math and 2A/Science with 30 students, 2 of them graded on one assessment.
    WHEN:  the assessment is deleted (twice).
    THEN:  exactly those 2 enrollments are rewritten and the second delete changes nothing.
    """
    db_service.create_class({"id": "cls_math", "owner_id": "t1", "name": "2A", "subject": "Math"})
    db_service.create_class({"id": "cls_sci", "owner_id": "t1", "name": "2A", "subject": "Science"})

    math = _load(db_service, "cls_math")
    all_classes = db_service.get_classes_for_owner("t1")
    ali = enrollment.add_student(db_service, math, all_classes, student_model.StudentCreate(name="Ali"))
    assert ali.classCount == 2
    assert [s.id for s in _load(db_service, "cls_sci").students] == [ali.profile.id]

    for i in range(29):
        enrollment.add_student(db_service, math, all_classes, student_model.StudentCreate(name=f"Student {i:02d}"))

    calendar = CalendarService(db_service)
    math = _load(db_service, "cls_math")
    assert len(math.students) == 30
    assessment = lifecycle.create_assessment(db_service, calendar, "t1", math, class_model.AssessmentCreate(title="Quiz"), sync_calendar=True)
    assert len(db_service.get_calendar_events("t1")) == 1

    graded_ids = [math.students[0].id, math.students[1].id]
    await lifecycle.grade_assessment(db_service, _load(db_service, "cls_math"), assessment.id, {sid: 8 for sid in graded_ids})

    # Grades are per enrollment: the Science roster is untouched.
    assert all(not s.grades for s in _load(db_service, "cls_sci").students)

    spy = mocker.spy(db_service, "update_enrollment")
    lifecycle.delete_assessment(db_service, _load(db_service, "cls_math"), assessment.id)
    assert sorted(c.args[1] for c in spy.call_args_list) == sorted(graded_ids)

    after_first = _load(db_service, "cls_math")
    assert after_first.assessments == []
    assert all(g.assessmentId != assessment.id for s in after_first.students for g in s.grades)

    spy.reset_mock()
    report = lifecycle.delete_assessment(db_service, after_first, assessment.id)
    spy.assert_not_called()
    assert report.total == 0
    assert _load(db_service, "cls_math") == after_first


def test_calendar_write_failure_in_the_database_still_saves_the_assessment(db_service, mocker):
    """
    GIVEN: a calendar whose event insert fails inside the shared database session.
    WHEN:  an assessment is created with calendar sync.
    THEN:  the assessment is stored without an event id and the session stays usable.
    """
    db_service.create_class({"id": "cls_math", "owner_id": "t1", "name": "2A", "subject": "Math"})
    db_service.add_calendar_event({"id": "evt_deadbeefcafe", "owner_id": "t1", "title": "Trip", "date": "2025-02-01", "type": "event"})
    mocker.patch("app.services.calendar_service.uuid.uuid4", return_value=uuid.UUID("deadbeefcafe" + "0" * 20))

    assessment = lifecycle.create_assessment(
        db_service, CalendarService(db_service), "t1", _load(db_service, "cls_math"),
        class_model.AssessmentCreate(title="Quiz"), sync_calendar=True,
    )

    assert assessment.relatedCalendarEventId is None
    assert [a.id for a in _load(db_service, "cls_math").assessments] == [assessment.id]
    assert [e.id for e in db_service.get_calendar_events("t1")] == ["evt_deadbeefcafe"]
