# /app/routers/classes_router.py

from fastapi import APIRouter, Depends, status, UploadFile, File, Response
from fastapi.responses import StreamingResponse
from typing import List

from ..core.deps import get_owner_id
from ..models import class_model, student_model
from ..models.sync_model import PropagationReport
from ..services import class_service, database_service

router = APIRouter()

# --- CLASS COLLECTION ENDPOINTS (/api/classes) ---

@router.get("", response_model=List[class_model.ClassSummary], summary="Get All Classes with Summaries")
def get_all_classes(db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return class_service.get_all_classes_with_summary(owner_id=owner_id, db=db)

@router.post("", response_model=class_model.ClassRoom, status_code=status.HTTP_201_CREATED, summary="Create a New Class")
def create_new_class(class_create: class_model.ClassCreate, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return class_service.create_class(class_data=class_create, db=db, owner_id=owner_id)

# --- INDIVIDUAL CLASS RESOURCE ENDPOINTS (/api/classes/{class_id}) ---

@router.get("/{class_id}", response_model=class_model.ClassDetails, summary="Get a Single Class with Full Details")
def get_class_by_id(class_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return class_service.get_class_details_by_id(class_id=class_id, owner_id=owner_id, db=db)

@router.put("/{class_id}", response_model=class_model.ClassRoom, summary="Update a Class")
def update_class_details(class_id: str, class_update: class_model.ClassUpdate, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return class_service.update_class(class_id=class_id, class_update=class_update, db=db, owner_id=owner_id)

@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Class")
def delete_class(class_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    class_service.delete_class_by_id(class_id=class_id, db=db, owner_id=owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{class_id}/announcements", response_model=class_model.Announcement, status_code=status.HTTP_201_CREATED, summary="Post an Announcement")
def add_announcement(class_id: str, announcement: class_model.AnnouncementCreate, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return class_service.add_announcement(class_id=class_id, announcement_data=announcement, db=db, owner_id=owner_id)

@router.get("/{class_id}/export", summary="Export Class Roster as CSV", response_class=StreamingResponse)
def export_class_roster_csv(class_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    csv_string = class_service.export_roster_as_csv(class_id=class_id, owner_id=owner_id, db=db)
    # Class names are often non-ASCII, so the file name uses the id.
    file_name = f"roster_{class_id}.csv"
    return StreamingResponse(iter([csv_string]), media_type="text/csv; charset=utf-8", headers={"Content-Disposition": f"attachment; filename={file_name}"})

@router.post("/{class_id}/import", response_model=class_model.RosterImportResponse, status_code=status.HTTP_201_CREATED, summary="Import Students from CSV/Excel")
async def import_class_roster(class_id: str, file: UploadFile = File(...), db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    file_bytes = await file.read()
    return class_service.import_roster(class_id=class_id, file_bytes=file_bytes, content_type=file.content_type, db=db, owner_id=owner_id)

@router.post("/{class_id}/copy-roster", response_model=PropagationReport, summary="Copy Students from Another Class")
def copy_roster(class_id: str, request: class_model.CopyRosterRequest, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return class_service.copy_roster(class_id=class_id, source_class_id=request.sourceClassId, db=db, owner_id=owner_id)

# --- STUDENT SUB-RESOURCE ENDPOINTS ---

@router.post("/{class_id}/students", response_model=student_model.AddStudentResult, status_code=status.HTTP_201_CREATED, summary="Add a Student to a Class and its Sibling Classes")
def add_student(class_id: str, student_create: student_model.StudentCreate, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return class_service.add_student_to_class(class_id=class_id, student_data=student_create, db=db, owner_id=owner_id)

@router.post("/{class_id}/students/{student_id}/propagate", response_model=PropagationReport, summary="Retry Enrollment of an Existing Student in Sibling Classes")
def retry_student_propagation(class_id: str, student_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return class_service.retry_student_propagation(class_id=class_id, student_id=student_id, db=db, owner_id=owner_id)

@router.patch("/{class_id}/students/{student_id}", response_model=student_model.Student, summary="Update a Student's Notes or Participation")
def update_student_enrollment(class_id: str, student_id: str, update: student_model.EnrollmentUpdate, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return class_service.update_student_enrollment(class_id=class_id, student_id=student_id, update=update, db=db, owner_id=owner_id)

@router.post("/{class_id}/students/{student_id}/participation", summary="Record One Participation")
def record_participation(class_id: str, student_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    count = class_service.record_participation(class_id=class_id, student_id=student_id, db=db, owner_id=owner_id)
    return {"participationCount": count}

@router.post("/{class_id}/students/{student_id}/grades", response_model=student_model.StudentGrade, status_code=status.HTTP_201_CREATED, summary="Add a Manual Grade")
def add_manual_grade(class_id: str, student_id: str, grade: student_model.GradeCreate, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return class_service.add_manual_grade(class_id=class_id, student_id=student_id, grade_data=grade, db=db, owner_id=owner_id)

@router.delete("/{class_id}/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a Student from this Class Only")
def remove_student_from_class(class_id: str, student_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    class_service.delete_student_from_class(class_id=class_id, student_id=student_id, db=db, owner_id=owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
