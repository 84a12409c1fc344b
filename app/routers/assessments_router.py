# /app/routers/assessments_router.py

"""
Endpoints for class-wide assessments, nested under a class:
/api/classes/{class_id}/assessments.
"""

from fastapi import APIRouter, Depends, status

from ..core.deps import get_owner_id
from ..models import class_model
from ..services.assessment_service import AssessmentService, get_assessment_service

router = APIRouter()


@router.post("/{class_id}/assessments", response_model=class_model.ClassAssessment, status_code=status.HTTP_201_CREATED, summary="Create a Class Assessment")
def create_assessment(
    class_id: str,
    payload: class_model.AssessmentCreate,
    assessment_svc: AssessmentService = Depends(get_assessment_service),
    owner_id: str = Depends(get_owner_id),
):
    return assessment_svc.create_assessment(class_id=class_id, payload=payload, owner_id=owner_id)


@router.put("/{class_id}/assessments/{assessment_id}/grades", response_model=class_model.ClassRoom, summary="Save Scores for an Assessment")
async def grade_assessment(
    class_id: str,
    assessment_id: str,
    grades: class_model.AssessmentGrades,
    assessment_svc: AssessmentService = Depends(get_assessment_service),
    owner_id: str = Depends(get_owner_id),
):
    """Scores are upserted: re-submitting replaces a student's score rather than adding a grade."""
    return await assessment_svc.grade_assessment(class_id=class_id, assessment_id=assessment_id, scores=grades.scores, owner_id=owner_id)


@router.delete("/{class_id}/assessments/{assessment_id}", response_model=class_model.AssessmentDeletion, summary="Delete an Assessment and its Grades")
def delete_assessment(
    class_id: str,
    assessment_id: str,
    assessment_svc: AssessmentService = Depends(get_assessment_service),
    owner_id: str = Depends(get_owner_id),
):
    report = assessment_svc.delete_assessment(class_id=class_id, assessment_id=assessment_id, owner_id=owner_id)
    return class_model.AssessmentDeletion(assessmentId=assessment_id, report=report)
