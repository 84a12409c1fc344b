# /app/routers/resources_router.py

from fastapi import APIRouter, Depends, status
from typing import List

from ..core.deps import get_owner_id
from ..models import resource_model
from ..services import class_service, database_service, resource_service

router = APIRouter()


@router.get("", response_model=List[resource_model.Resource], summary="List All Resources")
def list_resources(db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return resource_service.list_resources(db=db, owner_id=owner_id)


@router.post("", response_model=resource_model.Resource, status_code=status.HTTP_201_CREATED, summary="Create a Resource")
def create_resource(resource: resource_model.ResourceCreate, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    return resource_service.create_resource(resource_data=resource, db=db, owner_id=owner_id)


@router.get("/for-class/{class_id}", response_model=List[resource_model.Resource], summary="List Resources Visible in a Class")
def list_resources_for_class(class_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service), owner_id: str = Depends(get_owner_id)):
    class_room, _ = class_service.load_class(class_id, owner_id, db)
    return resource_service.get_resources_for_class(class_room=class_room, db=db, owner_id=owner_id)
