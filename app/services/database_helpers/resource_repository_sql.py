# /app/services/database_helpers/resource_repository_sql.py

from typing import List, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models.resource_models import Resource


class ResourceRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def add_resource(self, record: Dict) -> Resource:
        new_resource = Resource(**record)
        self.db.add(new_resource)
        try:
            self.db.commit()
        except SQLAlchemyError:
            # Leave the shared session usable for the rest of the request.
            self.db.rollback()
            raise
        self.db.refresh(new_resource)
        return new_resource

    def get_resources_for_owner(self, owner_id: str) -> List[Resource]:
        return (
            self.db.query(Resource)
            .filter(Resource.owner_id == owner_id)
            .order_by(Resource.created_at.desc(), Resource.id)
            .all()
        )
