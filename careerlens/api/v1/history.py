from fastapi import APIRouter, Depends, HTTPException, status

from careerlens.core.security import current_user
from careerlens.schemas.api import DeleteResponse
from careerlens.storage import records as store

router = APIRouter()

_ROUTE_KINDS = {
    "resume": "resume",
    "jd": "job",
    "match": "match",
    "interview": "interview",
    "tailored": "tailored",
}


@router.delete("/{section}/history/{record_id}", response_model=DeleteResponse)
def delete_history_record(section: str, record_id: str, user_id: str = Depends(current_user)):
    kind = _ROUTE_KINDS.get(section)
    if kind is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown history section.")
    if not store.delete_record(kind=kind, record_id=record_id, user_id=user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Record not found.")
    return DeleteResponse(deleted=record_id)
