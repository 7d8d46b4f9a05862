# api/routes/notes.py

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_service
from api.schemas import ErrorResponse
from core.errors import NotFoundError
from core.services.library_service import LibraryService

router = APIRouter(prefix="/api/notes", tags=["notes"], responses={404: {"model": ErrorResponse}})


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(note_id: int, service: LibraryService = Depends(get_service)):
    if not service.delete_note(note_id):
        raise NotFoundError("Note", note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
