from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_async_session
from app.repositories.document_repository import DocumentRepository
from app.services.document_service import DocumentService
from app.services.file_service import FileService
from app.services.search_service import SearchService, search_service


def get_file_service() -> FileService:
    return FileService()


def get_search_service() -> SearchService:
    return search_service


def get_document_service(
    session: AsyncSession = Depends(get_async_session),
    file_service: FileService = Depends(get_file_service),
    search: SearchService = Depends(get_search_service),
) -> DocumentService:
    """Сервис документов с репозиторием на сессии текущего запроса"""
    return DocumentService(
        repository=DocumentRepository(session=session),
        file_service=file_service,
        search=search,
    )
