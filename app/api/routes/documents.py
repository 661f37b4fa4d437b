from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from app.api.dependencies import get_document_service
from app.core.config import settings
from app.core.exceptions.document import (
    DocumentDatabaseError,
    DocumentError,
    DocumentNotFoundError,
    DocumentParseError,
    DocumentValidationError,
)
from app.core.logger import logger
from app.core.models.file import FileContent
from app.core.models.search import SearchOptions
from app.schemas.document import (
    DocumentDeleteResponse,
    DocumentGetResponse,
    DocumentHighlightResponse,
    DocumentListResponse,
    DocumentSearchResponse,
    DocumentUploadResponse,
    ProcessingStatus,
    SearchMeta,
    SearchResultSchema,
)
from app.services.document_service import DocumentService

router = APIRouter(prefix="/api/v1/documents", tags=["documents"])


@router.post("/upload", response_model=DocumentUploadResponse)
async def upload_document(
    file: UploadFile = File(...),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentUploadResponse:
    """
    Разбирает документ и сохраняет его текст и HTML в БД

    Args:
    - file: PDF, DOCX или TXT файл (максимум 20MB)

    Returns:
    - DocumentUploadResponse: Ответ на запрос

    Raises:
    - HTTPException: 400 - Файл не прошел валидацию или не разбирается
    - HTTPException: 500 - Внутренняя ошибка сервера
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="Имя файла не может быть пустым")

    logger.debug(f"Начало загрузки документа: {file.filename}")
    file_content = FileContent(
        filename=file.filename,
        content=file.file,
        content_type=file.content_type or "application/octet-stream",
    )

    try:
        document = await document_service.upload_document(file_content)
        logger.info(f"Документ {document.id} успешно загружен")
        return DocumentUploadResponse(
            document=document,
            status=ProcessingStatus.SUCCESS,
            message="Документ успешно загружен",
        )
    except (DocumentValidationError, DocumentParseError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DocumentDatabaseError as e:
        logger.error(f"Ошибка БД при загрузке документа: {e}")
        raise HTTPException(status_code=500, detail="Внутренняя ошибка сервера")
    except DocumentError as e:
        logger.error(f"Ошибка при загрузке документа: {e}")
        raise HTTPException(status_code=500, detail="Внутренняя ошибка сервера")


@router.get("/", response_model=DocumentListResponse)
async def list_documents(
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """
    Список документов, новые первыми

    Raises:
    - HTTPException: 500 - Внутренняя ошибка сервера
    """
    try:
        documents = await document_service.list_documents()
    except DocumentDatabaseError as e:
        logger.error(f"Ошибка БД при получении списка документов: {e}")
        raise HTTPException(status_code=500, detail="Внутренняя ошибка сервера")

    return DocumentListResponse(
        status=ProcessingStatus.SUCCESS,
        total=len(documents),
        documents=documents,
    )


@router.get("/search", response_model=DocumentSearchResponse)
async def search_documents(
    query: str = Query(..., description="Строка поиска", min_length=1),
    search_exact: bool = Query(False, description="Поиск точного совпадения"),
    max_gap: int = Query(
        settings.MAX_SEARCH_GAP,
        description="Допустимый разрыв между символами запроса",
        ge=0,
        le=settings.SEARCH_PARAM_LIMIT,
    ),
    preview_range: int = Query(
        settings.PREVIEW_RANGE,
        description="Размер контекста (символов) вокруг совпадения",
        ge=0,
        le=settings.SEARCH_PARAM_LIMIT,
    ),
    document_ids: Optional[List[int]] = Query(
        None, description="Искать только в этих документах"
    ),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentSearchResponse:
    """
    Поиск совпадений в документах

    Args:
    - query: Строка поиска (обязательный параметр)
    - search_exact: Точный поиск подстроки вместо интервального
    - max_gap: Допустимый разрыв между символами в интервальном режиме
    - preview_range: Размер контекста вокруг совпадения
    - document_ids: Ограничить поиск документами (опционально)

    Returns:
    - DocumentSearchResponse: Совпадения, отсортированные по плотности

    Raises:
    - HTTPException: 500 - Внутренняя ошибка сервера
    """
    options = SearchOptions(
        max_gap=max_gap, is_exact=search_exact, preview_range=preview_range
    )
    try:
        results = await document_service.search(query, options, document_ids)
    except DocumentDatabaseError as e:
        logger.error(f"Ошибка БД при поиске документов: {e}")
        raise HTTPException(status_code=500, detail="Внутренняя ошибка сервера")

    return DocumentSearchResponse(
        status=ProcessingStatus.SUCCESS,
        meta=SearchMeta(
            query=query,
            search_exact=search_exact,
            max_gap=max_gap,
            preview_range=preview_range,
            total_results=len(results),
        ),
        results=[SearchResultSchema.model_validate(result) for result in results],
    )


@router.get("/{document_id}", response_model=DocumentGetResponse)
async def get_document(
    document_id: int,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentGetResponse:
    """
    Получение документа с текстом и HTML

    - document_id: Идентификатор документа

    Raises:
    - HTTPException: 404 - Документ не найден
    - HTTPException: 500 - Внутренняя ошибка сервера
    """
    try:
        document = await document_service.get_document(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DocumentError as e:
        logger.error(f"Ошибка при получении документа {document_id}: {e}")
        raise HTTPException(status_code=500, detail="Внутренняя ошибка сервера")

    return DocumentGetResponse.model_validate(document.model_dump())


@router.get("/{document_id}/highlight", response_model=DocumentHighlightResponse)
async def highlight_document(
    document_id: int,
    query: str = Query(..., description="Строка поиска", min_length=1),
    search_exact: bool = Query(False, description="Поиск точного совпадения"),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentHighlightResponse:
    """
    Полный текст документа с подсветкой запроса

    Raises:
    - HTTPException: 404 - Документ не найден
    - HTTPException: 500 - Внутренняя ошибка сервера
    """
    try:
        document, highlighted_html = await document_service.highlight_document(
            document_id, query, search_exact
        )
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DocumentError as e:
        logger.error(f"Ошибка при подсветке документа {document_id}: {e}")
        raise HTTPException(status_code=500, detail="Внутренняя ошибка сервера")

    return DocumentHighlightResponse(
        document_id=document_id,
        file_name=document.file_name,
        highlighted_html=highlighted_html,
    )


@router.delete("/{document_id}", response_model=DocumentDeleteResponse)
async def delete_document(
    document_id: int,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentDeleteResponse:
    """
    Удаляет документ из БД

    - document_id: Идентификатор документа

    Raises:
    - HTTPException: 404 - Документ не найден
    - HTTPException: 500 - Внутренняя ошибка сервера
    """
    try:
        await document_service.delete_document(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DocumentError as e:
        logger.error(f"Ошибка при удалении документа {document_id}: {e}")
        raise HTTPException(status_code=500, detail="Внутренняя ошибка сервера")

    logger.info(f"Документ {document_id} успешно удален")
    return DocumentDeleteResponse(
        status=ProcessingStatus.SUCCESS,
        message="Документ успешно удален",
        document_id=document_id,
    )
