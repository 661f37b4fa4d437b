from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from app.core.models.document import Document, DocumentBase


class ProcessingStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class DocumentUploadResponse(BaseModel):
    """Схема ответа при загрузке документа"""

    status: ProcessingStatus = Field(..., description="Статус обработки документа")
    message: Optional[str] = Field(None, description="Сообщение о статусе")
    document: DocumentBase = Field(..., description="Информация о документе")

    class Config:
        use_enum_values = True
        from_attributes = True


class DocumentListResponse(BaseModel):
    """Список документов, новые первыми"""

    status: ProcessingStatus = Field(..., description="Статус обработки")
    total: int = Field(..., description="Количество документов")
    documents: List[DocumentBase] = Field(..., description="Метаданные документов")

    class Config:
        use_enum_values = True


class DocumentGetResponse(Document):
    """Схема ответа при получении документа"""

    class Config:
        from_attributes = True


class SearchResultSchema(BaseModel):
    """Одно совпадение в документе"""

    document_id: int = Field(..., description="ID документа")
    file_name: str = Field(..., description="Имя файла")
    match_index: int = Field(..., description="Позиция начала совпадения в тексте")
    match_length: int = Field(..., description="Длина отрезка совпадения")
    highlighted_snippet: str = Field(..., description="HTML фрагмент с подсветкой")

    class Config:
        from_attributes = True


class SearchMeta(BaseModel):
    """Метаинформация о поиске"""

    query: str = Field(..., description="Поисковый запрос")
    search_exact: bool = Field(..., description="Точный режим")
    max_gap: int = Field(..., description="Допустимый разрыв между символами")
    preview_range: int = Field(..., description="Размер контекста вокруг совпадения")
    total_results: int = Field(..., description="Общее количество совпадений")


class DocumentSearchResponse(BaseModel):
    """Ответ на запрос поиска по документам"""

    status: ProcessingStatus = Field(..., description="Статус обработки")
    meta: SearchMeta = Field(..., description="Метаинформация о поиске")
    results: List[SearchResultSchema] = Field(..., description="Результаты поиска")

    class Config:
        use_enum_values = True


class DocumentHighlightResponse(BaseModel):
    """Текст документа с подсветкой запроса"""

    document_id: int = Field(..., description="ID документа")
    file_name: str = Field(..., description="Имя файла")
    highlighted_html: str = Field(..., description="HTML текста с подсветкой")


class DocumentDeleteResponse(BaseModel):
    """Ответ на запрос удаления документа"""

    status: ProcessingStatus = Field(..., description="Статус обработки документа")
    message: Optional[str] = Field(None, description="Сообщение о статусе")
    document_id: int = Field(..., description="ID документа")

    class Config:
        use_enum_values = True
