from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from app.core.exceptions.document import (
    DocumentDatabaseError,
    DocumentNotFoundError,
    DocumentParseError,
    DocumentValidationError,
)
from app.core.exceptions.file import FileValidationError, TextExtractionError
from app.core.exceptions.repository import RepositoryError
from app.core.interfaces.document_repository import IDocumentRepository
from app.core.interfaces.file_service import IFileService
from app.core.logger import logger
from app.core.models.document import Document, DocumentBase
from app.core.models.file import FileContent
from app.core.models.search import SearchOptions, SearchResult
from app.core.utils.html import text_to_html
from app.services.search_service import SearchService, search_service


class DocumentService:
    """Сервис для работы с документами"""

    def __init__(
        self,
        repository: IDocumentRepository,
        file_service: IFileService,
        search: Optional[SearchService] = None,
    ):
        self.repository = repository
        self.file_service = file_service
        self.search_service = search or search_service

    async def upload_document(self, file: FileContent) -> DocumentBase:
        """
        Загрузка и обработка документа

        Args:
            file: FileContent - файл

        Returns:
            DocumentBase: Метаданные сохраненного документа

        Raises:
            DocumentValidationError: Если файл не прошел валидацию или в нем нет текста
            DocumentParseError: Если не удалось разобрать файл
            DocumentDatabaseError: Если не удалось сохранить документ в базу данных
        """
        try:
            content_bytes = file.get_content_bytes()
            await self.file_service.validate_file(file.filename, content_bytes)

            parsed = await self.file_service.parse_file(file.filename, content_bytes)
            if not parsed.text.strip():
                raise DocumentValidationError(
                    "Не удалось извлечь текст из файла или файл пуст"
                )

            document = await self.repository.create(
                Document(
                    file_name=file.filename,
                    content=parsed.text,
                    html_content=parsed.html,
                    date=datetime.now(timezone.utc),
                    has_original_styles=parsed.has_original_styles,
                )
            )

            logger.info(f"Документ успешно загружен: {document.id}")
            return DocumentBase.model_validate(
                document.model_dump(exclude={"content", "html_content"})
            )

        except FileValidationError as e:
            logger.info(f"Ошибка валидации файла {file.filename}: {str(e)}")
            raise DocumentValidationError(str(e))

        except TextExtractionError as e:
            logger.error(f"Ошибка разбора файла {file.filename}: {e}")
            raise DocumentParseError(e.reason or str(e))

        except RepositoryError as e:
            logger.error(
                f"Ошибка базы данных при сохранении документа {file.filename}: {e}"
            )
            raise DocumentDatabaseError(f"Не удалось сохранить документ: {str(e)}")

    async def list_documents(self) -> List[DocumentBase]:
        """
        Получение метаданных всех документов, новые первыми

        Raises:
            DocumentDatabaseError: Если не удалось получить документы из базы данных
        """
        try:
            documents = await self.repository.list_documents()
        except RepositoryError as e:
            logger.error(f"Критическая ошибка БД при получении списка документов: {e}")
            raise DocumentDatabaseError(str(e))

        return [
            DocumentBase.model_validate(
                document.model_dump(exclude={"content", "html_content"})
            )
            for document in documents
        ]

    async def get_document(self, document_id: int) -> Document:
        """
        Получение документа по ID вместе с текстом и HTML

        Args:
            document_id: int - ID документа

        Returns:
            Document: Доменная модель документа

        Raises:
            DocumentNotFoundError: Если документ не найден
            DocumentDatabaseError: Если не удалось получить документ из базы данных
        """
        try:
            logger.info(f"Получение документа: {document_id}")
            document = await self.repository.get_by_id(document_id)
        except RepositoryError as e:
            logger.error(
                f"Критическая ошибка БД при получении документа {document_id}: {e}"
            )
            raise DocumentDatabaseError(str(e))

        if not document:
            raise DocumentNotFoundError(document_id)
        return document

    async def delete_document(self, document_id: int) -> None:
        """
        Удаление документа

        Args:
            document_id: int - ID документа

        Raises:
            DocumentNotFoundError: Если документ не найден
            DocumentDatabaseError: Если не удалось удалить документ из базы данных
        """
        logger.info(f"Удаление документа: {document_id}")
        try:
            document = await self.repository.get_by_id(document_id)
            if not document:
                raise DocumentNotFoundError(document_id)

            await self.repository.delete(document_id)
            logger.info(f"Документ {document_id} успешно удален")
        except RepositoryError as e:
            logger.error(
                f"Критическая ошибка БД при удалении документа {document_id}: {e}"
            )
            raise DocumentDatabaseError(str(e))

    async def search(
        self,
        query: str,
        options: SearchOptions,
        document_ids: Optional[Sequence[int]] = None,
    ) -> List[SearchResult]:
        """
        Поиск по всем документам или по выбранным

        Args:
            query: str - поисковый запрос
            options: SearchOptions - режим поиска, допустимый разрыв, размер контекста
            document_ids: Optional[Sequence[int]] - искать только в этих документах

        Returns:
            List[SearchResult]: Совпадения, отсортированные по плотности

        Raises:
            DocumentDatabaseError: При ошибке получения документов
        """
        logger.info(
            f"Поиск документов по запросу: '{query}', точный: {options.is_exact}"
        )
        if not query.strip():
            return []

        try:
            documents = await self.repository.list_documents(document_ids)
        except RepositoryError as e:
            logger.error(f"Критическая ошибка БД при поиске документов: {e}")
            raise DocumentDatabaseError(str(e))

        results = self.search_service.search(query, documents, options)
        logger.info(f"Найдено {len(results)} совпадений в {len(documents)} документах")
        return results

    async def highlight_document(
        self, document_id: int, query: str, is_exact: bool
    ) -> Tuple[Document, str]:
        """
        Полный текст документа с подсветкой запроса

        Args:
            document_id: int - ID документа
            query: str - поисковый запрос
            is_exact: bool - точный режим

        Returns:
            Tuple[Document, str]: документ и HTML его текста, каждая строка отдельным блоком

        Raises:
            DocumentNotFoundError: Если документ не найден
            DocumentDatabaseError: Если не удалось получить документ из базы данных
        """
        document = await self.get_document(document_id)
        highlighted = self.search_service.highlight_text(
            document.content, query, is_exact
        )
        return document, text_to_html(highlighted)
