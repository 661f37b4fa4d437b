from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from app.core.models.document import Document


class IDocumentRepository(ABC):
    @abstractmethod
    async def get_by_id(self, document_id: int) -> Optional[Document]:
        """
        Получение документа по ID

        Args:
            document_id: int - идентификатор документа

        Returns:
            Optional[Document]: Доменная модель документа или None если не найден

        Raises:
            RepositoryError: При ошибке выполнения запроса к БД
        """
        raise NotImplementedError

    @abstractmethod
    async def create(self, document: Document) -> Document:
        """
        Создание документа в базе данных
        Args:
            document: Document - доменная модель документа без ID
        Returns:
            Document: Созданная доменная модель документа с назначенным ID
        Raises:
            RepositoryError: При ошибке создания документа
        """
        raise NotImplementedError

    @abstractmethod
    async def list_documents(
        self, document_ids: Optional[Sequence[int]] = None
    ) -> List[Document]:
        """
        Получение документов, новые первыми

        Args:
            document_ids: Optional[Sequence[int]] - ограничить выборку этими ID

        Returns:
            List[Document]: Документы в порядке убывания даты загрузки

        Raises:
            RepositoryError: При ошибке выполнения запроса к БД
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(self, document_id: int) -> None:
        """
        Удаление документа из базы данных

        Args:
            document_id: int - идентификатор документа

        Raises:
            RepositoryError: При ошибке удаления из БД
        """
        raise NotImplementedError
