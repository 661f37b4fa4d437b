from typing import List, Optional, Sequence

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions.repository import RepositoryError
from app.core.interfaces.document_repository import IDocumentRepository
from app.core.models.document import Document as DomainDocument
from app.models.document import Document as SQLDocument


class DocumentRepository(IDocumentRepository):
    """Реализация репозитория для работы с документами через SQLAlchemy"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_domain(sql_document: SQLDocument) -> DomainDocument:
        return DomainDocument(
            id=sql_document.id,
            file_name=sql_document.file_name,
            content=sql_document.content,
            html_content=sql_document.html_content,
            date=sql_document.date,
            has_original_styles=sql_document.has_original_styles,
        )

    async def create(self, domain_document: DomainDocument) -> DomainDocument:
        """
        Создание документа в базе данных
        Args:
            domain_document: DomainDocument - доменная модель документа
        Returns:
            DomainDocument: Созданная доменная модель документа с назначенным ID
        Raises:
            RepositoryError: При ошибке создания документа
        """
        try:
            sql_document = SQLDocument(
                file_name=domain_document.file_name,
                content=domain_document.content,
                html_content=domain_document.html_content,
                date=domain_document.date,
                has_original_styles=domain_document.has_original_styles,
            )
            self.session.add(sql_document)
            await self.session.flush()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise RepositoryError(
                f"Ошибка при создании документа {domain_document.file_name}: {str(e)}"
            )
        return self._to_domain(sql_document)

    async def get_by_id(self, document_id: int) -> Optional[DomainDocument]:
        """
        Получение документа по ID

        Args:
            document_id: int - идентификатор документа

        Returns:
            Optional[DomainDocument]: Доменная модель документа или None если не найден
        """
        try:
            result = await self.session.execute(
                select(SQLDocument).where(SQLDocument.id == document_id)
            )
            sql_document = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Ошибка при получении документа {document_id}: {str(e)}"
            )

        if sql_document is None:
            return None
        return self._to_domain(sql_document)

    async def list_documents(
        self, document_ids: Optional[Sequence[int]] = None
    ) -> List[DomainDocument]:
        """
        Получение документов, новые первыми

        Args:
            document_ids: Optional[Sequence[int]] - ограничить выборку этими ID

        Returns:
            List[DomainDocument]: Документы в порядке убывания даты загрузки
        """
        query = select(SQLDocument).order_by(desc(SQLDocument.date), desc(SQLDocument.id))
        if document_ids is not None:
            query = query.where(SQLDocument.id.in_(list(document_ids)))

        try:
            result = await self.session.execute(query)
            sql_documents = result.scalars().all()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Ошибка при получении списка документов: {str(e)}")

        return [self._to_domain(sql_document) for sql_document in sql_documents]

    async def delete(self, document_id: int) -> None:
        """
        Удаление документа из базы данных

        Args:
            document_id: int - идентификатор документа
        """
        try:
            await self.session.execute(
                delete(SQLDocument).where(SQLDocument.id == document_id)
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise RepositoryError(
                f"Ошибка при удалении документа {document_id}: {str(e)}"
            )
