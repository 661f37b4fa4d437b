from unittest.mock import patch

import pytest
from httpx import AsyncClient

from app.core.exceptions.document import DocumentDatabaseError


@pytest.mark.integration
@pytest.mark.database
class TestDocumentDelete:
    """Интеграционные тесты для удаления документов"""

    @pytest.mark.asyncio
    async def test_delete_document_success(
        self, test_client: AsyncClient, upload, sample_file, db_checker
    ):
        """
        Тест успешного удаления документа
        После удаления документ не возвращается и не участвует в поиске
        """
        document_id = (await upload(sample_file)).json()["document"]["id"]
        assert await db_checker["count_documents"]() == 1

        response = await test_client.delete(f"/api/v1/documents/{document_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert data["document_id"] == document_id
        assert await db_checker["count_documents"]() == 0

        response = await test_client.get(f"/api/v1/documents/{document_id}")
        assert response.status_code == 404

        response = await test_client.get(
            "/api/v1/documents/search", params={"query": "Test", "search_exact": True}
        )
        assert response.json()["results"] == []

    @pytest.mark.asyncio
    async def test_delete_keeps_other_documents(
        self, test_client: AsyncClient, upload, sample_file, sample_file_docx
    ):
        first_id = (await upload(sample_file)).json()["document"]["id"]
        second_id = (await upload(sample_file_docx)).json()["document"]["id"]

        await test_client.delete(f"/api/v1/documents/{first_id}")

        response = await test_client.get("/api/v1/documents/")
        assert [d["id"] for d in response.json()["documents"]] == [second_id]

    @pytest.mark.asyncio
    async def test_delete_document_not_found(self, test_client: AsyncClient):
        """Тест удаления несуществующего документа"""
        response = await test_client.delete("/api/v1/documents/999")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_document_twice(
        self, test_client: AsyncClient, upload, sample_file
    ):
        document_id = (await upload(sample_file)).json()["document"]["id"]

        first = await test_client.delete(f"/api/v1/documents/{document_id}")
        second = await test_client.delete(f"/api/v1/documents/{document_id}")

        assert first.status_code == 200
        assert second.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_database_error(self, test_client: AsyncClient):
        """Тест обработки ошибки базы данных при удалении"""
        with patch(
            "app.services.document_service.DocumentService.delete_document",
            side_effect=DocumentDatabaseError("connection lost"),
        ):
            response = await test_client.delete("/api/v1/documents/1")

        assert response.status_code == 500
