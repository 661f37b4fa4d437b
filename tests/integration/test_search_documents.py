from unittest.mock import patch

import pytest
from httpx import AsyncClient

from app.core.exceptions.document import DocumentDatabaseError

SEARCH_URL = "/api/v1/documents/search"


@pytest.mark.integration
@pytest.mark.database
class TestDocumentSearch:
    """Интеграционные тесты для эндпоинта поиска документов"""

    @pytest.mark.asyncio
    async def test_search_documents(
        self, test_client: AsyncClient, upload, sample_file_docx
    ):
        """Тест поиска по документам"""
        document_id = (await upload(sample_file_docx)).json()["document"]["id"]

        response = await test_client.get(
            SEARCH_URL, params={"query": "Test document", "search_exact": True}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert data["meta"]["query"] == "Test document"
        assert data["meta"]["search_exact"] is True
        assert data["meta"]["total_results"] == 1

        result = data["results"][0]
        assert result["document_id"] == document_id
        assert result["file_name"] == "test.docx"
        assert result["match_length"] == len("Test document")
        assert "<mark>T</mark>" in result["highlighted_snippet"]
        assert "content" not in result

    @pytest.mark.asyncio
    async def test_exact_search_skips_sparse_matches(
        self, test_client: AsyncClient, upload, search_test_file
    ):
        """Точный поиск находит только непрерывное вхождение"""
        await upload(search_test_file)

        response = await test_client.get(
            SEARCH_URL, params={"query": "special", "search_exact": True}
        )

        data = response.json()
        assert data["meta"]["total_results"] == 1
        assert data["results"][0]["match_length"] == 7

    @pytest.mark.asyncio
    async def test_interval_search_ranked_by_density(
        self, test_client: AsyncClient, upload, search_test_file
    ):
        """Интервальный поиск находит разреженные совпадения, плотные идут первыми"""
        await upload(search_test_file)

        response = await test_client.get(
            SEARCH_URL, params={"query": "special", "max_gap": 1}
        )

        assert response.status_code == 200
        data = response.json()
        lengths = [r["match_length"] for r in data["results"]]
        assert lengths == sorted(lengths)
        assert lengths[0] == 7
        assert 13 in lengths
        assert data["meta"]["max_gap"] == 1

    @pytest.mark.asyncio
    async def test_interval_search_zero_gap(
        self, test_client: AsyncClient, upload, search_test_file
    ):
        """При нулевом разрыве находятся только непрерывные совпадения"""
        await upload(search_test_file)

        response = await test_client.get(
            SEARCH_URL, params={"query": "special", "max_gap": 0}
        )

        data = response.json()
        assert [r["match_length"] for r in data["results"]] == [7]

    @pytest.mark.asyncio
    async def test_search_case_insensitive(
        self, test_client: AsyncClient, upload, search_test_file
    ):
        await upload(search_test_file)

        response = await test_client.get(
            SEARCH_URL, params={"query": "SALES", "search_exact": True}
        )

        assert response.json()["meta"]["total_results"] == 2

    @pytest.mark.asyncio
    async def test_search_snippet_preview_range(
        self, test_client: AsyncClient, upload, search_test_file
    ):
        """Размер контекста фрагмента задается параметром preview_range"""
        await upload(search_test_file)

        response = await test_client.get(
            SEARCH_URL,
            params={"query": "2024", "search_exact": True, "preview_range": 0},
        )

        data = response.json()
        assert data["meta"]["preview_range"] == 0
        assert data["results"][0]["highlighted_snippet"] == (
            '<div class="docx-p">...<mark>2</mark><mark>0</mark>'
            "<mark>2</mark><mark>4</mark>...</div>"
        )

    @pytest.mark.asyncio
    async def test_search_selected_documents(
        self, test_client: AsyncClient, upload, sample_file, search_test_file
    ):
        """Поиск ограничивается указанными документами"""
        await upload(sample_file)
        second_id = (await upload(search_test_file)).json()["document"]["id"]

        response = await test_client.get(
            SEARCH_URL,
            params={"query": "t", "search_exact": True, "document_ids": [second_id]},
        )

        data = response.json()
        assert data["meta"]["total_results"] > 0
        assert {r["document_id"] for r in data["results"]} == {second_id}

    @pytest.mark.asyncio
    async def test_search_no_results(
        self, test_client: AsyncClient, upload, sample_file
    ):
        await upload(sample_file)

        response = await test_client.get(SEARCH_URL, params={"query": "zzz"})

        assert response.status_code == 200
        assert response.json()["results"] == []

    @pytest.mark.asyncio
    async def test_search_blank_query(
        self, test_client: AsyncClient, upload, sample_file
    ):
        """Запрос из пробелов ничего не находит"""
        await upload(sample_file)

        response = await test_client.get(SEARCH_URL, params={"query": "   "})

        assert response.status_code == 200
        assert response.json()["meta"]["total_results"] == 0

    @pytest.mark.asyncio
    async def test_search_empty_query(self, test_client: AsyncClient):
        """Пустой запрос не проходит валидацию"""
        response = await test_client.get(SEARCH_URL, params={"query": ""})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_search_negative_gap(self, test_client: AsyncClient):
        response = await test_client.get(
            SEARCH_URL, params={"query": "test", "max_gap": -1}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_search_database_error(self, test_client: AsyncClient):
        """Тест обработки ошибки базы данных при поиске"""
        with patch(
            "app.services.document_service.DocumentService.search",
            side_effect=DocumentDatabaseError("connection lost"),
        ):
            response = await test_client.get(SEARCH_URL, params={"query": "test"})

        assert response.status_code == 500


@pytest.mark.integration
@pytest.mark.database
class TestDocumentHighlight:
    """Интеграционные тесты подсветки запроса в полном тексте"""

    @pytest.mark.asyncio
    async def test_highlight_exact(
        self, test_client: AsyncClient, upload, search_test_file
    ):
        document_id = (await upload(search_test_file)).json()["document"]["id"]

        response = await test_client.get(
            f"/api/v1/documents/{document_id}/highlight",
            params={"query": "sales", "search_exact": True},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["document_id"] == document_id
        assert data["file_name"] == "search_test.txt"
        html = data["highlighted_html"]
        assert '<div class="docx-p"><mark>Sales</mark> report for 2024</div>' in html
        assert "<mark>sales</mark> department" in html
        assert '<div class="docx-p"><br></div>' in html

    @pytest.mark.asyncio
    async def test_highlight_query_across_lines(
        self, test_client: AsyncClient, upload, search_test_file
    ):
        """Запрос с переводом строки подсвечивается внутри каждого блока"""
        document_id = (await upload(search_test_file)).json()["document"]["id"]

        response = await test_client.get(
            f"/api/v1/documents/{document_id}/highlight",
            params={"query": "year.\nSearch", "search_exact": True},
        )

        assert response.status_code == 200
        html = response.json()["highlighted_html"]
        assert "results this <mark>year.</mark></div>" in html
        assert '<div class="docx-p"><mark>Search</mark> me exactly' in html

    @pytest.mark.asyncio
    async def test_highlight_interval(
        self, test_client: AsyncClient, upload, sample_file
    ):
        """В интервальном режиме подсвечиваются все символы запроса"""
        document_id = (await upload(sample_file)).json()["document"]["id"]

        response = await test_client.get(
            f"/api/v1/documents/{document_id}/highlight", params={"query": "xT"}
        )

        html = response.json()["highlighted_html"]
        assert html.startswith('<div class="docx-p"><mark>T</mark>es<mark>t</mark>')

    @pytest.mark.asyncio
    async def test_highlight_not_found(self, test_client: AsyncClient):
        response = await test_client.get(
            "/api/v1/documents/999/highlight", params={"query": "test"}
        )

        assert response.status_code == 404
