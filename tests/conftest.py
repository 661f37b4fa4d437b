import io

import pytest
import pytest_asyncio
from docx import Document
from docx.enum.text import WD_COLOR_INDEX
from docx.shared import Pt, RGBColor
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.database import Base, get_async_session
from app.main import app
from app.models.document import Document as SQLDocument

DOCX_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


@pytest_asyncio.fixture
async def test_db_session(tmp_path):
    """Тестовая БД в файле SQLite - схема создается заново для каждого теста"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test_documentsearcher.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(test_db_session):
    """Тестовый HTTP клиент с переопределенной сессией БД"""

    def override_get_async_session():
        yield test_db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def db_checker(test_db_session):
    """Проверка содержимого тестовой БД"""

    async def count_documents() -> int:
        result = await test_db_session.execute(select(func.count(SQLDocument.id)))
        return result.scalar_one()

    async def get_document(document_id: int):
        result = await test_db_session.execute(
            select(SQLDocument).where(SQLDocument.id == document_id)
        )
        return result.scalar_one_or_none()

    return {"count_documents": count_documents, "get_document": get_document}


@pytest.fixture
def upload(test_client):
    """Загрузка файла через API"""

    async def _upload(sample):
        return await test_client.post(
            "/api/v1/documents/upload",
            files={
                "file": (
                    sample["filename"],
                    sample["content"],
                    sample["content_type"],
                )
            },
        )

    return _upload


def _docx_bytes(document) -> bytes:
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def sample_file():
    """Текстовый файл"""
    return {
        "filename": "test.txt",
        "content": b"Test document content for integration testing",
        "content_type": "text/plain",
    }


@pytest.fixture
def sample_file_docx():
    """Простой DOCX файл"""
    doc = Document()
    doc.add_paragraph("Test document content for integration testing")

    return {
        "filename": "test.docx",
        "content": _docx_bytes(doc),
        "content_type": DOCX_CONTENT_TYPE,
    }


@pytest.fixture
def styled_docx_bytes():
    """DOCX с оформлением: жирный и цветной текст, выделение, список и таблица"""
    doc = Document()

    paragraph = doc.add_paragraph()
    bold_run = paragraph.add_run("Bold ")
    bold_run.bold = True
    red_run = paragraph.add_run("red")
    red_run.font.color.rgb = RGBColor(0xFF, 0x00, 0x00)
    red_run.font.size = Pt(14)

    highlighted = doc.add_paragraph().add_run("marked")
    highlighted.font.highlight_color = WD_COLOR_INDEX.YELLOW

    doc.add_paragraph("first item", style="List Bullet")

    table = doc.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "A1"
    table.cell(0, 1).text = "B1"
    table.cell(1, 0).text = "A2"
    table.cell(1, 1).text = "B2"

    return _docx_bytes(doc)


@pytest.fixture
def sample_file_pdf():
    """Настоящий PDF документ"""
    from reportlab.lib.pagesizes import letter
    from reportlab.pdfgen import canvas

    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=letter)
    pdf.drawString(100, 750, "Test document content for integration testing")
    pdf.showPage()
    pdf.drawString(100, 750, "Second page text")
    pdf.save()

    return {
        "filename": "test.pdf",
        "content": buffer.getvalue(),
        "content_type": "application/pdf",
    }


@pytest.fixture
def invalid_file_format():
    """Файл неподдерживаемого формата"""
    return {
        "filename": "test.xyz",
        "content": b"Invalid file content with unsupported format",
        "content_type": "application/unknown",
    }


@pytest.fixture
def invalid_file_too_large():
    """Файл больше максимального размера"""
    return {
        "filename": "huge_file.txt",
        "content": b"X" * (21 * 1024 * 1024),  # 21MB
        "content_type": "text/plain",
    }


@pytest.fixture
def search_test_file():
    """Текст для проверки поиска: точные фразы и разреженные совпадения"""
    content = (
        "Sales report for 2024\n"
        "\n"
        "The sales department showed great results this year.\n"
        "Search me exactly: special query\n"
        "s-p-e-c-i-a-l written with gaps\n"
    )
    return {
        "filename": "search_test.txt",
        "content": content.encode("utf-8"),
        "content_type": "text/plain",
    }
