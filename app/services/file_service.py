import asyncio
import io

import pdfplumber
from docx import Document as DocxDocument

from app.core.config import settings
from app.core.docx.reconstructor import docx_reconstructor
from app.core.exceptions.file import (
    EmptyFileError,
    FileTooLargeError,
    TextExtractionError,
    UnsupportedFileTypeError,
)
from app.core.interfaces.file_service import IFileService
from app.core.logger import logger
from app.core.models.file import ParseResult
from app.core.utils.html import escape_html


class FileService(IFileService):
    """Сервис для проверки и разбора загруженных файлов"""

    def __init__(self):
        self.max_file_size = settings.MAX_FILE_SIZE
        self.allowed_types = settings.ALLOWED_FILE_TYPES

    @staticmethod
    def get_file_extension(filename: str) -> str:
        """Расширение файла в нижнем регистре, пустая строка если его нет"""
        parts = filename.split(".") if filename else []
        return parts[-1].lower() if len(parts) > 1 else ""

    async def validate_file(self, filename: str, content: bytes) -> None:
        """
        Валидация файла. Проверяется тип файла и размер файла.

        Args:
            filename: str - имя файла
            content: bytes - содержимое файла

        Raises:
            UnsupportedFileTypeError: Если тип файла не поддерживается
            EmptyFileError: Если файл пуст
            FileTooLargeError: Если файл слишком большой
        """
        file_extension = self.get_file_extension(filename)
        if file_extension not in self.allowed_types:
            logger.error(f"Неподдерживаемый тип файла: {file_extension}")
            raise UnsupportedFileTypeError(self.allowed_types)

        if not content:
            logger.error(f"Загружен пустой файл: {filename}")
            raise EmptyFileError(filename)

        if len(content) > self.max_file_size:
            logger.error(
                f"Файл слишком большой. Максимальный размер: {self.max_file_size / 1024 / 1024:.1f}MB"
            )
            raise FileTooLargeError(self.max_file_size)

    async def parse_file(self, filename: str, content: bytes) -> ParseResult:
        """
        Разбор файла в зависимости от расширения

        Args:
            filename: str - имя файла
            content: bytes - содержимое файла

        Returns:
            ParseResult: Текст для поиска и HTML для отображения

        Raises:
            UnsupportedFileTypeError: Если тип файла не поддерживается
            TextExtractionError: Если не удалось разобрать файл
        """
        file_type = self.get_file_extension(filename)
        parsers = {
            "pdf": self._parse_pdf,
            "docx": self._parse_docx,
            "txt": self._parse_txt,
        }
        parser = parsers.get(file_type)
        if parser is None or file_type not in self.allowed_types:
            raise UnsupportedFileTypeError(self.allowed_types)

        # Выполняем в отдельном потоке чтобы не блокировать event loop
        return await asyncio.get_running_loop().run_in_executor(
            None, parser, filename, content
        )

    def _parse_pdf(self, filename: str, content: bytes) -> ParseResult:
        """
        Разбор PDF: текст страниц через перевод строки, каждая страница отдельным блоком

        Raises:
            TextExtractionError: Если не удалось извлечь текст из PDF
        """
        text_parts = []
        html_parts = []

        try:
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                for number, page in enumerate(pdf.pages, start=1):
                    page_text = page.extract_text() or ""
                    text_parts.append(page_text)
                    html_parts.append(
                        f'<div class="pdf-page" data-page="{number}">{escape_html(page_text)}</div>'
                    )
        except Exception as e:
            logger.error(f"Не удалось извлечь текст из PDF {filename}: {e}")
            raise TextExtractionError(filename, str(e))

        return ParseResult(
            text="\n".join(text_parts),
            html="\n".join(html_parts),
            has_original_styles=False,
        )

    def _parse_docx(self, filename: str, content: bytes) -> ParseResult:
        """
        Разбор DOCX с сохранением оформления.
        Если разобрать структуру не удалось, извлекается только текст.

        Raises:
            TextExtractionError: Если не удалось извлечь текст из DOCX
        """
        try:
            document = DocxDocument(io.BytesIO(content))
            text, html = docx_reconstructor.extract_content(document.element)
            return ParseResult(text=text, html=html, has_original_styles=True)
        except Exception as e:
            logger.warning(
                f"Не удалось разобрать оформление DOCX {filename}, извлекаем только текст: {e}"
            )

        try:
            text = self._extract_plain_text_from_docx(content)
        except Exception as e:
            logger.error(f"Не удалось извлечь текст из DOCX {filename}: {e}")
            raise TextExtractionError(filename, str(e))

        return ParseResult(
            text=text,
            html=f"<p>{escape_html(text)}</p>",
            has_original_styles=False,
        )

    def _extract_plain_text_from_docx(self, content: bytes) -> str:
        """Текст абзацев и таблиц DOCX без оформления"""
        document = DocxDocument(io.BytesIO(content))
        lines = [paragraph.text for paragraph in document.paragraphs]

        for table in document.tables:
            for row in table.rows:
                lines.append("\t".join(cell.text for cell in row.cells))

        return "\n".join(lines).strip()

    def _parse_txt(self, filename: str, content: bytes) -> ParseResult:
        """Разбор текстового файла в кодировке UTF-8, битые байты заменяются"""
        text = content.decode("utf-8-sig", errors="replace")
        return ParseResult(
            text=text,
            html=f"<pre>{escape_html(text)}</pre>",
            has_original_styles=False,
        )
