from dataclasses import dataclass
from tempfile import SpooledTemporaryFile
from typing import BinaryIO, Union

from pydantic import BaseModel, field_validator


class FileContent(BaseModel):
    """Загруженный файл до разбора"""

    filename: str
    content: Union[BinaryIO, SpooledTemporaryFile, bytes]
    content_type: str = "application/octet-stream"

    class Config:
        arbitrary_types_allowed = True

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        """Проверяем, что content является файловым объектом или bytes"""
        if isinstance(v, bytes):
            return v
        if not hasattr(v, "read"):
            raise ValueError("content должен быть файловым объектом или bytes")
        return v

    @property
    def file_extension(self) -> str:
        """Расширение файла в нижнем регистре"""
        return self.filename.split(".")[-1].lower() if "." in self.filename else ""

    def get_content_bytes(self) -> bytes:
        """Получить содержимое как bytes"""
        if isinstance(self.content, bytes):
            return self.content
        self.content.seek(0)
        data = self.content.read()
        self.content.seek(0)
        return data


@dataclass
class ParseResult:
    """Результат разбора файла: текст для поиска и HTML для отображения"""

    text: str
    html: str
    has_original_styles: bool = False
