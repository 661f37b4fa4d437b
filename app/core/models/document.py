from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DocumentBase(BaseModel):
    """Метаданные документа"""

    id: Optional[int] = None  # Назначается хранилищем при сохранении
    file_name: str  # Оригинальное имя файла
    date: Optional[datetime] = None
    has_original_styles: bool = False

    class Config:
        extra = "ignore"  # Игнорировать лишние поля
        from_attributes = True


class Document(DocumentBase):
    """Полная модель документа"""

    content: str = ""  # Нормализованный текст, по нему идет поиск
    html_content: str = ""  # HTML для отображения, строится один раз при загрузке

    class Config:
        from_attributes = True
