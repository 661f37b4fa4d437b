from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from app.core.database import Base


class Document(Base):
    """Модель документа"""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    file_name = Column(String(500), nullable=False, index=True)
    content = Column(Text, nullable=False, default="")  # Текст для поиска
    html_content = Column(Text, nullable=False, default="")  # HTML для отображения
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    has_original_styles = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Document(id={self.id}, file_name={self.file_name})>"
