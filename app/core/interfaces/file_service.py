from abc import ABC, abstractmethod

from app.core.models.file import ParseResult


class IFileService(ABC):
    @abstractmethod
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
        raise NotImplementedError

    @abstractmethod
    async def parse_file(self, filename: str, content: bytes) -> ParseResult:
        """
        Разбор файла: извлечение текста для поиска и HTML для отображения.
        Возвращает полный результат или выбрасывает исключение.

        Args:
            filename: str - имя файла
            content: bytes - содержимое файла

        Returns:
            ParseResult: Текст, HTML и признак сохраненного оформления

        Raises:
            UnsupportedFileTypeError: Если тип файла не поддерживается
            TextExtractionError: Если не удалось разобрать файл
        """
        raise NotImplementedError
