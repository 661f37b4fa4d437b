class DocumentError(Exception):
    """Ошибка при работе с документом"""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Ошибка при работе с документом: {reason}")


class DocumentNotFoundError(DocumentError):
    """Документ не найден"""

    def __init__(self, document_id: int):
        self.document_id = document_id
        super().__init__(f"Документ с ID {document_id} не найден")


class DocumentDatabaseError(DocumentError):
    """Ошибка базы данных при работе с документом"""

    def __init__(self, reason: str):
        super().__init__(f"Ошибка базы данных: {reason}")


class DocumentValidationError(DocumentError):
    """Документ не прошел валидацию"""

    def __init__(self, reason: str):
        super().__init__(f"Ошибка валидации: {reason}")


class DocumentParseError(DocumentError):
    """Не удалось разобрать содержимое документа"""

    def __init__(self, reason: str):
        super().__init__(f"Не удалось разобрать документ: {reason}")
