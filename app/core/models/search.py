from dataclasses import dataclass, field
from typing import List


@dataclass
class SearchOptions:
    """Параметры поиска"""

    max_gap: int = 30  # Допустимый разрыв между соседними символами (интервальный режим)
    is_exact: bool = False
    preview_range: int = 30  # Символов контекста с каждой стороны совпадения


@dataclass
class MatchInfo:
    """Найденное совпадение в тексте документа"""

    index: int  # Позиция первого совпавшего символа
    length: int  # Длина отрезка, покрывающего все совпавшие символы
    positions: List[int] = field(default_factory=list)


@dataclass
class SearchResult:
    """Одно совпадение в документе с подсвеченным фрагментом"""

    document_id: int
    file_name: str
    content: str
    match_index: int
    match_length: int
    highlighted_snippet: str
