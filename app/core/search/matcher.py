"""
Поиск совпадений в тексте документа: точный и интервальный режимы
"""

from typing import List, Optional

from app.core.models.search import MatchInfo, SearchOptions
from app.core.utils.html import fold_case


def find_matches(content: str, query: str, options: SearchOptions) -> List[MatchInfo]:
    """
    Находит все совпадения запроса в тексте

    Args:
        content: str - текст документа
        query: str - поисковый запрос
        options: SearchOptions - параметры поиска (используются max_gap и is_exact)

    Returns:
        List[MatchInfo]: Совпадения в порядке возрастания позиции
    """
    if not query or not content or len(query) > len(content):
        return []

    if options.is_exact:
        return find_exact_matches(content, query)
    return find_interval_matches(content, query, options.max_gap)


def find_exact_matches(content: str, query: str) -> List[MatchInfo]:
    """
    Точный поиск без учета регистра. Совпадения не пересекаются:
    после найденного совпадения поиск продолжается с его конца.
    """
    matches: List[MatchInfo] = []
    if not query:
        return matches

    lower_content = fold_case(content)
    lower_query = fold_case(query)
    query_length = len(query)

    start = 0
    while start < len(content):
        index = lower_content.find(lower_query, start)
        if index == -1:
            break
        matches.append(
            MatchInfo(
                index=index,
                length=query_length,
                positions=list(range(index, index + query_length)),
            )
        )
        start = index + query_length

    return matches


def find_interval_matches(content: str, query: str, max_gap: int) -> List[MatchInfo]:
    """
    Интервальный поиск: символы запроса встречаются в тексте по порядку,
    а между соседними совпавшими символами пропущено не больше max_gap символов.

    Совпадения могут пересекаться: следующий поиск начинается сразу после
    первого символа предыдущего совпадения.
    """
    matches: List[MatchInfo] = []
    if not query:
        return matches

    lower_content = fold_case(content)
    lower_query = fold_case(query)

    search_start = 0
    while search_start < len(content):
        first = lower_content.find(lower_query[0], search_start)
        if first == -1:
            break

        positions = _match_from(lower_content, lower_query, max_gap, first)
        if positions is None:
            # Любой старт в (search_start, first] дает ту же первую позицию и тот же отказ
            search_start = first + 1
            continue
        if not positions:
            # Символ запроса не найден до конца текста, дальше совпадений не будет
            break

        matches.append(
            MatchInfo(
                index=positions[0],
                length=positions[-1] - positions[0] + 1,
                positions=positions,
            )
        )
        search_start = positions[0] + 1

    return matches


def _match_from(
    content: str, query: str, max_gap: int, first: int
) -> Optional[List[int]]:
    """
    Жадно сопоставляет запрос, начиная с позиции first первого символа.

    Returns:
        List[int]: позиции всех символов запроса;
        None: превышен допустимый разрыв;
        []: очередной символ запроса в тексте больше не встречается
    """
    positions = [first]
    for char in query[1:]:
        found = content.find(char, positions[-1] + 1)
        if found == -1:
            return []
        if found - positions[-1] - 1 > max_gap:
            return None
        positions.append(found)
    return positions
