"""
Подсветка совпадений: фрагменты результатов поиска и полный текст документа
"""

from typing import Iterable, List

from app.core.models.search import MatchInfo
from app.core.utils.html import escape_html, fold_case, text_to_html

ELLIPSIS = "..."
MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"


def generate_snippet(content: str, match: MatchInfo, preview_range: int) -> str:
    """
    Строит HTML-фрагмент вокруг совпадения

    Args:
        content: str - текст документа
        match: MatchInfo - совпадение
        preview_range: int - символов контекста с каждой стороны

    Returns:
        str: HTML, в котором каждый совпавший символ обернут в <mark>
    """
    preview_range = max(0, preview_range)
    start = max(0, match.index - preview_range)
    end = min(len(content), match.index + match.length + preview_range)

    snippet = content[start:end]
    offset = 0
    if start > 0:
        snippet = ELLIPSIS + snippet
        offset = len(ELLIPSIS)
    if end < len(content):
        snippet = snippet + ELLIPSIS

    adjusted_positions = [pos - start + offset for pos in match.positions]
    return text_to_html(highlight_positions(snippet, adjusted_positions))


def _mark(segment: str) -> str:
    """Экранирует фрагмент и оборачивает в <mark> каждую его строку отдельно"""
    return "\n".join(
        f"{MARK_OPEN}{escape_html(line)}{MARK_CLOSE}" if line else ""
        for line in segment.split("\n")
    )


def highlight_positions(text: str, positions: Iterable[int]) -> str:
    """Экранирует текст и оборачивает символы на указанных позициях в <mark>"""
    marked = {pos for pos in positions if 0 <= pos < len(text)}
    parts: List[str] = []
    for i, char in enumerate(text):
        if i in marked:
            parts.append(_mark(char))
        else:
            parts.append(escape_html(char))
    return "".join(parts)


def highlight_text(text: str, query: str, is_exact: bool) -> str:
    """
    Подсвечивает запрос во всем тексте (страница документа)

    В точном режиме подсвечивается каждое непересекающееся вхождение запроса.
    В интервальном режиме подсвечивается каждый символ текста, который
    встречается в запросе, независимо от конкретного совпадения.
    Тег <mark> не переходит через перевод строки.
    """
    if not query.strip():
        return escape_html(text)
    if is_exact:
        return _highlight_exact(text, query)
    return _highlight_interval(text, query)


def _highlight_exact(text: str, query: str) -> str:
    lower_text = fold_case(text)
    lower_query = fold_case(query)
    parts: List[str] = []
    last_index = 0

    index = lower_text.find(lower_query)
    while index != -1:
        if index > last_index:
            parts.append(escape_html(text[last_index:index]))
        parts.append(_mark(text[index:index + len(query)]))
        last_index = index + len(query)
        index = lower_text.find(lower_query, last_index)

    if last_index < len(text):
        parts.append(escape_html(text[last_index:]))

    return "".join(parts)


def _highlight_interval(text: str, query: str) -> str:
    query_chars = set(fold_case(query))
    folded = fold_case(text)
    positions = [i for i, char in enumerate(folded) if char in query_chars]
    return highlight_positions(text, positions)
