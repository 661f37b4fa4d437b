"""
Вспомогательные функции для построения HTML из текста
"""

HTML_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}

_ESCAPE_TABLE = str.maketrans(HTML_ENTITIES)


def escape_html(text: str) -> str:
    """Экранирует спецсимволы HTML: & < > " '"""
    return text.translate(_ESCAPE_TABLE)


def fold_case(text: str) -> str:
    """
    Приводит текст к нижнему регистру посимвольно, сохраняя длину.

    Символы, у которых нижний регистр длиннее одного символа (например, "İ"),
    остаются как есть, поэтому позиции в результате совпадают с позициями
    в исходном тексте.
    """
    folded = []
    for char in text:
        lower = char.lower()
        folded.append(lower if len(lower) == 1 else char)
    return "".join(folded)


def text_to_html(text: str) -> str:
    """
    Переводит текст в HTML построчно: каждая строка становится отдельным блоком,
    пустые строки заменяются на <br>, чтобы сохранить вертикальный ритм.
    Текст должен быть уже экранирован.
    """
    if not text:
        return ""
    return "".join(
        f'<div class="docx-p">{line or "<br>"}</div>' for line in text.split("\n")
    )
