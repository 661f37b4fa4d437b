"""
Восстановление текста и HTML с оформлением из XML-дерева DOCX.

Текст используется для поиска, HTML для отображения документа.
Переводы строк в обоих представлениях соответствуют друг другу.
"""

from typing import List, NamedTuple

from app.core.docx.nodes import (
    NodeKind,
    classify_node,
    find_descendant,
    iter_descendants,
    iter_elements,
    local_name,
)
from app.core.docx.styles import extract_paragraph_style, extract_run_style
from app.core.models.style import ParagraphStyle, RunStyle
from app.core.utils.html import escape_html

LINE_BREAK_HTML = '<br class="docx-br">'
CELL_STYLE = "border: 1px solid #e2e8f0; padding: 0.5em;"
TABLE_STYLE = "width: 100%; border-collapse: collapse; margin: 1em 0;"
PARAGRAPH_BASE_STYLE = [
    "display: block",
    "min-height: 1.5em",
    "margin-bottom: 0.8em",
    "line-height: 1.6",
    "word-wrap: break-word",
]

# Обертки внутри абзаца, чьи фрагменты входят в текст абзаца
INLINE_WRAPPERS = {"hyperlink", "ins", "smarttag", "fldsimple", "sdt", "sdtcontent"}


class Content(NamedTuple):
    """Параллельные текстовое и HTML представления узла"""

    text: str
    html: str


EMPTY = Content("", "")


class DocxReconstructor:
    """Строит текст и HTML из дерева документа"""

    def extract_content(self, root) -> Content:
        """
        Извлекает содержимое документа

        Args:
            root: корневой элемент document.xml (w:document) или сам w:body

        Returns:
            Content: пустые текст и HTML, если в дереве нет w:body
        """
        if root is None:
            return EMPTY
        body = root if local_name(root) == "body" else find_descendant(root, "body")
        if body is None:
            return EMPTY
        return self.traverse(body)

    def traverse(self, node) -> Content:
        """Рекурсивно обходит абзацы, таблицы и вложенные контейнеры"""
        text_parts: List[str] = []
        html_parts: List[str] = []

        for child in iter_elements(node):
            kind = classify_node(child)

            if kind == NodeKind.PARAGRAPH:
                content = self.parse_paragraph(child)
            elif kind == NodeKind.TABLE:
                content = self.parse_table(child)
            elif kind == NodeKind.CONTAINER:
                content = self.traverse(child)
            elif kind == NodeKind.UNKNOWN and len(child):
                content = self.traverse(child)
                if not content.text and not content.html:
                    continue
            else:
                continue

            text_parts.append(content.text)
            html_parts.append(content.html)

        return Content("\n".join(text_parts), "\n".join(html_parts))

    def parse_paragraph(self, paragraph) -> Content:
        """Собирает фрагменты абзаца по порядку и оборачивает их в блок"""
        text_parts: List[str] = []
        html_parts: List[str] = []
        self._collect_inline(paragraph, text_parts, html_parts)

        paragraph_html = self.wrap_paragraph_with_style(
            "".join(html_parts), extract_paragraph_style(paragraph)
        )
        return Content("".join(text_parts) + "\n", paragraph_html)

    def _collect_inline(self, node, text_parts: List[str], html_parts: List[str]) -> None:
        for child in iter_elements(node):
            name = local_name(child)
            if name == "r":
                self._collect_run(child, text_parts, html_parts)
            elif name == "br":
                text_parts.append("\n")
                html_parts.append(LINE_BREAK_HTML)
            elif name in INLINE_WRAPPERS:
                self._collect_inline(child, text_parts, html_parts)

    def _collect_run(self, run, text_parts: List[str], html_parts: List[str]) -> None:
        style = extract_run_style(run)
        for child in iter_elements(run):
            name = local_name(child)
            if name == "t":
                text = child.text or ""
                if text:
                    text_parts.append(text)
                    html_parts.append(self.wrap_text_with_style(text, style))
            elif name == "tab":
                text_parts.append("\t")
                html_parts.append(self.wrap_text_with_style("\t", style))
            elif name in ("br", "cr"):
                text_parts.append("\n")
                html_parts.append(LINE_BREAK_HTML)

    def parse_table(self, table) -> Content:
        """Таблица: ячейки строки через табуляцию, строки через перевод строки"""
        row_texts: List[str] = []
        row_htmls: List[str] = []

        for row in iter_descendants(table, "tr"):
            cell_texts: List[str] = []
            cell_htmls: List[str] = []

            for cell in iter_descendants(row, "tc"):
                paragraph_texts: List[str] = []
                paragraph_htmls: List[str] = []
                for paragraph in iter_descendants(cell, "p"):
                    content = self.parse_paragraph(paragraph)
                    if content.text:
                        paragraph_texts.append(content.text)
                        paragraph_htmls.append(content.html)

                cell_texts.append(" ".join(paragraph_texts))
                cell_htmls.append(
                    f'<td style="{CELL_STYLE}">{"".join(paragraph_htmls)}</td>'
                )

            row_texts.append("\t".join(cell_texts))
            row_htmls.append(f"<tr>{''.join(cell_htmls)}</tr>")

        return Content(
            "\n".join(row_texts),
            f'<table style="{TABLE_STYLE}">{"".join(row_htmls)}</table>',
        )

    def wrap_text_with_style(self, text: str, style: RunStyle) -> str:
        """Экранирует текст и, если есть оформление, оборачивает его в <span>"""
        declarations: List[str] = []

        if style.color:
            declarations.append(f"color: {style.color}")
        if style.highlight:
            declarations.append(f"background-color: {style.highlight}")
        if style.background:
            declarations.append(f"background-color: {style.background}")
        if style.font_size:
            declarations.append(f"font-size: {_format_number(style.font_size)}pt")
        if style.bold:
            declarations.append("font-weight: bold")
        if style.italic:
            declarations.append("font-style: italic")

        escaped_text = escape_html(text)
        if declarations:
            return f'<span style="{"; ".join(declarations)}">{escaped_text}</span>'
        return escaped_text

    def wrap_paragraph_with_style(self, content: str, style: ParagraphStyle) -> str:
        """Оборачивает содержимое абзаца в блок с выравниванием, отступами и маркером списка"""
        declarations = list(PARAGRAPH_BASE_STYLE)

        if style.alignment:
            declarations.append(f"text-align: {style.alignment}")
        if style.margin_left:
            declarations.append(f"margin-left: {_format_number(style.margin_left)}pt")
        if style.text_indent:
            declarations.append(f"text-indent: {_format_number(style.text_indent)}pt")
        if style.is_list:
            declarations.append("display: list-item")
            declarations.append("list-style-type: disc")
            declarations.append("list-style-position: inside")
            # Явный левый отступ уже задан, второй раз не сдвигаем
            if not style.margin_left:
                indent = (style.list_level or 0) * 20 + 20
                declarations.append(f"margin-left: {indent}pt")

        # Пустой абзац сохраняет высоту строки
        inner_content = content or "<br>"
        return (
            f'<div class="docx-p" style="{"; ".join(declarations)}">'
            f"{inner_content}</div>"
        )


def _format_number(value: float) -> str:
    """12.0 -> "12", 10.5 -> "10.5" """
    if float(value).is_integer():
        return str(int(value))
    return str(value)


docx_reconstructor = DocxReconstructor()
