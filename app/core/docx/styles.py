"""
Извлечение оформления текстовых фрагментов (w:r) и абзацев (w:p)
"""

import math
from typing import Dict, Optional

from app.core.docx.nodes import find_child, find_descendant, get_attribute
from app.core.models.style import Alignment, ParagraphStyle, RunStyle

# Именованные цвета выделения w:highlight -> CSS
HIGHLIGHT_COLOR_MAP: Dict[str, str] = {
    "yellow": "#FFFF00",
    "green": "#00FF00",
    "cyan": "#00FFFF",
    "magenta": "#FF00FF",
    "blue": "#0000FF",
    "red": "#FF0000",
    "darkBlue": "#00008B",
    "darkCyan": "#008B8B",
    "darkGreen": "#006400",
    "darkMagenta": "#8B008B",
    "darkRed": "#8B0000",
    "darkYellow": "#808000",
    "darkGray": "#A9A9A9",
    "lightGray": "#D3D3D3",
    "black": "#000000",
}

ALIGNMENT_MAP: Dict[str, Alignment] = {
    "left": "left",
    "center": "center",
    "right": "right",
    "both": "justify",
}

AUTO_COLOR = "auto"
FALSE_VALUES = ("0", "false")


def _parse_int(value: Optional[str]) -> Optional[int]:
    """Целое из атрибута; нечисловое значение считается отсутствующим"""
    if not value:
        return None
    try:
        return int(value.strip())
    except ValueError:
        pass
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def _is_on(element) -> bool:
    """Флаг включен, если у элемента нет значения или оно не "0"/"false" """
    value = get_attribute(element, "val")
    return value not in FALSE_VALUES


def extract_run_style(run) -> RunStyle:
    """
    Извлекает оформление текстового фрагмента

    Args:
        run: элемент w:r

    Returns:
        RunStyle: поля, для которых в w:rPr нет элемента, остаются None
    """
    properties = find_child(run, "rPr")
    if properties is None:
        return RunStyle()

    fields = {}

    color_element = find_child(properties, "color")
    if color_element is not None:
        color = get_attribute(color_element, "val")
        if color and color != AUTO_COLOR:
            fields["color"] = f"#{color}"

    highlight_element = find_child(properties, "highlight")
    if highlight_element is not None:
        highlight = get_attribute(highlight_element, "val")
        if highlight:
            fields["highlight"] = HIGHLIGHT_COLOR_MAP.get(highlight, highlight)

    shading_element = find_child(properties, "shd")
    if shading_element is not None:
        fill = get_attribute(shading_element, "fill")
        if fill and fill != AUTO_COLOR:
            fields["background"] = f"#{fill}"

    size_element = find_child(properties, "sz")
    if size_element is not None:
        half_points = _parse_int(get_attribute(size_element, "val"))
        if half_points is not None and half_points > 0:
            fields["font_size"] = half_points / 2

    bold_element = find_child(properties, "b")
    if bold_element is not None:
        fields["bold"] = _is_on(bold_element)

    italic_element = find_child(properties, "i")
    if italic_element is not None:
        fields["italic"] = _is_on(italic_element)

    return RunStyle(**fields)


def extract_paragraph_style(paragraph) -> ParagraphStyle:
    """
    Извлекает оформление абзаца: выравнивание, отступы, принадлежность к списку

    Args:
        paragraph: элемент w:p

    Returns:
        ParagraphStyle: отступы в пунктах, уровень списка с нуля
    """
    properties = find_child(paragraph, "pPr")
    if properties is None:
        return ParagraphStyle()

    fields = {}

    justification = find_child(properties, "jc")
    if justification is not None:
        alignment = ALIGNMENT_MAP.get(get_attribute(justification, "val") or "")
        if alignment:
            fields["alignment"] = alignment

    indentation = find_child(properties, "ind")
    if indentation is not None:
        # Значения в twips (1/20 пункта)
        left = _parse_int(get_attribute(indentation, "left"))
        if left is not None:
            fields["margin_left"] = left / 20
        first_line = _parse_int(get_attribute(indentation, "firstLine"))
        if first_line is not None:
            fields["text_indent"] = first_line / 20

    numbering = find_child(properties, "numPr")
    if numbering is not None:
        fields["is_list"] = True
        level_element = find_descendant(numbering, "ilvl")
        if level_element is not None:
            level = _parse_int(get_attribute(level_element, "val"))
            if level is not None and level >= 0:
                fields["list_level"] = level

    return ParagraphStyle(**fields)
