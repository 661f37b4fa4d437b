from dataclasses import dataclass
from typing import Literal, Optional

Alignment = Literal["left", "center", "right", "justify"]


@dataclass(frozen=True)
class RunStyle:
    """Оформление текстового фрагмента (w:r)"""

    color: Optional[str] = None  # w:color
    highlight: Optional[str] = None  # w:highlight
    background: Optional[str] = None  # w:shd
    font_size: Optional[float] = None  # w:sz, в пунктах
    bold: Optional[bool] = None  # w:b
    italic: Optional[bool] = None  # w:i


@dataclass(frozen=True)
class ParagraphStyle:
    """Оформление абзаца (w:p)"""

    alignment: Optional[Alignment] = None  # w:jc
    margin_left: Optional[float] = None  # w:ind left, в пунктах
    text_indent: Optional[float] = None  # w:ind firstLine, в пунктах
    is_list: Optional[bool] = None  # w:numPr
    list_level: Optional[int] = None  # w:ilvl
