"""
Классификация узлов XML-дерева DOCX.

Имена тегов и атрибутов допускаются как с пространством имен
WordprocessingML (w:p), так и без него (p): оба варианта считаются одним узлом.
"""

from enum import Enum
from typing import Iterator, Optional

WORD_NAMESPACE = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

# Контейнеры, содержимое которых обрабатывается так, будто их нет
TRANSPARENT_CONTAINERS = {"sdt", "sdtcontent", "txbxcontent"}


class NodeKind(str, Enum):
    PARAGRAPH = "paragraph"
    TABLE = "table"
    CONTAINER = "container"
    PROPERTY = "property"
    UNKNOWN = "unknown"


def local_name(node) -> str:
    """Локальное имя тега в нижнем регистре, без пространства имен и префикса"""
    tag = node.tag
    if not isinstance(tag, str):
        # Комментарии и инструкции обработки
        return ""
    return _strip_namespace(tag).lower()


def _strip_namespace(name: str) -> str:
    """{namespace}val -> val, w:val -> val"""
    if name.startswith("{"):
        name = name.split("}", 1)[1]
    if ":" in name:
        name = name.split(":", 1)[1]
    return name


def classify_node(node) -> NodeKind:
    """Определяет тип узла по нормализованному имени тега"""
    name = local_name(node)
    if name == "p":
        return NodeKind.PARAGRAPH
    if name == "tbl":
        return NodeKind.TABLE
    if name in TRANSPARENT_CONTAINERS:
        return NodeKind.CONTAINER
    if name.endswith("pr"):
        return NodeKind.PROPERTY
    return NodeKind.UNKNOWN


def iter_elements(node) -> Iterator:
    """Дочерние элементы узла без комментариев и инструкций обработки"""
    for child in node:
        if isinstance(child.tag, str):
            yield child


def find_child(node, name: str):
    """Первый прямой потомок с указанным локальным именем"""
    name = name.lower()
    for child in iter_elements(node):
        if local_name(child) == name:
            return child
    return None


def find_descendant(node, name: str):
    """Первый потомок (в порядке документа) с указанным локальным именем"""
    name = name.lower()
    for child in node.iter():
        if child is not node and isinstance(child.tag, str) and local_name(child) == name:
            return child
    return None


def iter_descendants(node, name: str) -> Iterator:
    """Все потомки с указанным локальным именем в порядке документа"""
    name = name.lower()
    for child in node.iter():
        if child is not node and isinstance(child.tag, str) and local_name(child) == name:
            yield child


def get_attribute(node, name: str) -> Optional[str]:
    """
    Значение атрибута без учета пространства имен: w:val, val
    и {namespace}val считаются одним атрибутом
    """
    value = node.get(f"{{{WORD_NAMESPACE}}}{name}")
    if value is not None:
        return value
    for key, value in node.attrib.items():
        if _strip_namespace(key) == name:
            return value
    return None
