from typing import Iterable, List

from app.core.models.search import SearchResult


def sort_results(results: Iterable[SearchResult]) -> List[SearchResult]:
    """Сортирует результаты по плотности совпадения: короткий отрезок выше"""
    return sorted(results, key=lambda result: result.match_length)
