from typing import Iterable, List

from app.core.logger import logger
from app.core.models.document import Document
from app.core.models.search import MatchInfo, SearchOptions, SearchResult
from app.core.search import highlighter, matcher, ranker


class SearchService:
    """Поиск по набору документов: совпадения, фрагменты, ранжирование"""

    def search(
        self, query: str, documents: Iterable[Document], options: SearchOptions
    ) -> List[SearchResult]:
        """
        Выполняет поиск по всем документам

        Args:
            query: str - поисковый запрос
            documents: Iterable[Document] - документы для поиска
            options: SearchOptions - параметры поиска

        Returns:
            List[SearchResult]: Результаты, отсортированные по плотности совпадения
        """
        if not query.strip():
            return []

        results: List[SearchResult] = []
        for document in documents:
            # Документ еще не сохранен
            if document.id is None:
                continue

            matches = self.find_matches(document.content, query, options)
            for match in matches:
                results.append(
                    SearchResult(
                        document_id=document.id,
                        file_name=document.file_name,
                        content=document.content,
                        match_index=match.index,
                        match_length=match.length,
                        highlighted_snippet=highlighter.generate_snippet(
                            document.content, match, options.preview_range
                        ),
                    )
                )

            if matches:
                logger.debug(
                    f"Документ {document.id}: найдено {len(matches)} совпадений по запросу '{query}'"
                )

        return self.sort_results(results)

    def find_matches(
        self, content: str, query: str, options: SearchOptions
    ) -> List[MatchInfo]:
        return matcher.find_matches(content, query, options)

    def generate_snippet(self, content: str, match: MatchInfo, preview_range: int) -> str:
        return highlighter.generate_snippet(content, match, preview_range)

    def highlight_text(self, text: str, query: str, is_exact: bool) -> str:
        return highlighter.highlight_text(text, query, is_exact)

    def sort_results(self, results: Iterable[SearchResult]) -> List[SearchResult]:
        return ranker.sort_results(results)


# Создаем глобальный экземпляр для переиспользования
search_service = SearchService()
