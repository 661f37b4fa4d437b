class RepositoryError(Exception):
    """Ошибка при выполнении запроса к хранилищу документов"""
