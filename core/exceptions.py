"""
Исключения прикладного уровня
"""


class BlogException(Exception):
    """
    Базовое исключение блога
    """
    code = 'blog_error'
    detail = 'Blog error'

    def __init__(self, detail: str = None, code: str = None):
        if detail is not None:
            self.detail = detail
        if code is not None:
            self.code = code
        super().__init__(self.detail)

    def as_dict(self) -> dict:
        return {'detail': self.detail, 'code': self.code}


class DeletionProtected(BlogException):
    """
    Удаление запрещено, пока существуют зависимые записи
    """
    code = 'deletion_protected'

    def __init__(self, model: str, relation: str, count: int):
        self.model = model
        self.relation = relation
        self.count = count
        super().__init__(
            f"Cannot delete {model}: referenced by {count} row(s) through {relation}"
        )


class TreeIntegrityError(BlogException):
    """
    Нарушение структуры дерева категорий
    """
    code = 'tree_integrity'
    detail = 'Category tree is inconsistent'
