"""
Сервисный слой статей и категорий
"""
from typing import Optional

import structlog
from django.core.exceptions import FieldDoesNotExist, ValidationError
from django.db import transaction
from mptt.exceptions import InvalidMove

from core.exceptions import TreeIntegrityError
from core.logging_config import log_operation, model_context
from core.policies import enforce, get_relation

from .models import Article, Category

logger = structlog.get_logger(__name__)


class CategoryService:
    """
    Создание, перемещение и удаление категорий
    """

    @staticmethod
    @log_operation("create_category")
    def create_category(
        title: str,
        description: str,
        parent: Optional[Category] = None,
        slug: str = '',
    ) -> Category:
        with transaction.atomic():
            category = Category(
                title=title,
                description=description,
                parent=parent,
                slug=slug,
            )
            category.full_clean()
            category.save()

        logger.info("category_created", **model_context(category), parent_id=category.parent_id)
        return category

    @staticmethod
    @log_operation("move_category")
    def move_category(category: Category, new_parent: Optional[Category]) -> Category:
        """
        Перенос категории под другого родителя (None делает ее корневой)
        """
        with transaction.atomic():
            category.parent = new_parent
            category.clean()
            try:
                category.save()
            except InvalidMove as exc:
                raise TreeIntegrityError(str(exc)) from exc
            category.refresh_from_db()

        logger.info("category_moved", **model_context(category), parent_id=category.parent_id)
        return category

    @staticmethod
    @log_operation("delete_category")
    def delete_category(category: Category) -> int:
        """
        Удаляет категорию вместе с поддеревом.
        Запрещено, пока хотя бы одна статья поддерева ссылается на него.
        Возвращает количество удаленных категорий.
        """
        with transaction.atomic():
            category.refresh_from_db()
            subtree = category.get_descendants(include_self=True)

            enforce(get_relation('articles.Article', 'category'), subtree)
            children = enforce(get_relation('articles.Category', 'parent'), category)
            deleted = subtree.count()

            context = model_context(category)
            category.delete()

        logger.info("category_deleted", **context, children=children, deleted=deleted)
        return deleted


class ArticleService:
    """
    CRUD операции над статьями
    """

    @staticmethod
    @log_operation("create_article")
    def create_article(**fields) -> Article:
        """
        Создание статьи с полной валидацией (длины, расширение превью, уникальность slug)
        """
        with transaction.atomic():
            article = Article(**fields)
            article.full_clean()
            article.save()

        logger.info("article_created", **model_context(article), slug=article.slug)
        return article

    @staticmethod
    def check_editable(fields) -> None:
        """
        Допускаются только редактируемые поля модели, кроме первичного ключа
        """
        errors = {}
        for name in fields:
            if name == 'pk':
                errors[name] = 'Field cannot be changed.'
                continue
            try:
                field = Article._meta.get_field(name)
            except FieldDoesNotExist:
                errors[name] = 'Unknown field.'
                continue
            if field.primary_key or not field.editable or not field.concrete:
                errors[name] = 'Field cannot be changed.'
        if errors:
            raise ValidationError(errors)

    @staticmethod
    @log_operation("update_article")
    def update_article(article: Article, updater=None, **fields) -> Article:
        """
        Обновление статьи, updater запоминается как последний редактор.

        Служебные поля (id, time_create, time_update) не изменяются.
        При ошибке валидации статья остается в прежнем состоянии.
        """
        ArticleService.check_editable(fields)

        changes = dict(fields)
        if updater is not None:
            changes['updater'] = updater
        previous = {name: getattr(article, name) for name in changes}

        for field, value in changes.items():
            setattr(article, field, value)

        try:
            with transaction.atomic():
                article.full_clean()
                article.save()
        except ValidationError:
            for field, value in previous.items():
                setattr(article, field, value)
            raise

        logger.info(
            "article_updated",
            **model_context(article),
            fields=sorted(fields),
            updater_id=article.updater_id,
        )
        return article

    @staticmethod
    @log_operation("set_article_fixed")
    def set_fixed(article: Article, fixed: bool = True) -> Article:
        article.fixed = fixed
        article.save(update_fields=['fixed', 'time_update'])
        return article

    @staticmethod
    @log_operation("delete_article")
    def delete_article(article: Article) -> None:
        context = model_context(article)
        with transaction.atomic():
            article.delete()
        logger.info("article_deleted", **context)

    @staticmethod
    def list_articles(status: Optional[str] = None, category: Optional[Category] = None):
        """
        Статьи в порядке по умолчанию: закрепленные, затем новые
        """
        queryset = Article.objects.select_related('category', 'author', 'updater')

        if status:
            queryset = queryset.filter(status=status)

        if category is not None:
            queryset = queryset.in_category(category)

        return queryset
