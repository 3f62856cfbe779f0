"""
Именованные политики удаления для связей между моделями.

Каждая связь объявлена в RELATIONS вместе со своей политикой. Сервисы
применяют политику явно внутри транзакции, а проверка core.checks
следит за тем, чтобы on_delete полей совпадал с реестром.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import structlog
from django.apps import apps
from django.db import models
from django.utils import timezone

from .exceptions import DeletionProtected

logger = structlog.get_logger(__name__)


class DeletePolicy(str, Enum):
    PROTECT = 'protect'
    CASCADE = 'cascade'
    SET_NULL = 'set_null'

    @property
    def on_delete(self):
        """Соответствующий обработчик ORM"""
        return {
            DeletePolicy.PROTECT: models.PROTECT,
            DeletePolicy.CASCADE: models.CASCADE,
            DeletePolicy.SET_NULL: models.SET_NULL,
        }[self]


@dataclass(frozen=True)
class Relation:
    """Связь model.field -> целевая модель с политикой удаления"""
    model: str
    field: str
    policy: DeletePolicy

    def __str__(self):
        return f"{self.model}.{self.field}"

    def get_model(self):
        return apps.get_model(self.model)

    def get_field(self):
        return self.get_model()._meta.get_field(self.field)

    @property
    def target(self):
        return self.get_field().related_model

    def dependents(self, instances) -> models.QuerySet:
        """
        Записи, ссылающиеся через эту связь на любой из instances
        (экземпляр, список или queryset)
        """
        if isinstance(instances, models.Model):
            instances = [instances]
        lookup = f"{self.field}__in"
        return self.get_model()._default_manager.filter(**{lookup: instances})

    def touched(self, values: dict) -> dict:
        """
        Значения для QuerySet.update вместе с полями auto_now,
        которые update() сам не обновляет
        """
        now = timezone.now()
        for field in self.get_model()._meta.concrete_fields:
            if getattr(field, 'auto_now', False):
                values.setdefault(field.name, now)
        return values


RELATIONS = (
    Relation('articles.Category', 'parent', DeletePolicy.CASCADE),
    Relation('articles.Article', 'category', DeletePolicy.PROTECT),
    Relation('articles.Article', 'author', DeletePolicy.PROTECT),
    Relation('articles.Article', 'updater', DeletePolicy.SET_NULL),
)


def get_relation(model: str, field: str) -> Relation:
    for relation in RELATIONS:
        if relation.model == model and relation.field == field:
            return relation
    raise LookupError(f"No delete policy declared for {model}.{field}")


def relations_to(model) -> List[Relation]:
    """Все объявленные связи, которые указывают на model"""
    return [relation for relation in RELATIONS if relation.target is model]


def enforce(relation: Relation, instances, replacement: Optional[models.Model] = None) -> int:
    """
    Применяет политику связи перед удалением instances.

    PROTECT: поднимает DeletionProtected, если есть зависимые записи;
    при переданном replacement зависимые записи переназначаются на него.
    SET_NULL: обнуляет ссылку у зависимых записей.
    Переназначение и обнуление обновляют поля auto_now (time_update).
    CASCADE: зависимые записи удаляются вместе с удаляемой строкой,
    функция только возвращает их количество.

    Возвращает количество затронутых зависимых записей.
    """
    dependents = relation.dependents(instances)

    if relation.policy is DeletePolicy.PROTECT:
        if replacement is not None:
            count = dependents.update(**relation.touched({relation.field: replacement}))
            logger.info(
                "dependents_reassigned",
                relation=str(relation),
                count=count,
                replacement_pk=replacement.pk,
            )
            return count
        count = dependents.count()
        if count:
            logger.warning("deletion_protected", relation=str(relation), count=count)
            raise DeletionProtected(
                model=relation.target._meta.label,
                relation=str(relation),
                count=count,
            )
        return 0

    if relation.policy is DeletePolicy.SET_NULL:
        count = dependents.update(**relation.touched({relation.field: None}))
        if count:
            logger.info("references_cleared", relation=str(relation), count=count)
        return count

    return dependents.count()
