"""
Сервис пользователей
"""
from typing import Optional

import structlog
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from core.logging_config import log_operation
from core.policies import enforce, get_relation

logger = structlog.get_logger(__name__)

User = get_user_model()


class UserService:

    @staticmethod
    def get_fallback_author(user) -> Optional[User]:
        """
        Пользователь из BLOG_DEFAULT_AUTHOR_ID, если он задан, существует
        и не совпадает с удаляемым
        """
        default_id = getattr(settings, 'BLOG_DEFAULT_AUTHOR_ID', None)
        if default_id is None or default_id == user.pk:
            return None
        return User.objects.filter(pk=default_id).first()

    @staticmethod
    @log_operation("delete_user")
    def delete_user(user) -> None:
        """
        Удаление пользователя с явным применением политик:
        авторство защищено (или передается автору по умолчанию),
        ссылка на редактора обнуляется
        """
        with transaction.atomic():
            fallback = UserService.get_fallback_author(user)
            enforce(get_relation('articles.Article', 'author'), user, replacement=fallback)
            enforce(get_relation('articles.Article', 'updater'), user)

            user_id = user.pk
            user.delete()

        logger.info(
            "user_deleted",
            user_id=user_id,
            fallback_author_id=fallback.pk if fallback else None,
        )
