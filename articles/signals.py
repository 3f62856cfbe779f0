import structlog
from django.db.models.signals import post_delete
from django.dispatch import receiver

from .models import Article

logger = structlog.get_logger(__name__)


@receiver(post_delete, sender=Article)
def cleanup_article_files(sender, instance, **kwargs):
    """
    Удаляет файл превью при удалении статьи
    """
    if instance.thumbnail:
        logger.info("thumbnail_deleted", article_id=instance.pk, path=instance.thumbnail.name)
        instance.thumbnail.delete(save=False)
