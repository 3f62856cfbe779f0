# articles/apps.py
from django.apps import AppConfig

class ArticlesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'articles'
    verbose_name = 'Articles'

    def ready(self):
        # Подключаем сигналы
        import articles.signals  # noqa: F401
