from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import FileExtensionValidator, MaxLengthValidator
from django.db import models
from django.utils.text import slugify
from django.utils.translation import gettext_lazy as _
from mptt.models import MPTTModel, TreeForeignKey

THUMBNAIL_EXTENSIONS = ('png', 'jpg', 'webp', 'jpeg', 'gif')


def get_default_author_id():
    """
    Автор по умолчанию из настроек (None, если не задан)
    """
    return getattr(settings, 'BLOG_DEFAULT_AUTHOR_ID', None)


class Category(MPTTModel):
    """
    Модель категорий с вложенностью
    """
    title = models.CharField(_('title'), max_length=255)
    slug = models.SlugField(_('slug'), max_length=255, blank=True, allow_unicode=True)
    description = models.TextField(
        _('description'),
        max_length=300,
        validators=[MaxLengthValidator(300)]
    )
    parent = TreeForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        db_index=True,
        related_name='children',
        verbose_name=_('parent category')
    )

    class MPTTMeta:
        """
        Сортировка по вложенности
        """
        order_insertion_by = ('title',)

    class Meta:
        verbose_name = _('category')
        verbose_name_plural = _('categories')
        db_table = 'app_categories'

    def __str__(self):
        return self.title

    def clean(self):
        """
        Категория не может быть родителем самой себя или своего потомка
        """
        if self.parent_id is None:
            return

        if self.pk is not None and self.parent_id == self.pk:
            raise ValidationError({'parent': _('Category cannot be parent of itself.')})

        if self.pk is not None:
            # Берем границы узла из БД, значения в памяти могут устареть
            stored = type(self)._tree_manager.filter(pk=self.pk).first()
            if stored and stored.get_descendants().filter(pk=self.parent_id).exists():
                raise ValidationError({'parent': _('Circular dependency detected.')})

    def save(self, *args, **kwargs):
        """
        Проверка дерева и генерация slug перед сохранением
        """
        self.clean()

        if not self.slug:
            self.slug = slugify(self.title, allow_unicode=True)

        super().save(*args, **kwargs)

    def get_full_path(self, separator: str = ' > ') -> str:
        """
        Полный путь категории от корня
        """
        return separator.join(
            node.title for node in self.get_ancestors(include_self=True)
        )

    def get_articles(self, include_descendants: bool = True) -> models.QuerySet:
        """
        Статьи категории (по умолчанию вместе с подкатегориями)
        """
        return Article.objects.in_category(self, include_descendants=include_descendants)


class ArticleQuerySet(models.QuerySet):

    def published(self):
        return self.filter(status=Article.Status.PUBLISHED)

    def drafts(self):
        return self.filter(status=Article.Status.DRAFT)

    def pinned(self):
        return self.filter(fixed=True)

    def in_category(self, category, include_descendants: bool = True):
        if not include_descendants:
            return self.filter(category=category)
        return self.filter(category__in=category.get_descendants(include_self=True))


class Article(models.Model):
    """
    Модель постов для сайта
    """

    class Status(models.TextChoices):
        PUBLISHED = 'published', _('Published')
        DRAFT = 'draft', _('Draft')

    title = models.CharField(_('title'), max_length=255)
    slug = models.SlugField(_('slug'), max_length=255, blank=True, unique=True, allow_unicode=True)
    category = TreeForeignKey(
        'Category',
        on_delete=models.PROTECT,
        related_name='articles',
        verbose_name=_('category')
    )
    short_description = models.TextField(
        _('short description'),
        max_length=500,
        validators=[MaxLengthValidator(500)]
    )
    full_description = models.TextField(_('full description'))
    thumbnail = models.ImageField(
        _('thumbnail'),
        blank=True,
        upload_to='images/thumbnails/%Y/%m/%d/',
        validators=[FileExtensionValidator(allowed_extensions=THUMBNAIL_EXTENSIONS)]
    )
    status = models.CharField(
        _('status'),
        choices=Status.choices,
        default=Status.PUBLISHED,
        max_length=10
    )
    time_create = models.DateTimeField(_('time created'), auto_now_add=True)
    time_update = models.DateTimeField(_('time updated'), auto_now=True)
    author = models.ForeignKey(
        to=settings.AUTH_USER_MODEL,
        verbose_name=_('author'),
        on_delete=models.PROTECT,
        related_name='author_posts',
        default=get_default_author_id
    )
    updater = models.ForeignKey(
        to=settings.AUTH_USER_MODEL,
        verbose_name=_('updated by'),
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='updater_posts'
    )
    fixed = models.BooleanField(_('fixed'), default=False)

    objects = ArticleQuerySet.as_manager()

    class Meta:
        db_table = 'app_articles'
        ordering = ['-fixed', '-time_create']
        indexes = [
            models.Index(
                fields=['-fixed', '-time_create', 'status'],
                name='app_article_fixed_created_idx'
            ),
        ]
        verbose_name = _('article')
        verbose_name_plural = _('articles')

    def __str__(self):
        return self.title

    def clean(self):
        """
        Пустой slug генерируется из заголовка
        """
        super().clean()
        if not self.slug:
            self.slug = self.generate_slug()

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = self.generate_slug()
        super().save(*args, **kwargs)

    def generate_slug(self) -> str:
        """
        Уникальный slug из заголовка, при совпадении добавляется счетчик
        """
        max_length = self._meta.get_field('slug').max_length
        base_slug = slugify(self.title, allow_unicode=True)[:max_length] or 'article'
        slug = base_slug
        counter = 1

        while Article.objects.filter(slug=slug).exclude(pk=self.pk).exists():
            suffix = f"-{counter}"
            slug = f"{base_slug[:max_length - len(suffix)]}{suffix}"
            counter += 1

        return slug

    @property
    def is_published(self) -> bool:
        return self.status == self.Status.PUBLISHED
