import pytest
import factory
from factory.django import DjangoModelFactory
from django.contrib.auth import get_user_model

from articles.models import Article, Category

User = get_user_model()

# Фабрики
class UserFactory(DjangoModelFactory):
    class Meta:
        model = User
        django_get_or_create = ('username',)

    username = factory.Sequence(lambda n: f'testuser{n}')
    email = factory.LazyAttribute(lambda obj: f'{obj.username}@example.com')
    password = factory.PostGenerationMethodCall('set_password', 'testpassword123')
    is_active = True

class CategoryFactory(DjangoModelFactory):
    class Meta:
        model = Category

    title = factory.Sequence(lambda n: f'Category {n}')
    description = factory.Faker('sentence')
    parent = None

class ArticleFactory(DjangoModelFactory):
    class Meta:
        model = Article

    title = factory.Sequence(lambda n: f'Test Article {n}')
    category = factory.SubFactory(CategoryFactory)
    short_description = factory.Faker('sentence')
    full_description = factory.Faker('paragraph')
    author = factory.SubFactory(UserFactory)

# Фикстуры
@pytest.fixture
def user():
    """Автор статей"""
    return UserFactory()

@pytest.fixture
def editor():
    """Редактор статей"""
    return UserFactory(username='editor')

@pytest.fixture
def category():
    """Корневая категория"""
    return CategoryFactory(title='Technology')

@pytest.fixture
def article(user, category):
    """Статья в корневой категории"""
    return ArticleFactory(author=user, category=category)

@pytest.fixture
def category_tree():
    """
    Technology
    ├── Hardware
    └── Programming
        └── Python
    """
    root = CategoryFactory(title='Technology')
    programming = CategoryFactory(title='Programming', parent=root)
    hardware = CategoryFactory(title='Hardware', parent=root)
    python = CategoryFactory(title='Python', parent=programming)
    for node in (root, programming, hardware, python):
        node.refresh_from_db()
    return {
        'root': root,
        'programming': programming,
        'hardware': hardware,
        'python': python,
    }

@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Превью сохраняются во временный каталог"""
    settings.MEDIA_ROOT = str(tmp_path / 'media')
    return settings.MEDIA_ROOT

@pytest.fixture(autouse=True)
def enable_db_access_for_all_tests(db):
    """Разрешает доступ к БД для всех тестов"""
    pass

@pytest.fixture(autouse=True)
def setup_logging():
    """Настройка логирования для тестов"""
    import logging
    logging.getLogger('django').setLevel(logging.ERROR)
