from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from articles.models import Article, Category

class TestManagementCommands:
    """Тесты команд управления"""

    def test_create_default_data(self):
        out = StringIO()
        call_command('create_default_data', stdout=out)

        assert Category.objects.count() == 7
        assert Article.objects.count() == 0
        python = Category.objects.get(title='Python')
        assert python.get_full_path() == 'Technology > Programming > Python'
        assert 'Default data created successfully!' in out.getvalue()

    def test_create_default_data_is_idempotent(self):
        call_command('create_default_data', stdout=StringIO())
        call_command('create_default_data', stdout=StringIO())

        assert Category.objects.count() == 7

    def test_create_default_data_with_articles(self, user):
        call_command('create_default_data', author=user.username, stdout=StringIO())
        call_command('create_default_data', author=user.username, stdout=StringIO())

        assert Article.objects.count() == 3
        assert Article.objects.filter(author=user).count() == 3
        assert Article.objects.first().title == 'Introduction to Django'
        assert Article.objects.drafts().count() == 1

    def test_create_default_data_unknown_author(self):
        with pytest.raises(CommandError):
            call_command('create_default_data', author='nobody', stdout=StringIO())

    def test_rebuild_category_tree(self, category_tree):
        Category.objects.filter(pk=category_tree['python'].pk).update(lft=100, rght=101)

        out = StringIO()
        call_command('rebuild_category_tree', stdout=out)

        python = Category.objects.get(pk=category_tree['python'].pk)
        programming = Category.objects.get(pk=category_tree['programming'].pk)
        assert python.is_descendant_of(programming)
        assert 'Category tree rebuilt: 4 categories in 1 tree(s)' in out.getvalue()
