from django.core.management.base import BaseCommand

from articles.models import Category


class Command(BaseCommand):
    help = 'Recalculates nested set fields of the category tree'

    def handle(self, *args, **options):
        Category.objects.rebuild()
        roots = Category.objects.root_nodes().count()
        total = Category.objects.count()
        self.stdout.write(self.style.SUCCESS(
            f'Category tree rebuilt: {total} categories in {roots} tree(s)'
        ))
