from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from articles.models import Article, Category

# (название, описание, подкатегории)
DEFAULT_CATEGORIES = [
    ('Technology', 'Software, hardware and the web', [
        ('Programming', 'Languages, tools and practices', [
            ('Python', 'Everything about Python', []),
            ('JavaScript', 'Browser and server side JavaScript', []),
        ]),
        ('DevOps', 'Deployment, CI and infrastructure', []),
    ]),
    ('Design', 'UI, UX and graphics', []),
    ('Business', 'Startups, management and marketing', []),
]

DEFAULT_ARTICLES = [
    {
        'title': 'Introduction to Django',
        'category': 'Python',
        'short_description': 'Django is a high-level Python web framework.',
        'full_description': 'Django is a high-level Python web framework that encourages rapid development.',
        'fixed': True,
    },
    {
        'title': 'Nested categories with MPTT',
        'category': 'Programming',
        'short_description': 'Storing trees in a relational database.',
        'full_description': 'Modified preorder tree traversal lets us read a whole subtree with one query.',
    },
    {
        'title': 'Design systems 101',
        'category': 'Design',
        'short_description': 'Why every product needs a design system.',
        'full_description': 'A design system is a collection of reusable components guided by clear standards.',
        'status': Article.Status.DRAFT,
    },
]


class Command(BaseCommand):
    help = 'Creates default category tree and sample articles'

    def add_arguments(self, parser):
        parser.add_argument(
            '--author',
            help='Username of the author for sample articles (articles are skipped if omitted)',
        )

    def handle(self, *args, **options):
        categories = {}
        self._create_categories(DEFAULT_CATEGORIES, None, categories)

        username = options.get('author')
        if not username:
            self.stdout.write(self.style.SUCCESS('Default data created successfully!'))
            return

        User = get_user_model()
        try:
            author = User.objects.get(username=username)
        except User.DoesNotExist:
            raise CommandError(f'User "{username}" does not exist')

        for data in DEFAULT_ARTICLES:
            data = dict(data)
            category = categories[data.pop('category')]
            article, created = Article.objects.get_or_create(
                title=data.pop('title'),
                defaults={'category': category, 'author': author, **data},
            )
            if created:
                self.stdout.write(f'Created article: {article.title}')

        self.stdout.write(self.style.SUCCESS('Default data created successfully!'))

    def _create_categories(self, nodes, parent, created):
        for title, description, children in nodes:
            category, is_new = Category.objects.get_or_create(
                title=title,
                parent=parent,
                defaults={'description': description},
            )
            created[title] = category
            if is_new:
                self.stdout.write(f'Created category: {category.get_full_path()}')
            self._create_categories(children, category, created)
