from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.tasks.models import Task

User = get_user_model()


SEED_USERS = [
    {
        'email': 'mohamed@example.com',
        'name': 'Mohamed',
        'password': 'bousni123!',
        'tasks': [
            ('First task', False),
            ('Second task', True),
        ],
    },
    {
        'email': 'othman@example.com',
        'name': 'Othman',
        'password': 'frksni666',
        'tasks': [
            ('Third task', True),
        ],
    },
]


class Command(BaseCommand):
    help = 'Seeds the database with demo users and tasks.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clean',
            action='store_true',
            help='Delete existing users and tasks before seeding',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clean']:
            self.stdout.write('Cleaning existing data...')
            Task.objects.all().delete()
            User.objects.filter(is_superuser=False).delete()

        for entry in SEED_USERS:
            user, created = User.objects.get_or_create(
                email=entry['email'],
                defaults={'name': entry['name']},
            )
            if created:
                user.set_password(entry['password'])
                user.save()
                self.stdout.write(f"  Created user {user.email}")
            else:
                self.stdout.write(f"  User {user.email} already exists")

            for description, completed in entry['tasks']:
                _, task_created = Task.objects.get_or_create(
                    owner_id=user.id,
                    description=description,
                    defaults={'completed': completed},
                )
                if task_created:
                    self.stdout.write(f"    + {description}")

        self.stdout.write(self.style.SUCCESS('Seeding complete.'))
