"""
Management command to create sample data for trying the API.

Usage:
    python manage.py create_sample_data [--clear]

This creates:
- 4 users (reviewer, seller, alice, bob)
- 6 approved cheat sheets (one free) and 1 awaiting moderation
- Bundle discount tiers for 3+ and 5+ items
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from decimal import Decimal

from apps.accounts.models import User
from apps.cart.models import CartEntry
from apps.catalog.models import ApprovalStatus, BundleDiscount, CatalogItem


SAMPLE_ITEMS = [
    ('MAS116', 'Calculus I Midterm Summary', 8900),
    ('MAS117', 'Calculus II Final Formula Sheet', 9900),
    ('SCS138', 'Applied Physics Final', 12000),
    ('CSS112', 'Data Structures Cheat Sheet', 15000),
    ('ECS203', 'Circuit Analysis Quick Reference', 7500),
    ('GTS101', 'Exam Week Study Tips', 0),
]


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear carts, catalog items and discounts before creating sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        self.create_items(users['seller'])
        self.create_discounts()

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  reviewer@example.com / reviewer123 (payment reviewer)')
        self.stdout.write('  seller@example.com / password123 (seller)')
        self.stdout.write('  alice@example.com / password123')
        self.stdout.write('  bob@example.com / password123')

    def clear_data(self):
        """Orders and purchases are never deleted, so only items without sales go."""
        CartEntry.objects.all().delete()
        CatalogItem.objects.filter(order_items__isnull=True).delete()
        BundleDiscount.objects.all().delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        specs = {
            'reviewer': dict(email='reviewer@example.com', password='reviewer123',
                             display_name='Payment Reviewer', is_staff=True),
            'seller': dict(email='seller@example.com', password='password123',
                           display_name='Top Seller', is_seller=True),
            'alice': dict(email='alice@example.com', password='password123',
                          display_name='Alice'),
            'bob': dict(email='bob@example.com', password='password123',
                        display_name='Bob'),
        }

        users = {}
        for key, spec in specs.items():
            password = spec.pop('password')
            user, created = User.objects.get_or_create(
                email=spec['email'],
                defaults={**spec, 'email_verified': True},
            )
            if created:
                user.set_password(password)
                user.save(update_fields=['password'])
            users[key] = user
        return users

    def create_items(self, seller):
        self.stdout.write('  Creating cheat sheets...')

        for course_code, title, price_minor in SAMPLE_ITEMS:
            CatalogItem.objects.get_or_create(
                course_code=course_code,
                title=title,
                defaults={
                    'price_minor': price_minor,
                    'created_by': seller,
                    'approval_status': ApprovalStatus.APPROVED,
                    'description': f'Condensed notes for {course_code}.',
                },
            )

        CatalogItem.objects.get_or_create(
            course_code='MAS210',
            title='Linear Algebra Draft',
            defaults={'price_minor': 5000, 'created_by': seller},
        )

    def create_discounts(self):
        self.stdout.write('  Creating bundle discount tiers...')

        for min_items, percentage in [(3, Decimal('15')), (5, Decimal('20'))]:
            BundleDiscount.objects.get_or_create(
                min_items=min_items,
                defaults={'discount_percentage': percentage},
            )
