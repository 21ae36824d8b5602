"""
Management command to fill the record tables with sample files.
"""
import random
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from records.kinds import KINDS
from records.models import Gender
from records.services.store import RecordStore

NAMES = [
    'John Doe', 'Jane Smith', 'Amaka Obi', 'Kwame Mensah', 'Maria Garcia',
    'Chen Wei', 'Fatima Bello', 'Peter Okafor', 'Grace Adeyemi', 'Samuel Boateng',
]
REFERRERS = ['Dr. Johnson', 'St. Luke Clinic', 'City General', 'Dr. Afolabi', 'Hope Health Centre']


class Command(BaseCommand):
    help = 'Insert sample personal, family, referral and emergency files'

    def add_arguments(self, parser):
        parser.add_argument('--count', type=int, default=10, help='files per kind')
        parser.add_argument('--seed', type=int, default=None)

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        now = timezone.now()
        for kind in KINDS.values():
            store = RecordStore(kind)
            for i in range(options['count']):
                # spread registrations over ~2 years so some files have expired
                registered = now - timedelta(days=rng.randint(0, 730), hours=rng.randint(0, 23))
                store.create({
                    **self.fields_for(kind.name, rng),
                    'registrationDate': registered.isoformat(),
                })
            self.stdout.write(f"{kind.name}: {options['count']} files")
        self.stdout.write(self.style.SUCCESS('Sample files created'))

    @staticmethod
    def fields_for(kind: str, rng: random.Random) -> dict:
        if kind == 'family':
            return {'headName': rng.choice(NAMES), 'memberCount': rng.randint(2, 9)}
        if kind == 'referral':
            return {'referralName': rng.choice(REFERRERS), 'patientCount': rng.randint(1, 40)}
        return {'name': rng.choice(NAMES), 'age': rng.randint(0, 95), 'gender': rng.choice(Gender.values)}
