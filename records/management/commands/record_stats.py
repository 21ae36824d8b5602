from django.core.management.base import BaseCommand

from records.services.stats import get_stats

COLUMNS = ('total', 'weekly', 'active', 'expired')


class Command(BaseCommand):
    help = "Print total / weekly / active / expired counts per record kind"

    def handle(self, *args, **options):
        stats = get_stats()
        self.stdout.write(f"{'kind':<10}" + ''.join(f"{c:>9}" for c in COLUMNS))
        for kind, counts in stats.items():
            self.stdout.write(f"{kind:<10}" + ''.join(f"{counts[c]:>9}" for c in COLUMNS))
