from django.core.management.base import BaseCommand

from core.seed import seed_demo_data
from core.storage import MemoryStorage


class Command(BaseCommand):
    help = "Builds the prototype demo data set in a fresh store and prints what it contains"

    def add_arguments(self, parser):
        parser.add_argument(
            "--seed",
            type=int,
            default=None,
            help="Random seed, for a reproducible data set",
        )

    def handle(self, *args, **options):
        self.stdout.write("🌱 Seeding data...")

        counts = seed_demo_data(MemoryStorage(), seed=options["seed"])

        for name, count in counts.items():
            self.stdout.write(f"  {name}: {count}")

        self.stdout.write(self.style.SUCCESS("✅ Seeding complete!"))
