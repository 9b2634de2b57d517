from datetime import date

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from inventory.models import InventoryItem, StockSnapshot
import logging

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Record one stock snapshot per inventory item for the given day (default: today)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            dest='snapshot_date',
            help='Snapshot day as YYYY-MM-DD (defaults to today in TIME_ZONE)',
        )

    def handle(self, *args, **options):
        snapshot_date = self._parse_date(options.get('snapshot_date'))
        self.stdout.write(self.style.WARNING(f'Recording stock snapshots for {snapshot_date}...'))

        created = 0
        skipped = 0
        with transaction.atomic():
            for item_id, quantity in InventoryItem.objects.values_list('id', 'quantity'):
                # Rows written first (earlier run or a concurrent one) are kept as they are
                _, was_created = StockSnapshot.objects.get_or_create(
                    item_id=item_id,
                    snapshot_date=snapshot_date,
                    defaults={'quantity': quantity},
                )
                if was_created:
                    created += 1
                else:
                    skipped += 1

        logger.info(f"Stock snapshots for {snapshot_date}: {created} created, {skipped} already recorded")

        self.stdout.write(f"Snapshots created: {created}")
        self.stdout.write(f"Already recorded: {skipped}")
        self.stdout.write(self.style.SUCCESS('✅ Done!'))

    def _parse_date(self, value):
        if not value:
            return timezone.localdate()
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise CommandError(f"Invalid --date '{value}', expected YYYY-MM-DD")
