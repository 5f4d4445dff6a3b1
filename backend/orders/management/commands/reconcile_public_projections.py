from datetime import date

from django.core.management.base import BaseCommand, CommandError

from orders.services import ProjectionReconciliationService


class Command(BaseCommand):
    help = 'Recreate or refresh public order statuses and capacity entries that drifted from their orders'

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            dest='pickup_date',
            help='Only check orders for this pickup date (YYYY-MM-DD)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report what would be repaired without writing anything',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        pickup_date = None
        if options.get('pickup_date'):
            try:
                pickup_date = date.fromisoformat(options['pickup_date'])
            except ValueError:
                raise CommandError(f"Invalid date '{options['pickup_date']}', expected YYYY-MM-DD")

        if dry_run:
            self.stdout.write(self.style.WARNING('DRY RUN MODE - No changes will be made'))

        report = ProjectionReconciliationService.reconcile(pickup_date=pickup_date, dry_run=dry_run)

        self.stdout.write(f'Orders checked: {report.orders_checked}')
        self.stdout.write(f'  Public statuses created:   {report.statuses_created}')
        self.stdout.write(f'  Public statuses refreshed: {report.statuses_refreshed}')
        self.stdout.write(f'  Capacity entries created:  {report.capacity_entries_created}')
        self.stdout.write(f'  Orphaned entries removed:  {report.orphaned_entries_removed}')

        if report.repairs == 0:
            self.stdout.write(self.style.SUCCESS('Public projections are consistent.'))
        elif dry_run:
            self.stdout.write(self.style.WARNING(f'DRY RUN: {report.repairs} repairs needed.'))
        else:
            self.stdout.write(self.style.SUCCESS(f'Applied {report.repairs} repairs.'))
