"""
Django management command to run the configured health checks.

Prints the same JSON body the health endpoint serves and exits with an
error when any check is unhealthy.
"""

import json

from django.core.management.base import BaseCommand, CommandError

from ecg.middleware import HealthCheckService
from ecg.registry import check_registry


class Command(BaseCommand):
    help = 'Run the configured ECG health checks'

    def add_arguments(self, parser):
        parser.add_argument(
            '--check',
            action='append',
            dest='labels',
            help='Only run the check with this label (repeatable)',
        )
        parser.add_argument(
            '--list',
            action='store_true',
            help='List the registered check names and exit',
        )

    def handle(self, *args, **options):
        if options['list']:
            for name in sorted(check_registry.all_registered_names()):
                self.stdout.write(name)
            return

        service = HealthCheckService()
        labels = options['labels']

        if labels:
            unknown = sorted(set(labels) - set(service.runner.labels))
            if unknown:
                raise CommandError(f"Unknown check labels: {', '.join(unknown)}")

        report = service.run(labels)
        self.stdout.write(json.dumps(report.to_dict(), indent=2))

        if not report.is_healthy:
            failed = [result.name for result in report.results if not result.is_healthy]
            raise CommandError(f"Unhealthy checks: {', '.join(failed)}")

        self.stdout.write(self.style.SUCCESS('All health checks passed'))
