"""
Django management command to show the stored license state.
"""

from django.core.management.base import BaseCommand


class Command(BaseCommand):
    """Command to print the last known license state."""

    help = "Show the stored license status, expiry, tier and features"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--validate",
            action="store_true",
            help="Validate against the licensing service (cached) before printing",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        from LicenseLifecycleClient.services import build_license_manager

        manager = build_license_manager()
        record = manager.get_license()
        if record is None:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("No license stored"))
            return

        if options["validate"]:
            if manager.is_valid():
                # pylint: disable=no-member
                self.stdout.write(self.style.SUCCESS("License is valid"))
            else:
                # pylint: disable=no-member
                self.stdout.write(self.style.ERROR("License is not valid"))
            record = manager.get_license() or record

        self.stdout.write(f"Status: {record.status}")
        self.stdout.write(f"Expires at: {record.expires_at or '-'}")
        self.stdout.write(f"Tier: {record.tier_code or '-'}")
        if record.features:
            self.stdout.write("Features:")
            for name, feature in sorted(record.features.items()):
                self.stdout.write(f"  {name}: {feature}")
        else:
            self.stdout.write("Features: -")
