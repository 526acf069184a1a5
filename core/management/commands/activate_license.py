"""
Django management command to activate a license on this installation.
"""

from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import ApiException


class Command(BaseCommand):
    """Command to activate a license key."""

    help = "Activate a license key and store it locally"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("license_key", help="License key to activate")
        parser.add_argument(
            "--domain",
            default=None,
            help="Domain to activate on (defaults to LICENSE_CLIENT['SITE_URL'])",
        )
        parser.add_argument(
            "--site-name",
            default=None,
            help="Site name sent with the activation",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        from LicenseLifecycleClient.services import build_license_manager

        manager = build_license_manager()
        try:
            record = manager.activate(
                options["license_key"],
                domain=options["domain"],
                site_name=options["site_name"],
            )
        except ApiException as e:
            raise CommandError(f"Activation failed [{e.kind}]: {e.message}") from e

        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(f"License activated (status={record.status})")
        )
        if record.expires_at:
            self.stdout.write(f"  Expires at: {record.expires_at}")
        if record.tier_code:
            self.stdout.write(f"  Tier: {record.tier_code}")
