"""
Django management command to deactivate the stored license.
"""

from django.core.management.base import BaseCommand


class Command(BaseCommand):
    """Command to deactivate the stored license and clear local state."""

    help = "Deactivate the stored license and clear local license state"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--domain",
            default=None,
            help="Domain to deactivate on (defaults to LICENSE_CLIENT['SITE_URL'])",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        from LicenseLifecycleClient.services import build_license_manager

        manager = build_license_manager()
        if not manager.get_stored_license_key():
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("No license stored, nothing to do"))
            return

        manager.deactivate(domain=options["domain"])
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("License deactivated and local state cleared"))
