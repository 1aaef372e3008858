"""
Management command to run the local HTTP server on the configured port.

Managed hosts import ``config.wsgi`` directly, so this command refuses to bind
a port when MANAGED_HOSTING is enabled.

Usage:
    python manage.py serve
    python manage.py serve --port 8080
"""

from django.conf import settings
from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Run the point-of-sale server locally on PORT (default 3000)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--port",
            type=int,
            default=None,
            help="Port to listen on (overrides the PORT environment variable)",
        )
        parser.add_argument(
            "--host",
            default="0.0.0.0",
            help="Interface to bind",
        )

    def handle(self, *args, **options):
        if settings.MANAGED_HOSTING:
            raise CommandError(
                "MANAGED_HOSTING is enabled; the platform serves config.wsgi.application."
            )

        port = options["port"] or settings.LISTEN_PORT
        addrport = f"{options['host']}:{port}"

        self.stdout.write(self.style.SUCCESS(f"Starting server on {addrport}"))
        call_command("runserver", addrport, use_reloader=settings.DEBUG)
