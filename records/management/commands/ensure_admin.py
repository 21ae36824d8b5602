from django.conf import settings
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from records.models import User


class Command(BaseCommand):
    help = "Create or update the administrator account (idempotent). Password is stored hashed."

    def add_arguments(self, parser):
        parser.add_argument('--email', default=None, help='defaults to SJMC_ADMIN_EMAIL')
        parser.add_argument('--password', default=None, help='defaults to SJMC_ADMIN_PASSWORD')

    def handle(self, *args, **opts):
        email = (opts['email'] or settings.SJMC_ADMIN_EMAIL).strip().lower()
        password = opts['password'] or settings.SJMC_ADMIN_PASSWORD
        if not email or not password:
            raise CommandError('admin email and password are required (SJMC_ADMIN_EMAIL / SJMC_ADMIN_PASSWORD)')

        user = User.objects.filter(email__iexact=email).first()
        created = user is None
        if created:
            user = User(username=email, email=email)
        try:
            validate_password(password, user)
        except ValidationError as e:
            raise CommandError('; '.join(e.messages))

        user.set_password(password)
        user.is_staff = True
        user.is_superuser = True
        user.is_active = True
        user.save()
        self.stdout.write(self.style.SUCCESS(f"{'created' if created else 'updated'}: {email}"))
