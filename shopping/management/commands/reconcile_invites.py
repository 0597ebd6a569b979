"""
Management command to activate pending shares whose invitee now has an account.

Shares are normally activated when the invitee authenticates. This command
does the same for every existing account at once, e.g. after importing users
or restoring a database.

Usage:
    python manage.py reconcile_invites --dry-run
    python manage.py reconcile_invites --verbose
    python manage.py reconcile_invites --email someone@example.com
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from shopping.constants import VERBOSE_LISTING_LIMIT
from shopping.invites import reconcile_pending_invites
from shopping.models import ListShare, User
from shopping.utils import normalize_email


class Command(BaseCommand):
    help = 'Activate PENDING list shares addressed to emails that now belong to an account'

    def add_arguments(self, parser):
        parser.add_argument(
            '--email',
            help='Only reconcile shares addressed to this email',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be activated without changing anything',
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='Show the shares being activated',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        verbose = options['verbose']

        pending = ListShare.objects.pending().select_related('shopping_list')
        if options['email']:
            email = normalize_email(options['email'])
            if not email:
                raise CommandError('--email must not be empty')
            pending = pending.filter(invitee_email=email)

        users = {
            user.email: user
            for user in User.objects.filter(email__in=pending.values('invitee_email'))
        }
        matched = [share for share in pending if share.invitee_email in users]

        self.stdout.write(
            self.style.WARNING(
                f"{'[DRY RUN] ' if dry_run else ''}Found {len(matched)} pending share(s) "
                f"for {len(users)} existing account(s)"
            )
        )

        if verbose:
            for share in matched[:VERBOSE_LISTING_LIMIT]:
                self.stdout.write(
                    f"  - Share {share.id}: list='{share.shopping_list.name}', "
                    f"invitee={share.invitee_email}"
                )
            if len(matched) > VERBOSE_LISTING_LIMIT:
                self.stdout.write(f"  ... and {len(matched) - VERBOSE_LISTING_LIMIT} more")

        if dry_run:
            self.stdout.write(
                self.style.NOTICE("Run without --dry-run to activate these shares")
            )
            return

        activated = 0
        with transaction.atomic():
            for email, user in users.items():
                activated += reconcile_pending_invites(user.pk, email)

        self.stdout.write(
            self.style.SUCCESS(f"Activated {activated} share(s)")
        )
