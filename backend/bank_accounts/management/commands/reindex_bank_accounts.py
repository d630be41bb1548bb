# bank_accounts/management/commands/reindex_bank_accounts.py
import logging

from django.core.management.base import BaseCommand, CommandError

from bank_accounts.models import BankAccount
from bank_accounts.search import BankAccountSearchRepository

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Rebuild the BankAccount search index from the database."

    def add_arguments(self, parser):
        parser.add_argument("--batch-size", type=int, default=500, help="Accounts indexed per batch")
        parser.add_argument("--clear", action="store_true", help="Empty the index first (drops stale documents)")

    def handle(self, *args, **options):
        batch_size = options["batch_size"]
        if batch_size <= 0:
            raise CommandError("--batch-size must be a positive integer")

        repository = BankAccountSearchRepository()
        if options["clear"]:
            removed = repository.delete_all()
            self.stdout.write(f"Cleared {removed} documents from the search index")

        qs = BankAccount.objects.all().order_by("id")
        total = qs.count()
        self.stdout.write(f"Found {total} BankAccount rows to index")

        indexed = 0
        for start in range(0, total, batch_size):
            batch = list(qs[start:start + batch_size])
            indexed += repository.save_all(batch)
            logger.info("Reindexed %d/%d bank accounts", indexed, total)

        self.stdout.write(f"Reindex done: indexed={indexed} index_size={repository.count()}")
