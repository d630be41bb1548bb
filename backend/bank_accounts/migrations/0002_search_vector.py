import django.contrib.postgres.indexes
import django.contrib.postgres.search
from django.db import migrations


class Migration(migrations.Migration):

    dependencies = [
        ("bank_accounts", "0001_initial"),
    ]

    operations = [
        migrations.RemoveField(
            model_name="bankaccountdocument",
            name="content",
        ),
        migrations.AddField(
            model_name="bankaccountdocument",
            name="search_vector",
            field=django.contrib.postgres.search.SearchVectorField(editable=False, null=True),
        ),
        migrations.AddIndex(
            model_name="bankaccountdocument",
            index=django.contrib.postgres.indexes.GinIndex(fields=["search_vector"], name="bank_search_vector_idx"),
        ),
    ]
