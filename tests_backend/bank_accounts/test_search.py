import pytest
from bank_accounts.models import BankAccount, BankAccountDocument


def names(results):
    return [doc["name"] for doc in results]


@pytest.fixture
def accounts(make_account):
    return {
        "holiday": make_account(name="Holiday savings", balance="2500.00", bank_name="Credit Agricole", currency="EUR"),
        "daily": make_account(name="Daily checking", balance="120.50", bank_name="BNI", currency="EUR"),
        "travel": make_account(name="Travel fund", balance="800.00", bank_name="BNI", currency="USD"),
    }


@pytest.mark.django_db
def test_save_stores_serialized_document(make_account, search_repository):
    account = make_account(name="Main", iban="FR7630006000011234567890189")
    document = search_repository.find(account.id)

    assert document["id"] == account.id
    assert document["name"] == "Main"
    assert document["masked_account"] == account.masked_account
    assert "iban" not in document
    entry = BankAccountDocument.objects.get(pk=account.id)
    assert entry.search_vector is not None
    assert "fr7630006000011234567890189" not in entry.search_vector


@pytest.mark.django_db
def test_save_is_an_upsert(make_account, search_repository):
    account = make_account(name="Before")
    account.name = "After"
    account.save()
    search_repository.save(account)

    assert search_repository.count() == 1
    assert search_repository.find(account.id)["name"] == "After"
    assert names(search_repository.search("after")) == ["After"]
    assert search_repository.search("before") == []


@pytest.mark.django_db
def test_save_requires_persisted_account(search_repository):
    with pytest.raises(ValueError):
        search_repository.save(BankAccount(name="Unsaved", balance=1))


@pytest.mark.django_db
def test_delete_is_silent_for_unknown_ids(search_repository):
    search_repository.delete(999)
    assert search_repository.count() == 0


@pytest.mark.django_db
@pytest.mark.parametrize(
    "text, expected",
    [
        ("savings", ["Holiday savings"]),
        ("SAVINGS", ["Holiday savings"]),
        ("bni", ["Daily checking", "Travel fund"]),
        ("bni usd", ["Travel fund"]),
        ("savings or travel", ["Holiday savings", "Travel fund"]),
        ('"holiday savings"', ["Holiday savings"]),
        ('"savings holiday"', []),
        ('"credit agricole"', ["Holiday savings"]),
        ("bni -usd", ["Daily checking"]),
        ("-bni", ["Holiday savings"]),
        ("eur", ["Holiday savings", "Daily checking"]),
        ("usd or gbp", ["Travel fund"]),
        ("120.50", ["Daily checking"]),
        ("*", ["Holiday savings", "Daily checking", "Travel fund"]),
        ("nothing", []),
        ("", []),
        ("   ", []),
    ],
)
def test_search_semantics(accounts, search_repository, text, expected):
    assert names(search_repository.search(text)) == expected


@pytest.mark.django_db
@pytest.mark.parametrize("text", ["ba*", "id*", "na*", "cu*", "balance", "bank_name", "name", "id"])
def test_field_names_are_not_searchable(accounts, search_repository, text):
    assert search_repository.search(text) == []


@pytest.mark.django_db
@pytest.mark.parametrize("text, expected", [("00", []), ("50", []), ("800.00", ["Travel fund"])])
def test_balance_is_one_token(accounts, search_repository, text, expected):
    assert names(search_repository.search(text)) == expected


@pytest.mark.django_db
def test_masked_account_is_searchable(make_account, search_repository):
    make_account(name="Masked", iban="FR7630006000011234567890189")
    make_account(name="Plain")

    assert names(search_repository.search("0189")) == ["Masked"]
    assert search_repository.search("FR7630006000011234567890189") == []


@pytest.mark.django_db
def test_search_reflects_deletion(accounts, search_repository):
    search_repository.delete(accounts["travel"].id)
    assert names(search_repository.search("bni")) == ["Daily checking"]


@pytest.mark.django_db
def test_search_tolerates_unbalanced_syntax(accounts, search_repository):
    assert names(search_repository.search("(bni")) == ["Daily checking", "Travel fund"]
    assert names(search_repository.search('"travel')) == ["Travel fund"]


@pytest.mark.django_db
def test_save_all_and_delete_all(make_account, search_repository):
    first = make_account(name="One", index=False)
    second = make_account(name="Two", index=False)

    assert search_repository.save_all([first, second]) == 2
    assert search_repository.save_all([first]) == 1
    assert search_repository.count() == 2
    assert names(search_repository.search("two")) == ["Two"]
    assert search_repository.delete_all() == 2
    assert search_repository.count() == 0
