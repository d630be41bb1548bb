import pytest
from rest_framework.reverse import reverse
from bank_accounts.models import BankAccount, BankAccountDocument

LIST_URL = "/api/bankAccounts"


def detail_url(account_id):
    return reverse("bank_accounts:bankaccount-detail", kwargs={"id": account_id})


def search_url(query):
    return reverse("bank_accounts:bankaccount-search", kwargs={"query": query})


@pytest.mark.django_db
def test_routes_match_api_paths():
    assert reverse("bank_accounts:bankaccount-list") == "/api/bankAccounts"
    assert detail_url(7) == "/api/bankAccounts/7"
    assert search_url("foo") == "/api/_search/bankAccounts/foo"


@pytest.mark.django_db
def test_requires_authentication(api_client):
    resp = api_client.get(LIST_URL)
    assert resp.status_code == 401


@pytest.mark.django_db
def test_create_bankaccount(auth_client):
    data = {"name": "Savings", "balance": "1500.25", "bank_name": "BNI", "iban": "FR7630006000011234567890189"}
    resp = auth_client.post(LIST_URL, data, format="json")

    assert resp.status_code == 201
    account_id = resp.data["id"]
    assert resp["Location"] == f"/api/bankAccounts/{account_id}"
    assert resp["X-bankAccountsApp-alert"] == "bankAccountsApp.bankAccount.created"
    assert resp["X-bankAccountsApp-params"] == str(account_id)
    assert resp.data["balance"] == "1500.25"
    assert resp.data["masked_account"].startswith("FR76")
    assert "iban" not in resp.data

    account = BankAccount.objects.get(pk=account_id)
    assert account.iban_encrypted == "FR7630006000011234567890189"
    assert BankAccountDocument.objects.filter(pk=account_id).exists()


@pytest.mark.django_db
def test_create_with_existing_id_is_rejected(auth_client):
    data = {"id": 42, "name": "Savings", "balance": "10.00"}
    resp = auth_client.post(LIST_URL, data, format="json")

    assert resp.status_code == 400
    assert resp["Failure"] == "A new bankAccount cannot already have an ID"
    assert resp["X-bankAccountsApp-error"] == "error.idexists"
    assert not resp.content
    assert BankAccount.objects.count() == 0
    assert BankAccountDocument.objects.count() == 0


@pytest.mark.django_db
def test_create_validates_body(auth_client):
    resp = auth_client.post(LIST_URL, {"bank_name": "BNI"}, format="json")
    assert resp.status_code == 400
    assert "name" in resp.data
    assert "balance" in resp.data


@pytest.mark.django_db
def test_create_rejects_invalid_iban(auth_client):
    data = {"name": "Savings", "balance": "10.00", "iban": "not an iban"}
    resp = auth_client.post(LIST_URL, data, format="json")
    assert resp.status_code == 400
    assert "iban" in resp.data


@pytest.mark.django_db
def test_update_without_id_behaves_like_create(auth_client):
    data = {"name": "Checking", "balance": "20.00"}
    resp = auth_client.put(LIST_URL, data, format="json")

    assert resp.status_code == 201
    assert resp["X-bankAccountsApp-alert"] == "bankAccountsApp.bankAccount.created"
    assert resp["Location"] == f"/api/bankAccounts/{resp.data['id']}"
    assert BankAccount.objects.filter(pk=resp.data["id"], name="Checking").exists()
    assert BankAccountDocument.objects.filter(pk=resp.data["id"]).exists()


@pytest.mark.django_db
def test_update_bankaccount(auth_client, make_account, search_repository):
    account = make_account(name="Old", balance="5.00", iban="FR7630006000011234567890189")
    data = {"id": account.id, "name": "New", "balance": "6.50", "currency": "usd"}
    resp = auth_client.put(LIST_URL, data, format="json")

    assert resp.status_code == 200
    assert resp["X-bankAccountsApp-alert"] == "bankAccountsApp.bankAccount.updated"
    assert resp["X-bankAccountsApp-params"] == str(account.id)
    account.refresh_from_db()
    assert account.name == "New"
    assert account.currency == "USD"
    # iban omitted from the body: stored value is kept
    assert account.iban_encrypted == "FR7630006000011234567890189"
    assert [d["name"] for d in search_repository.search("new")] == ["New"]
    assert search_repository.search("old") == []


@pytest.mark.django_db
def test_update_unknown_id_returns_404(auth_client):
    resp = auth_client.put(LIST_URL, {"id": 999, "name": "Ghost", "balance": "1.00"}, format="json")
    assert resp.status_code == 404
    assert BankAccount.objects.count() == 0


@pytest.mark.django_db
def test_list_returns_every_account(auth_client, make_account):
    make_account(name="A")
    make_account(name="B")
    resp = auth_client.get(LIST_URL)

    assert resp.status_code == 200
    assert isinstance(resp.data, list)
    assert [a["name"] for a in resp.data] == ["A", "B"]


@pytest.mark.django_db
def test_list_filters_and_ordering(auth_client, make_account):
    make_account(name="Zeta", currency="EUR")
    make_account(name="Alpha", currency="USD")
    make_account(name="Beta", currency="USD")

    resp = auth_client.get(LIST_URL, {"currency": "USD", "ordering": "-name"})
    assert resp.status_code == 200
    assert [a["name"] for a in resp.data] == ["Beta", "Alpha"]


@pytest.mark.django_db
def test_get_bankaccount(auth_client, make_account):
    account = make_account(name="Main")
    resp = auth_client.get(detail_url(account.id))
    assert resp.status_code == 200
    assert resp.data["id"] == account.id
    assert resp.data["name"] == "Main"


@pytest.mark.django_db
def test_get_missing_returns_404(auth_client):
    resp = auth_client.get(detail_url(12345))
    assert resp.status_code == 404


@pytest.mark.django_db
def test_delete_removes_from_store_and_index(auth_client, make_account):
    account = make_account(name="Doomed")
    keep = make_account(name="Kept")
    assert len(auth_client.get(search_url("doomed")).data) == 1

    resp = auth_client.delete(detail_url(account.id))
    assert resp.status_code == 200
    assert resp["X-bankAccountsApp-alert"] == "bankAccountsApp.bankAccount.deleted"
    assert resp["X-bankAccountsApp-params"] == str(account.id)

    assert auth_client.get(detail_url(account.id)).status_code == 404
    assert auth_client.get(search_url("doomed")).data == []
    assert [d["id"] for d in auth_client.get(search_url("*")).data] == [keep.id]


@pytest.mark.django_db
def test_delete_missing_returns_404(auth_client):
    resp = auth_client.delete(detail_url(12345))
    assert resp.status_code == 404


@pytest.mark.django_db
def test_search_returns_matching_accounts(auth_client, make_account):
    a = make_account(name="Holiday savings", bank_name="BNI")
    b = make_account(name="Daily checking", bank_name="BNI")
    make_account(name="Business", bank_name="BOA")

    resp = auth_client.get(search_url("bni"))
    assert resp.status_code == 200
    assert [d["id"] for d in resp.data] == [a.id, b.id]

    resp = auth_client.get(search_url("savings"))
    assert [d["name"] for d in resp.data] == ["Holiday savings"]


@pytest.mark.django_db
def test_search_never_exposes_iban(auth_client, make_account):
    make_account(name="Secret", iban="FR7630006000011234567890189")
    resp = auth_client.get(search_url("secret"))
    assert len(resp.data) == 1
    assert "iban" not in resp.data[0]
    assert auth_client.get(search_url("FR7630006000011234567890189")).data == []


@pytest.mark.django_db
def test_search_accepts_unbalanced_syntax(auth_client, make_account):
    make_account(name="Open account")
    resp = auth_client.get(search_url('"open'))
    assert resp.status_code == 200
    assert [d["name"] for d in resp.data] == ["Open account"]
