"""Tests for client, product, cost and reference data handlers."""

import pytest

from conftest import response_json
from mcp_server_infakt.handlers import clients, costs, products, reference
from mcp_server_infakt.validation import ValidationError

COST_UUID = "0b7c6e2a-1d1f-4c3e-9b8a-2f6d5e4c3b2a"


class TestClients:
    @pytest.mark.asyncio
    async def test_list_by_nip_uses_exact_match_only(self, client, fake_api):
        fake_api.reply(200, {"entities": []})

        await clients.list_clients(client, {"nip": "1234567890"})

        request = fake_api.last_request
        assert request.url.path == "/api/v3/clients.json"
        assert dict(request.url.params) == {"q[nip_eq]": "1234567890"}

    @pytest.mark.asyncio
    async def test_list_with_name_and_email(self, client, fake_api):
        fake_api.reply(200, {"entities": []})

        await clients.list_clients(
            client, {"company_name": "ACME", "email": "biuro@acme.pl", "limit": 25, "offset": 50, "fields": "id,company_name"}
        )

        assert dict(fake_api.last_request.url.params) == {
            "limit": "25",
            "offset": "50",
            "fields": "id,company_name",
            "q[company_name_cont]": "ACME",
            "q[email_eq]": "biuro@acme.pl",
        }

    @pytest.mark.asyncio
    async def test_list_converts_money(self, client, fake_api):
        fake_api.reply(200, {"entities": [{"id": 1, "company_name": "ACME", "amount": 10050}]})

        content = await clients.list_clients(client, {})

        assert response_json(content)["entities"][0] == {"id": 1, "company_name": "ACME", "amount": 100.5}

    @pytest.mark.asyncio
    async def test_get_client_with_integral_float_id(self, client, fake_api):
        fake_api.reply(200, {"id": 42})

        await clients.get_client(client, {"client_id": 42.0})

        assert fake_api.last_request.url.path == "/api/v3/clients/42.json"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("client_id", [0, -3, "42", None])
    async def test_get_client_rejects_bad_ids(self, client, fake_api, client_id):
        with pytest.raises(ValidationError) as exc_info:
            await clients.get_client(client, {"client_id": client_id})
        assert exc_info.value.field == "client_id"
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_create_client(self, client, fake_api):
        fake_api.reply(201, {"id": 7, "company_name": "ACME"})

        await clients.create_client(
            client, {"company_name": "ACME", "business_activity_kind": "company", "city": "Kraków", "phone": None}
        )

        assert fake_api.last_request.method == "POST"
        assert fake_api.last_json() == {
            "client": {"company_name": "ACME", "business_activity_kind": "company", "city": "Kraków"}
        }

    @pytest.mark.asyncio
    async def test_create_client_rejects_unknown_activity_kind(self, client, fake_api):
        with pytest.raises(ValidationError) as exc_info:
            await clients.create_client(client, {"company_name": "ACME", "business_activity_kind": "ngo"})
        assert exc_info.value.field == "business_activity_kind"

    @pytest.mark.asyncio
    async def test_create_client_requires_company_name(self, client, fake_api):
        with pytest.raises(ValidationError) as exc_info:
            await clients.create_client(client, {"city": "Kraków"})
        assert exc_info.value.field == "company_name"

    @pytest.mark.asyncio
    async def test_update_client_strips_id_from_body(self, client, fake_api):
        fake_api.reply(200, {"id": 7})

        await clients.update_client(client, {"client_id": 7, "email": "new@acme.pl"})

        assert fake_api.last_request.method == "PUT"
        assert fake_api.last_request.url.path == "/api/v3/clients/7.json"
        assert fake_api.last_json() == {"client": {"email": "new@acme.pl"}}

    @pytest.mark.asyncio
    async def test_delete_client(self, client, fake_api):
        fake_api.reply(204, None)

        content = await clients.delete_client(client, {"client_id": 7})

        assert fake_api.last_request.method == "DELETE"
        assert content[0].text == "Client 7 deleted successfully"


class TestProducts:
    @pytest.mark.asyncio
    async def test_list_by_name_is_contains(self, client, fake_api):
        fake_api.reply(200, {"entities": [{"name": "Hosting", "unit_net_price": 5000}]})

        content = await products.list_products(client, {"name": "Host"})

        assert dict(fake_api.last_request.url.params) == {"q[name_cont]": "Host"}
        assert response_json(content)["entities"][0]["unit_net_price"] == 5000

    @pytest.mark.asyncio
    async def test_create_product(self, client, fake_api):
        fake_api.reply(201, {"id": 3})

        await products.create_product(client, {"name": "Hosting", "unit_net_price": 5000, "tax_symbol": "zw"})

        assert fake_api.last_json() == {"product": {"name": "Hosting", "unit_net_price": 5000, "tax_symbol": "zw"}}

    @pytest.mark.asyncio
    async def test_create_product_requires_tax_symbol(self, client, fake_api):
        with pytest.raises(ValidationError) as exc_info:
            await products.create_product(client, {"name": "Hosting", "unit_net_price": 5000})
        assert exc_info.value.field == "tax_symbol"

    @pytest.mark.asyncio
    async def test_create_product_requires_positive_price(self, client, fake_api):
        with pytest.raises(ValidationError) as exc_info:
            await products.create_product(client, {"name": "Hosting", "unit_net_price": 0, "tax_symbol": 23})
        assert exc_info.value.field == "unit_net_price"

    @pytest.mark.asyncio
    async def test_update_product(self, client, fake_api):
        fake_api.reply(200, {"id": 3, "unit_net_price": 6000})

        content = await products.update_product(client, {"product_id": 3, "unit_net_price": 6000})

        assert fake_api.last_request.url.path == "/api/v3/products/3.json"
        assert fake_api.last_json() == {"product": {"unit_net_price": 6000}}
        assert response_json(content) == {"id": 3, "unit_net_price": 6000}

    @pytest.mark.asyncio
    async def test_delete_product(self, client, fake_api):
        fake_api.reply(204, None)

        content = await products.delete_product(client, {"product_id": 3})

        assert fake_api.last_request.url.path == "/api/v3/products/3.json"
        assert content[0].text == "Product 3 deleted successfully"


class TestCosts:
    @pytest.mark.asyncio
    async def test_list_costs(self, client, fake_api):
        fake_api.reply(200, {"entities": [{"uuid": COST_UUID, "net_price": 1000}]})

        content = await costs.list_costs(client, {"offset": 10, "limit": 5})

        assert fake_api.last_request.url.path == "/api/v3/documents/costs.json"
        assert dict(fake_api.last_request.url.params) == {"offset": "10", "limit": "5"}
        assert response_json(content)["entities"][0]["net_price"] == 1000

    @pytest.mark.asyncio
    async def test_get_cost(self, client, fake_api):
        fake_api.reply(200, {"uuid": COST_UUID})

        await costs.get_cost(client, {"cost_uuid": COST_UUID})

        assert fake_api.last_request.url.path == f"/api/v3/documents/costs/{COST_UUID}.json"

    @pytest.mark.asyncio
    async def test_get_cost_rejects_bad_uuid(self, client, fake_api):
        with pytest.raises(ValidationError):
            await costs.get_cost(client, {"cost_uuid": "123"})


class TestReference:
    @pytest.mark.asyncio
    async def test_vat_rates(self, client, fake_api):
        fake_api.reply(200, {"entities": [{"symbol": "23", "name": "23%", "value": 23}]})

        content = await reference.get_vat_rates(client, {})

        assert fake_api.last_request.url.path == "/api/v3/vat_rates.json"
        assert response_json(content)["entities"][0]["value"] == 0.23

    @pytest.mark.asyncio
    async def test_bank_accounts(self, client, fake_api):
        fake_api.reply(200, {"entities": [{"id": 1, "account_number": "PL61109010140000071219812874"}]})

        content = await reference.get_bank_accounts(client, {})

        assert fake_api.last_request.url.path == "/api/v3/bank_accounts.json"
        assert response_json(content)["entities"][0]["id"] == 1

    @pytest.mark.asyncio
    async def test_account_info(self, client, fake_api):
        fake_api.reply(200, {"company_name": "ACME", "limits": {"invoices": {"total": 100}}})

        content = await reference.get_account_info(client, {})

        assert fake_api.last_request.url.path == "/api/v3/account.json"
        assert response_json(content)["limits"]["invoices"]["total"] == 1.0
