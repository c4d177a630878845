"""Tests for grosze/PLN conversion."""

import copy

import pytest

from mcp_server_infakt.currency import (
    MONETARY_FIELDS,
    convert_all_monetary_fields,
    convert_monetary_fields,
    format_grosze,
    grosze_to_pln,
    pln_to_grosze,
)


class TestScalarConversion:
    def test_grosze_to_pln(self):
        assert grosze_to_pln(12345) == 123.45
        assert grosze_to_pln(100) == 1.0
        assert grosze_to_pln(0) == 0.0

    def test_grosze_to_pln_accepts_numeric_strings(self):
        assert grosze_to_pln("12345") == 123.45

    def test_grosze_to_pln_rounds_floating_noise(self):
        assert grosze_to_pln(12344.9999) == 123.45
        assert grosze_to_pln(12345.4) == 123.45

    def test_pln_to_grosze(self):
        assert pln_to_grosze(123.45) == 12345
        assert pln_to_grosze(1.0) == 100
        assert pln_to_grosze(0.1 + 0.2) == 30

    @pytest.mark.parametrize("grosze", [0, 1, 99, 100, 12345, 1999999, 123456789])
    def test_round_trip_on_whole_grosze(self, grosze):
        assert pln_to_grosze(grosze_to_pln(grosze)) == grosze

    def test_round_trip_over_a_range(self):
        assert all(pln_to_grosze(grosze_to_pln(g)) == g for g in range(0, 20000, 7))

    def test_rejects_non_numeric(self):
        with pytest.raises(ValueError):
            grosze_to_pln("abc")
        with pytest.raises(ValueError):
            pln_to_grosze(True)

    def test_format_grosze(self):
        assert format_grosze(12345) == "123.45 PLN"
        assert format_grosze(5) == "0.05 PLN"


class TestConvertMonetaryFields:
    def test_converts_only_listed_fields(self):
        data = {"net_price": 12345, "tax_price": 2839, "gross_price": 15184}
        result = convert_monetary_fields(data, ["net_price", "gross_price"])
        assert result == {"net_price": 123.45, "tax_price": 2839, "gross_price": 151.84}
        assert data["net_price"] == 12345


class TestConvertAllMonetaryFields:
    def test_recognized_field_set(self):
        assert {"net_price", "gross_price", "tax_price", "unit_net_price", "unit_gross_price",
                "price", "amount", "total", "value"} == set(MONETARY_FIELDS)

    def test_nested_structures(self):
        data = {
            "entities": [
                {
                    "uuid": "abc",
                    "number": "FV 1/2024",
                    "gross_price": 12300,
                    "services": [
                        {"name": "Dev", "unit_net_price": 5000, "quantity": 2, "tax_symbol": 23},
                    ],
                    "client": {"id": 7, "balance": {"amount": "250"}},
                }
            ],
            "metainfo": {"count": 1, "total_count": 1},
        }
        original = copy.deepcopy(data)

        result = convert_all_monetary_fields(data)

        invoice = result["entities"][0]
        assert invoice["gross_price"] == 123.0
        assert invoice["services"][0]["unit_net_price"] == 50.0
        assert invoice["services"][0]["quantity"] == 2
        assert invoice["services"][0]["tax_symbol"] == 23
        assert invoice["client"]["id"] == 7
        assert invoice["client"]["balance"]["amount"] == 2.5
        assert result["metainfo"] == {"count": 1, "total_count": 1}
        assert data == original

    def test_non_numeric_recognized_values_pass_through(self):
        data = {"price": None, "amount": True, "total": "n/a", "value": {"net_price": 100}}
        assert convert_all_monetary_fields(data) == data

    def test_scalars_and_none(self):
        assert convert_all_monetary_fields(None) is None
        assert convert_all_monetary_fields(42) == 42
        assert convert_all_monetary_fields("price") == "price"

    def test_returns_new_containers(self):
        data = [{"name": "x"}]
        result = convert_all_monetary_fields(data)
        assert result == data
        assert result is not data
        assert result[0] is not data[0]

    def test_nested_object_under_monetary_key_is_copied(self):
        data = {"value": {"net_price": 100, "tags": ["a"]}}
        result = convert_all_monetary_fields(data)

        assert result["value"] == {"net_price": 100, "tags": ["a"]}
        assert result["value"] is not data["value"]
        result["value"]["tags"].append("b")
        assert data["value"]["tags"] == ["a"]
