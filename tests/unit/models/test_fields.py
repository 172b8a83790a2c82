# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for field descriptor rendering."""

import dataclasses

import pytest

from geckoboard.datasets.models.fields import (
    DateField,
    DateTimeField,
    MoneyField,
    NumberField,
    PercentageField,
    RawField,
    StringField,
    render_field,
)


class TestPlainFields:
    def test_string(self):
        assert StringField("Customer").to_dict() == {"name": "Customer", "type": "string"}

    def test_date(self):
        assert DateField("Day").to_dict() == {"name": "Day", "type": "date"}

    def test_datetime(self):
        assert DateTimeField("Seen at").to_dict() == {"name": "Seen at", "type": "datetime"}

    def test_plain_fields_have_no_optional_key(self):
        for f in (StringField("a"), DateField("b"), DateTimeField("c")):
            assert "optional" not in f.to_dict()


class TestOptionalFields:
    @pytest.mark.parametrize(
        "field, expected_type",
        [
            (NumberField("n"), "number"),
            (MoneyField("m", currency_code="USD"), "money"),
            (PercentageField("p"), "percentage"),
        ],
    )
    def test_optional_defaults_to_false(self, field, expected_type):
        rendered = field.to_dict()
        assert rendered["type"] == expected_type
        assert rendered["optional"] is False

    @pytest.mark.parametrize(
        "field",
        [
            NumberField("n", optional=True),
            MoneyField("m", currency_code="EUR", optional=True),
            PercentageField("p", optional=True),
        ],
    )
    def test_optional_is_rendered_as_given(self, field):
        assert field.to_dict()["optional"] is True


class TestMoneyField:
    def test_currency_code_is_verbatim(self):
        rendered = MoneyField("Revenue", currency_code="usd ").to_dict()
        assert rendered == {
            "name": "Revenue",
            "type": "money",
            "optional": False,
            "currency_code": "usd ",
        }

    def test_invalid_currency_code_is_not_validated(self):
        assert MoneyField("x", currency_code="NOT-A-CODE").to_dict()["currency_code"] == "NOT-A-CODE"


class TestRawField:
    def test_renders_mapping_verbatim(self):
        attrs = {"name": "Duration", "type": "duration", "time_unit": "seconds"}
        assert RawField(attrs).to_dict() == attrs

    def test_type_may_be_omitted(self):
        assert RawField({"name": "x"}).to_dict() == {"name": "x"}

    def test_render_returns_copy(self):
        attrs = {"name": "x"}
        rendered = RawField(attrs).to_dict()
        rendered["type"] = "string"
        assert attrs == {"name": "x"}

    def test_name_property(self):
        assert RawField({"name": "Visits"}).name == "Visits"


class TestImmutability:
    def test_descriptors_are_frozen(self):
        f = NumberField("n")
        with pytest.raises(dataclasses.FrozenInstanceError):
            f.optional = True


class TestRenderField:
    def test_dispatches_on_variant(self):
        assert render_field(PercentageField("p"))["type"] == "percentage"

    def test_accepts_plain_mapping(self):
        assert render_field({"name": "x", "type": "string"}) == {"name": "x", "type": "string"}

    def test_rejects_unknown_type(self):
        with pytest.raises(TypeError):
            render_field("string")
