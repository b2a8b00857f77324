"""Tests for the output/input VAT breakdown of a sale line."""
import datetime as _dt
from decimal import Decimal

import pytest

from crossborder_vat.breakdown import calculate_vat_breakdown
from crossborder_vat.errors import VATErrorCode
from crossborder_vat.models.categories import ProductCategory
from crossborder_vat.models.countries import CountryCode
from crossborder_vat.models.rates import VATRateType

D = Decimal


class TestVATBreakdown:
    def test_german_sale(self):
        result = calculate_vat_breakdown(D("119"), D("59.50"), D("11.90"), "DE")

        assert result.success
        data = result.data
        assert data.country is CountryCode.DE
        assert data.vat_rate == D("0.19")
        assert data.revenue_net == D("100.00")
        assert data.output_vat == D("19.00")
        assert data.cogs_net == D("50.00")
        assert data.input_vat_cogs == D("9.50")
        assert data.fees_net == D("10.00")
        assert data.input_vat_fees == D("1.90")
        assert data.net_vat_liability == D("7.60")

    def test_lines_keep_residual_invariant(self):
        data = calculate_vat_breakdown(D("123.45"), D("33.33"), D("7.77"), "FR").data

        assert data.revenue_net + data.output_vat == data.revenue_gross == D("123.45")
        assert data.cogs_net + data.input_vat_cogs == data.cogs_gross == D("33.33")
        assert data.fees_net + data.input_vat_fees == data.fees_gross == D("7.77")

    def test_refund_position(self):
        data = calculate_vat_breakdown(D("12"), D("120"), D("0"), "AT").data
        assert data.net_vat_liability < 0

    def test_uses_calculation_date(self):
        data = calculate_vat_breakdown(D("124"), D("0"), D("0"), "EE",
                                       as_of=_dt.date(2025, 7, 1)).data
        assert data.output_vat == D("24.00")

    def test_unknown_country(self):
        result = calculate_vat_breakdown(D("1"), D("1"), D("1"), "XX")
        assert result.error.code is VATErrorCode.UNKNOWN_COUNTRY

    def test_error_names_offending_line(self):
        result = calculate_vat_breakdown(D("100"), D("-1"), D("0"), "DE")

        assert result.success is False
        assert result.error.code is VATErrorCode.NEGATIVE_PRICE
        assert result.error.field == "cogs.price"

    def test_net_profit_and_margin(self):
        data = calculate_vat_breakdown(D("119"), D("59.50"), D("11.90"), "DE").data

        # 100.00 - 50.00 - 10.00 - 7.60
        assert data.net_profit == D("32.40")
        assert data.margin_percentage == D("32.40")

    def test_zero_revenue_has_zero_margin(self):
        result = calculate_vat_breakdown(D("0"), D("11.90"), D("0"), "DE")

        assert result.success
        assert result.data.revenue_net == D("0.00")
        assert result.data.net_vat_liability == D("-1.90")
        assert result.data.net_profit == D("-8.10")
        assert result.data.margin_percentage == D("0")

    def test_reports_rate_information(self):
        info = calculate_vat_breakdown(D("119"), D("0"), D("0"), "DE").data.vat_info

        assert info.rate == D("0.19")
        assert info.rate_type is VATRateType.STANDARD
        assert info.country is CountryCode.DE
        assert info.rule_applied == "Standard rate in Germany"

    def test_camel_case_dump(self):
        data = calculate_vat_breakdown(D("119"), D("0"), D("0"), "DE").data
        dumped = data.model_dump(by_alias=True)

        assert dumped["netProfit"] == D("81.00")
        assert dumped["marginPercentage"] == D("81.00")
        assert dumped["vatInfo"]["ruleApplied"] == "Standard rate in Germany"


class TestCategoryBreakdown:
    def test_books_in_germany_use_reduced_rate(self):
        result = calculate_vat_breakdown(D("107"), D("53.50"), D("10.70"), "DE",
                                         category=ProductCategory.BOOKS)

        data = result.data
        assert data.vat_rate == D("0.07")
        assert data.vat_info.rate_type is VATRateType.REDUCED1
        assert data.revenue_net == D("100.00")
        assert data.output_vat == D("7.00")
        assert data.input_vat_cogs == D("3.50")
        assert data.input_vat_fees == D("0.70")
        assert data.net_vat_liability == D("2.80")
        assert data.net_profit == D("37.20")

    def test_category_accepts_plain_string(self):
        data = calculate_vat_breakdown(D("110"), D("0"), D("0"), "FR", "accommodation").data

        assert data.vat_rate == D("0.10")
        assert data.vat_info.rate_type is VATRateType.REDUCED2

    def test_denmark_falls_back_to_standard_rate(self):
        data = calculate_vat_breakdown(D("125"), D("0"), D("0"), "DK",
                                       category=ProductCategory.BOOKS).data

        assert data.vat_rate == D("0.25")
        assert data.vat_info.rate_type is VATRateType.STANDARD
        assert data.output_vat == D("25.00")

    def test_unknown_category_is_rejected(self):
        with pytest.raises(ValueError):
            calculate_vat_breakdown(D("100"), D("0"), D("0"), "DE", category="jewellery")
