"""Tests for the click CLI."""
import pytest
from click.testing import CliRunner

from crossborder_vat.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestRatesCommands:
    def test_rates_table(self, runner):
        result = runner.invoke(cli, ["rates", "--date", "2025-07-01"])

        assert result.exit_code == 0
        assert "Germany" in result.output
        assert "Norway" in result.output
        assert "25.5%" in result.output

    def test_rate_uses_date(self, runner):
        before = runner.invoke(cli, ["rate", "EE", "--date", "2025-06-30"])
        after = runner.invoke(cli, ["rate", "ee", "--date", "2025-07-01"])

        assert before.exit_code == 0
        assert "22%" in before.output
        assert "24%" in after.output

    def test_rate_with_category(self, runner):
        result = runner.invoke(cli, ["rate", "DE", "--category", "books"])

        assert result.exit_code == 0
        assert "7%" in result.output

    def test_rate_rejects_unknown_country(self, runner):
        result = runner.invoke(cli, ["rate", "XX"])
        assert result.exit_code == 2

    def test_categories(self, runner):
        result = runner.invoke(cli, ["categories"])

        assert result.exit_code == 0
        assert "children_clothing" in result.output


class TestConversionCommands:
    def test_net_by_country(self, runner):
        result = runner.invoke(cli, ["net", "119", "--country", "DE"])

        assert result.exit_code == 0
        assert "100.00" in result.output
        assert "19.00" in result.output

    def test_gross_by_rate(self, runner):
        result = runner.invoke(cli, ["gross", "100", "--rate", "0.27"])

        assert result.exit_code == 0
        assert "127.00" in result.output

    def test_requires_exactly_one_rate_source(self, runner):
        assert runner.invoke(cli, ["net", "119"]).exit_code == 2
        assert runner.invoke(cli, ["net", "119", "--country", "DE", "--rate", "0.19"]).exit_code == 2

    def test_negative_price_reports_error_code(self, runner):
        result = runner.invoke(cli, ["net", "--rate", "0.19", "--", "-100"])

        assert result.exit_code == 1
        assert "NEGATIVE_PRICE" in result.output

    def test_rate_as_percentage_is_rejected(self, runner):
        result = runner.invoke(cli, ["gross", "100", "--rate", "19"])

        assert result.exit_code == 1
        assert "RATE_OUT_OF_RANGE" in result.output

    def test_non_numeric_price(self, runner):
        result = runner.invoke(cli, ["net", "abc", "--rate", "0.19"])

        assert result.exit_code == 1
        assert "INVALID_PRICE_TYPE" in result.output


class TestRuleCommand:
    def test_reverse_charge(self, runner):
        result = runner.invoke(cli, ["rule", "--seller", "DE", "--buyer", "FR", "--type", "B2B"])

        assert result.exit_code == 0
        assert "Reverse charge" in result.output
        assert "No (reverse charge applies)" in result.output

    def test_local_sale(self, runner):
        result = runner.invoke(cli, ["rule", "--seller", "DE", "--buyer", "FR",
                                     "--storage", "FR", "--fulfillment", "FBA"])

        assert result.exit_code == 0
        assert "Local sale in France" in result.output
        assert "20%" in result.output

    def test_distance_selling_from_price_and_volume(self, runner):
        result = runner.invoke(cli, ["rule", "--seller", "DE", "--buyer", "IT",
                                     "--price", "50", "--volume", "300"])

        assert result.exit_code == 0
        assert "Destination country VAT in Italy" in result.output
        assert "22%" in result.output

    def test_invalid_sales_figure_resolves_below_threshold(self, runner):
        result = runner.invoke(cli, ["rule", "--seller", "DE", "--buyer", "IT", "--sales", "lots"])

        assert result.exit_code == 0
        assert "Origin country VAT in Germany" in result.output
