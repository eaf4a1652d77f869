"""Tests for the command line interface."""

from typer.testing import CliRunner

from vn_tax_calculator import __version__
from vn_tax_calculator.cli.app import app
from vn_tax_calculator.config import Settings

runner = CliRunner()


class TestCLI:
    """Smoke tests for each command."""

    def test_version(self):
        """--version prints the version and exits cleanly."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_salary(self):
        """30 triệu gross gives 26.215.000 net."""
        result = runner.invoke(app, ["salary", "30000000"])
        assert result.exit_code == 0
        assert "26.215.000" in result.output

    def test_salary_old_law(self):
        """--law selects the 7-bracket table."""
        result = runner.invoke(app, ["salary", "30.000.000", "--law", "2025"])
        assert result.exit_code == 0
        assert "1.627.500" in result.output

    def test_invalid_amount(self):
        """Text without digits exits with an error."""
        result = runner.invoke(app, ["salary", "abc"])
        assert result.exit_code == 1

    def test_negative_amount_clamped(self):
        """A negative amount is treated as zero with a warning."""
        result = runner.invoke(app, ["salary", "--", "-5000000"])
        assert result.exit_code == 0
        assert "Cảnh báo" in result.output

    def test_compare_laws(self):
        """The saving between the two laws is printed."""
        result = runner.invoke(app, ["compare-laws", "30000000"])
        assert result.exit_code == 0
        assert "992.500" in result.output

    def test_lottery(self):
        """50 triệu prize pays 4 triệu."""
        result = runner.invoke(app, ["lottery", "50000000"])
        assert result.exit_code == 0
        assert "4.000.000" in result.output

    def test_freelancer(self):
        """Freelancer net at 30 triệu is 27 triệu."""
        result = runner.invoke(app, ["freelancer", "30000000"])
        assert result.exit_code == 0
        assert "27.000.000" in result.output

    def test_vat(self):
        """VAT command runs with sales and purchases."""
        result = runner.invoke(app, ["vat", "100000000", "60000000"])
        assert result.exit_code == 0

    def test_mortgage_csv(self, tmp_path):
        """The schedule can be exported to CSV."""
        target = tmp_path / "schedule.csv"
        result = runner.invoke(app, ["mortgage", "3000000000", "--csv", str(target)])
        assert result.exit_code == 0
        assert target.exists()
        assert "2.100.000.000" in result.output

    def test_mortgage_down_payment_out_of_range(self):
        """A down payment above 100% is rejected with a message."""
        result = runner.invoke(app, ["mortgage", "3000000000", "--down-payment", "150"])
        assert result.exit_code == 1
        assert "Lỗi" in result.output
        assert "0-100%" in result.output

    def test_break_even_without_insurance(self):
        """Without insurance a break-even point exists."""
        result = runner.invoke(app, ["break-even", "--no-insurance"])
        assert result.exit_code == 0
        assert "Điểm hòa vốn" in result.output


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        """The new law is the default."""
        settings = Settings()
        assert settings.default_law_version == "2026"
        assert settings.log_level == "WARNING"

    def test_env_override(self, monkeypatch):
        """VNTAX_* variables override the defaults."""
        monkeypatch.setenv("VNTAX_DEFAULT_LAW_VERSION", "2025")
        assert Settings().default_law_version == "2025"
