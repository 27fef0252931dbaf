"""Tests for appenv.sources"""

import io

import pytest

from appenv.exceptions import EnvFileParseError
from appenv.sources import DotenvSource, EnvironSource, MappingSource


class TestMappingSource:
    def test_present_and_absent(self):
        source = MappingSource({"A": "1", "EMPTY": ""})
        assert source.lookup("A") == ("1", True)
        assert source.lookup("EMPTY") == ("", True)
        assert source.lookup("B") == ("", False)


class TestEnvironSource:
    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("APPENV_TEST_PRESENT", "yes")
        monkeypatch.setenv("APPENV_TEST_EMPTY", "")
        monkeypatch.delenv("APPENV_TEST_ABSENT", raising=False)

        source = EnvironSource()
        assert source.lookup("APPENV_TEST_PRESENT") == ("yes", True)
        assert source.lookup("APPENV_TEST_EMPTY") == ("", True)
        assert source.lookup("APPENV_TEST_ABSENT") == ("", False)

    def test_reads_at_lookup_time(self, monkeypatch: pytest.MonkeyPatch):
        source = EnvironSource()
        monkeypatch.setenv("APPENV_TEST_LATE", "late")
        assert source.lookup("APPENV_TEST_LATE") == ("late", True)

    def test_explicit_mapping(self):
        source = EnvironSource({"X": "1"})
        assert source.lookup("X") == ("1", True)
        assert source.lookup("Y") == ("", False)


class TestDotenvSource:
    """Tests for dotenv parsing through python-dotenv"""

    def test_basic_syntax(self):
        source = DotenvSource.from_text(
            "# comment\n"
            "PLAIN=value\n"
            "export EXPORTED=1\n"
            "QUOTED=\"hello world\"\n"
            "SINGLE='raw $VALUE'\n"
            "EMPTY=\n"
            "\n"
        )
        assert source.lookup("PLAIN") == ("value", True)
        assert source.lookup("EXPORTED") == ("1", True)
        assert source.lookup("QUOTED") == ("hello world", True)
        assert source.lookup("SINGLE") == ("raw $VALUE", True)
        assert source.lookup("EMPTY") == ("", True)
        assert len(source) == 5

    def test_key_without_value_is_absent(self):
        source = DotenvSource.from_text("BARE\nSET=1\n")
        assert source.lookup("BARE") == ("", False)
        assert source.lookup("SET") == ("1", True)

    def test_interpolation(self):
        source = DotenvSource.from_text("HOST=db\nURL=postgres://${HOST}/app\n")
        assert source.lookup("URL") == ("postgres://db/app", True)

    def test_parse_error_reports_line(self):
        with pytest.raises(EnvFileParseError) as exc_info:
            DotenvSource.from_text("A=1\nNOT A VALID LINE\n", name="config/.env")

        error = exc_info.value
        assert error.line == 2
        assert error.path == "config/.env"
        assert error.details["statement"] == "NOT A VALID LINE"

    def test_unterminated_quote_is_error(self):
        with pytest.raises(EnvFileParseError):
            DotenvSource.from_text("A='unterminated\n")

    def test_from_stream_uses_stream_name(self, tmp_path):
        path = tmp_path / "test.env"
        path.write_text("A=1\n")
        with open(path, encoding="utf-8") as f:
            source = DotenvSource.from_stream(f)
        assert source.name == str(path)
        assert source.lookup("A") == ("1", True)

    def test_from_stream_without_name(self):
        source = DotenvSource.from_stream(io.StringIO("A=1\n"))
        assert source.name == "<stream>"
