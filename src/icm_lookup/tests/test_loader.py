"""
Unit tests for parsing and reading code source text.
"""

import pytest

from icm_lookup.codes import CodeEntry, CodeType
from icm_lookup.exceptions import MalformedSourceLineError, SourceUnavailableError
from icm_lookup.loader import load_subset_text, parse_code_line, parse_code_lines


class TestParseCodeLines:
    """Test cases for parse_code_lines"""

    def test_split_at_first_comma(self):
        """Test quoted description containing commas"""
        entries = parse_code_lines('A000,"Cholera due to Vibrio cholerae 01, biovar cholerae"')
        assert entries == (
            CodeEntry("A000", "Cholera due to Vibrio cholerae 01, biovar cholerae"),
        )

    def test_unquoted_description_with_commas(self):
        """Test unquoted description keeps later commas"""
        entry = parse_code_line("A009,Cholera, unspecified")
        assert entry.code == "A009"
        assert entry.description == "Cholera, unspecified"

    def test_trims_code_and_description(self):
        """Test whitespace and quote trimming"""
        entry = parse_code_line('  A00.0  ,  "Cholera"  ')
        assert entry.code == "A00.0"
        assert entry.description == "Cholera"
        assert entry.normalized_code == "A000"

    def test_blank_lines_and_crlf(self):
        """Test blank lines are skipped and CRLF line endings accepted"""
        text = "A000,Cholera\r\n\r\n   \r\nA001,Cholera eltor\r\n"
        entries = parse_code_lines(text)
        assert [entry.code for entry in entries] == ["A000", "A001"]
        assert entries[1].description == "Cholera eltor"

    def test_only_line_endings_split_lines(self):
        """Test form feeds and Unicode separators stay inside a description"""
        text = (
            'A000,"Cholera\u2028due to vibrio"\n'
            "A001,Cholera\x0cfoo, bar\r"
            "A009,Cholera\x85unspecified"
        )
        entries = parse_code_lines(text)
        assert [entry.code for entry in entries] == ["A000", "A001", "A009"]
        assert entries[0].description == "Cholera\u2028due to vibrio"
        assert entries[1].description == "Cholera\x0cfoo, bar"
        assert entries[2].description == "Cholera\x85unspecified"

    def test_old_mac_line_endings(self):
        """Test lone CR separates lines"""
        entries = parse_code_lines("A000,Cholera\rA001,Cholera eltor")
        assert [entry.code for entry in entries] == ["A000", "A001"]

    def test_description_trims_tabs_and_quotes(self):
        """Test whitespace of any kind around a quoted description"""
        entry = parse_code_line('A000,\t"Cholera, biovar cholerae"\t ')
        assert entry.description == "Cholera, biovar cholerae"

    def test_duplicates_collapsed_in_order(self):
        """Test identical lines are kept once, first-seen order"""
        text = "I10,Hypertension\nA000,Cholera\nI10,Hypertension\nI10,Other description\n"
        entries = parse_code_lines(text)
        assert entries == (
            CodeEntry("I10", "Hypertension"),
            CodeEntry("A000", "Cholera"),
            CodeEntry("I10", "Other description"),
        )

    def test_empty_text(self):
        """Test empty text gives no entries"""
        assert parse_code_lines("") == ()

    def test_malformed_line(self):
        """Test line without comma aborts parsing"""
        text = "A000,Cholera\n\nNOCOMMA\nA001,Cholera eltor\n"
        with pytest.raises(MalformedSourceLineError) as exc_info:
            parse_code_lines(text, source="icd10_diagnosis")

        error = exc_info.value
        assert error.line_number == 3
        assert error.line == "NOCOMMA"
        assert error.source == "icd10_diagnosis"
        assert "icd10_diagnosis, line 3" in str(error)
        assert isinstance(error, ValueError)


class TestLoadSubsetText:
    """Test cases for load_subset_text"""

    def test_packaged_data(self):
        """Test reading bundled data"""
        text = load_subset_text(CodeType.ICD10_DIAGNOSIS)
        assert 'A000,"Cholera due to Vibrio cholerae 01, biovar cholerae"' in text

    def test_alias_identifier(self):
        """Test code set alias is accepted"""
        text = load_subset_text("ICM9Proc")
        assert "Colonoscopy" in text

    def test_data_dir_override(self, tmp_path):
        """Test reading from a directory"""
        (tmp_path / "dx.csv").write_text("A000,Cholera\n", encoding="utf-8")
        text = load_subset_text(
            CodeType.ICD10_DIAGNOSIS,
            data_dir=tmp_path,
            sources={"icd10_diagnosis": "dx.csv"}
        )
        assert text == "A000,Cholera\n"

    def test_missing_file(self, tmp_path):
        """Test missing file raises SourceUnavailableError"""
        with pytest.raises(SourceUnavailableError) as exc_info:
            load_subset_text(CodeType.ICD10_DIAGNOSIS, data_dir=tmp_path)

        assert exc_info.value.source == "icd10_diagnosis.csv"
        assert isinstance(exc_info.value, FileNotFoundError)

    def test_unconfigured_source(self):
        """Test code set without a configured file"""
        with pytest.raises(SourceUnavailableError):
            load_subset_text(CodeType.ICD10_DIAGNOSIS, sources={"icd9_diagnosis": "x.csv"})
