"""Tests for the Windows-1252 workaround tables."""
import encoding1252


class TestTables:

    def test_table_has_27_entries(self):
        assert len(encoding1252.ENCODING_1252_TO_UNICODE) == 27
        assert len(encoding1252.UNICODE_TO_ENCODING_1252) == 27

    def test_tables_are_inverse(self):
        for legacy, unicode_char in encoding1252.ENCODING_1252_TO_UNICODE.items():
            assert encoding1252.UNICODE_TO_ENCODING_1252[unicode_char] == legacy

    def test_unicode_side_is_c1_range(self):
        assert all(0x80 <= ord(c) <= 0x9F for c in encoding1252.UNICODE_TO_ENCODING_1252)

    def test_undefined_1252_bytes_are_skipped(self):
        for code in (0x81, 0x8D, 0x8F, 0x90, 0x9D):
            assert chr(code) not in encoding1252.UNICODE_TO_ENCODING_1252


class TestConversion:

    def test_ellipsis_to_unicode(self):
        assert encoding1252.to_unicode("Wait…") == "Wait\x85"

    def test_ellipsis_to_legacy(self):
        assert encoding1252.to_legacy("Wait\x85") == "Wait…"

    def test_euro_and_y_diaeresis(self):
        assert encoding1252.to_unicode("€Ÿ") == "\x80\x9f"
        assert encoding1252.to_legacy("\x80\x9f") == "€Ÿ"

    def test_trade_mark_sign(self):
        assert encoding1252.to_unicode("™") == "\x99"

    def test_other_characters_pass_through(self):
        text = "Hello, 世界! \xe9\x81\x8d"
        assert encoding1252.to_unicode(text) == text
        assert encoding1252.to_legacy("Hello, 世界! \xe9") == "Hello, 世界! \xe9"

    def test_empty_string(self):
        assert encoding1252.to_unicode("") == ""
        assert encoding1252.to_legacy("") == ""
