"""Tests for markdown-to-RTF document export."""

from autowriter.services.rtf_service import build_chapter_rtf, build_rtf, escape_rtf, slugify_filename


def _decode(document: bytes) -> str:
    return document.decode("ascii")


class TestEscapeRtf:
    def test_control_characters_are_escaped(self):
        assert escape_rtf("a\\b{c}") == "a\\\\b\\{c\\}"

    def test_whitespace_controls(self):
        assert escape_rtf("a\tb\r\nc") == "a\\tab b\\line c"

    def test_non_ascii_uses_unicode_escapes(self):
        assert escape_rtf("café") == "caf\\u233?"
        assert escape_rtf("\u201cq\u201d") == "\\u8220?q\\u8221?"

    def test_astral_characters_become_signed_surrogate_pairs(self):
        assert escape_rtf("\U0001F600") == "\\u-10179?\\u-8704?"


class TestBuildRtf:
    def test_document_shape(self):
        rtf = _decode(build_rtf("My Title", "A subtitle", "Hello world."))

        assert rtf.startswith("{\\rtf1\\ansi")
        assert rtf.endswith("}")
        assert "{\\b My Title}" in rtf
        assert "{\\i A subtitle}" in rtf
        assert "Hello world.\\par" in rtf

    def test_headings_are_converted(self):
        rtf = _decode(build_rtf("T", None, "# Heading\n\n## Second **level**"))

        assert "{\\b Heading}" in rtf
        assert "# Heading" not in rtf
        assert "{\\b Second level}" in rtf
        assert "\\fs32" in rtf

    def test_inline_emphasis_and_lists(self):
        rtf = _decode(build_rtf("T", None, "Some **bold** and *italic* text\n- first\n2. second"))

        assert "Some {\\b bold} and {\\i italic} text" in rtf
        assert "\\bullet\\tab first" in rtf
        assert "2.\\tab second" in rtf

    def test_braces_in_content_cannot_break_the_document(self):
        rtf = _decode(build_rtf("T", None, "set {x} to C:\\temp"))

        assert "set \\{x\\} to C:\\\\temp" in rtf

    def test_output_is_pure_ascii(self):
        document = build_rtf("Naïve café", None, "Smart \u2014 dashes")
        assert all(byte < 128 for byte in document)


class TestBuildChapterRtf:
    def test_chapter_heading_and_page_break_footer(self):
        rtf = _decode(build_chapter_rtf(4, "Storm", "Night falls", "It rained."))

        assert "{\\b Chapter 4: Storm}" in rtf
        assert "{\\i End of Chapter 4}" in rtf
        assert rtf.rstrip("}").rstrip().endswith("\\page")


class TestSlugifyFilename:
    def test_non_alphanumerics_become_underscores(self):
        assert slugify_filename("Hello, World! 2024") == "hello__world__2024"
