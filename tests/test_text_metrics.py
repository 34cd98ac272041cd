"""
Unit tests for text wrapping and measurement.
"""

from ohs_report.text_metrics import FPDFTextMeasurer, pdf_safe_text, wrap_text, wrap_words


def _chars(text):
    return float(len(text))


class TestWrapWords:
    def test_greedy_fill(self):
        assert wrap_words("one two three four", 9, _chars) == ["one two", "three", "four"]

    def test_long_word_is_broken(self):
        assert wrap_words("abcdefghij", 4, _chars) == ["abcd", "efgh", "ij"]

    def test_repeated_spaces_collapse(self):
        assert wrap_words("a    b", 10, _chars) == ["a b"]

    def test_whitespace_only_is_kept_as_one_line(self):
        assert wrap_words("   ", 10, _chars) == ["   "]


class TestWrapText:
    def test_paragraphs_wrap_independently(self):
        assert wrap_text("alpha beta\ngamma", 6, _chars) == ["alpha", "beta", "gamma"]

    def test_blank_paragraph_keeps_its_line(self):
        assert wrap_text("first\n\nthird", 20, _chars) == ["first", "", "third"]


class TestFPDFTextMeasurer:
    def test_lines_fit_requested_width(self):
        measurer = FPDFTextMeasurer()
        text = "Hazard identification covered manual handling, forklift traffic and chemical storage. " * 8
        lines = measurer.wrap(text, 495, "normal", 10)
        assert len(lines) > 1
        for line in lines:
            measurer.pdf.set_font("helvetica", "", 10)
            assert measurer.pdf.get_string_width(line) <= 495
        assert " ".join(lines).split() == text.split()

    def test_bold_text_is_wider(self):
        measurer = FPDFTextMeasurer()
        text = "Lost Time Injury Frequency Rate " * 6
        assert len(measurer.wrap(text, 200, "bold", 14)) >= len(measurer.wrap(text, 200, "normal", 10))

    def test_short_value_is_single_line(self):
        assert FPDFTextMeasurer().wrap("N/A", 495, "normal", 10) == ["N/A"]


class TestPdfSafeText:
    def test_non_latin_is_replaced(self):
        assert pdf_safe_text("Target → zero") == "Target ? zero"

    def test_latin1_kept(self):
        assert pdf_safe_text("Café") == "Café"
