"""Tests for Makefile field extraction."""

import pytest

from linuxwatcher.core.extractor import (
    ExtractionError, FieldNotFoundError, UnterminatedFieldError,
    extract_field, extract_release,
)
from linuxwatcher.core.models import KernelRelease


class TestExtractField:

    @pytest.mark.parametrize("marker, expected", [
        ("VERSION", "5"),
        ("PATCHLEVEL", "10"),
        ("SUBLEVEL", "7"),
        ("NAME", "Kleptomaniac Octopus"),
    ])
    def test_each_marker_in_sample(self, sample_makefile, marker, expected):
        assert extract_field(sample_makefile, marker) == expected

    def test_extraversion_does_not_match_version(self):
        text = "EXTRAVERSION = -rc1\nVERSION = 6\n"
        assert extract_field(text, "VERSION") == "6"
        assert extract_field(text, "EXTRAVERSION") == "-rc1"

    def test_separator_spacing_is_not_fixed(self):
        text = "VERSION=6\nPATCHLEVEL   =  12\nNAME =\tBaby Opossum Posse  \n"
        assert extract_field(text, "VERSION") == "6"
        assert extract_field(text, "PATCHLEVEL") == "12"
        assert extract_field(text, "NAME") == "Baby Opossum Posse"

    def test_first_assignment_wins(self):
        text = "VERSION = 6\nVERSION = 7\n"
        assert extract_field(text, "VERSION") == "6"

    def test_crlf_line_endings(self):
        assert extract_field("VERSION = 6\r\nNAME = X\r\n", "NAME") == "X"

    def test_empty_assignment_returns_empty_string(self):
        assert extract_field("EXTRAVERSION =\nNAME = X\n", "EXTRAVERSION") == ""

    def test_missing_marker(self, sample_makefile):
        with pytest.raises(FieldNotFoundError) as exc_info:
            extract_field(sample_makefile, "EXTRAVERSION")
        assert exc_info.value.marker == "EXTRAVERSION"

    def test_marker_without_assignment_is_not_found(self):
        with pytest.raises(FieldNotFoundError):
            extract_field("# VERSION of the kernel\n", "VERSION")

    def test_marker_on_truncated_last_line(self):
        text = "VERSION = 6\nPATCHLEVEL = 12\nNAME = Baby Opo"
        with pytest.raises(UnterminatedFieldError) as exc_info:
            extract_field(text, "NAME")
        assert exc_info.value.marker == "NAME"

    def test_marker_cut_before_separator_is_not_found(self):
        with pytest.raises(FieldNotFoundError):
            extract_field("VERSION = 6\nNAM", "NAME")

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            extract_field("", "VERSION")


class TestExtractRelease:

    def test_sample_document(self, sample_makefile):
        release = extract_release(sample_makefile)
        assert (release.version, release.patchlevel, release.sublevel, release.name) == \
            ("5", "10", "7", "Kleptomaniac Octopus")
        assert release.extraversion == ""
        assert release.release == "5.10.7"

    def test_upstream_head_with_extraversion(self, upstream_makefile_head):
        release = extract_release(upstream_makefile_head)
        assert release == KernelRelease("6", "12", "0", "Baby Opossum Posse", "-rc3")
        assert release.release == "6.12.0-rc3"

    def test_non_ascii_codename(self):
        text = "VERSION = 4\nPATCHLEVEL = 2\nSUBLEVEL = 0\nNAME = Hurr durr I'ma sheep – Ünïcödé\n"
        assert extract_release(text).name == "Hurr durr I'ma sheep – Ünïcödé"

    @pytest.mark.parametrize("missing", ["VERSION", "PATCHLEVEL", "SUBLEVEL", "NAME"])
    def test_missing_required_field(self, sample_makefile, missing):
        text = "\n".join(
            line for line in sample_makefile.split("\n")
            if not line.startswith(missing + " ")
        )
        with pytest.raises(FieldNotFoundError) as exc_info:
            extract_release(text)
        assert exc_info.value.marker == missing

    def test_empty_required_field(self):
        text = "VERSION = 5\nPATCHLEVEL = 10\nSUBLEVEL = 7\nNAME =\n"
        with pytest.raises(ExtractionError) as exc_info:
            extract_release(text)
        assert exc_info.value.marker == "NAME"

    def test_non_numeric_version(self):
        text = "VERSION = five\nPATCHLEVEL = 10\nSUBLEVEL = 7\nNAME = X\n"
        with pytest.raises(ExtractionError):
            extract_release(text)

    def test_html_error_page(self):
        with pytest.raises(ExtractionError):
            extract_release("<!DOCTYPE html>\n<html><head><title>404</title>")

    @pytest.mark.parametrize("version, patchlevel, sublevel", [
        ("1!6", "1", "0"),          # epoch
        ("6", "1", "0.post2"),      # post-release
        ("v6", "1", "0"),           # prefix
        ("6", "1", "0rc1"),         # pre-release
        ("6", "1", "0.dev3"),       # dev release
        ("6", "1.2", "0"),          # extra component
        ("06", "1", "0"),           # leading zero
        ("٦", "1", "0"),            # non-ASCII digit
        ("-6", "1", "0"),
    ])
    def test_rejects_non_release_numbers(self, version, patchlevel, sublevel):
        text = (f"VERSION = {version}\nPATCHLEVEL = {patchlevel}\n"
                f"SUBLEVEL = {sublevel}\nNAME = X\n")
        with pytest.raises(ExtractionError):
            extract_release(text)

    def test_zero_components_are_valid(self):
        text = "VERSION = 6\nPATCHLEVEL = 0\nSUBLEVEL = 0\nNAME = X\n"
        assert extract_release(text).release == "6.0.0"

    def test_truncated_extraversion_is_not_dropped(self, sample_makefile):
        with pytest.raises(UnterminatedFieldError) as exc_info:
            extract_release(sample_makefile + "EXTRAVERSION = -r")
        assert exc_info.value.marker == "EXTRAVERSION"

    def test_empty_extraversion(self, sample_makefile):
        release = extract_release(sample_makefile + "EXTRAVERSION =\n")
        assert release.extraversion == ""
        assert release.release == "5.10.7"
