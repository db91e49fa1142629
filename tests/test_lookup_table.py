from pathlib import Path

import pytest

from flowlog_tagger.core.models import LookupTable
from flowlog_tagger.exceptions import ConfigurationError, LookupTableError
from flowlog_tagger.reference.lookup import build_lookup_table, load_lookup_table


def test_fixture_entries(lookup_csv: Path):
    table = load_lookup_table(lookup_csv)
    assert table.tag_for("tcp", 25) == "sv_P1"
    assert table.tag_for("udp", 68) == "sv_P2"
    assert table.tag_for("udp", 31) == "SV_P3"
    assert table.tag_for("icmp", 0) == "sv_P5"
    assert len(table) == 11


def test_missing_entries_are_no_match(lookup_csv: Path):
    table = load_lookup_table(lookup_csv)
    assert table.tag_for("tcp", 9999) is None
    assert table.tag_for("udp", 25) is None
    assert table.tag_for("gre", 25) is None
    assert table.tag_for(None, 25) is None


def test_distinct_tags_in_first_seen_order(lookup_csv: Path):
    table = load_lookup_table(lookup_csv)
    assert sorted(table.tags()) == sorted(
        ["sv_P1", "sv_P2", "SV_P3", "sv_P4", "sv_P5", "email"]
    )


def test_fields_are_trimmed():
    table = build_lookup_table([[" 443 ", " tcp ", " https "]])
    assert table.tag_for("tcp", 443) == "https"


def test_later_rows_overwrite_same_pair():
    table = build_lookup_table([["80", "tcp", "web"], ["80", "tcp", "http"]])
    assert table.tag_for("tcp", 80) == "http"
    assert table.tags() == ["http"]


@pytest.mark.parametrize(
    "row",
    [
        ["eighty", "tcp", "web"],
        ["80", "tcp"],
        ["80", "", "web"],
        ["80", "tcp", " "],
        ["-1", "tcp", "web"],
    ],
)
def test_malformed_rows_raise(row):
    with pytest.raises(LookupTableError) as info:
        build_lookup_table([["25", "tcp", "mail"], row], source="lookup.csv")
    assert info.value.line_number == 3


def test_malformed_rows_skipped_when_requested():
    table = build_lookup_table(
        [["25", "tcp", "mail"], ["x", "tcp", "bad"], ["53", "udp", "dns"]],
        skip_malformed=True,
    )
    assert len(table) == 2
    assert table.tag_for("udp", 53) == "dns"


def test_row_limit_only_warns(caplog):
    rows = [[str(port), "tcp", f"t{port}"] for port in range(5)]
    with caplog.at_level("WARNING", logger="flowlog_tagger.reference.lookup"):
        table = build_lookup_table(rows, row_limit=3)
    assert len(table) == 5
    assert "above the supported" in caplog.text


def test_lookup_table_is_read_only():
    table = LookupTable({"tcp": {25: "mail"}})
    with pytest.raises(TypeError):
        table.entries["tcp"][26] = "x"


def test_missing_file_is_configuration_error(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        load_lookup_table(tmp_path / "nope.csv")


def test_bad_port_in_file_aborts(write_file):
    path = write_file("lookup.csv", "dstport,protocol,tag\n25,tcp,mail\nabc,tcp,x\n")
    with pytest.raises(LookupTableError):
        load_lookup_table(path)


def test_rows_wider_than_header_are_kept(write_file):
    path = write_file(
        "lookup.csv", "dstport,protocol,tag\n25,tcp,mail,comment\n53,udp,dns\n"
    )
    table = load_lookup_table(path)
    assert table.tag_for("tcp", 25) == "mail"
    assert table.tag_for("udp", 53) == "dns"


def test_error_reports_line_after_blank_lines(write_file):
    path = write_file("lookup.csv", "dstport,protocol,tag\n25,tcp,mail\n\n\nabc,tcp,x\n")
    with pytest.raises(LookupTableError) as info:
        load_lookup_table(path)
    assert info.value.line_number == 5


def test_error_reports_line_after_multiline_tag(write_file):
    path = write_file(
        "lookup.csv", 'dstport,protocol,tag\n25,tcp,"mail\nrelay"\n80,tcp\n'
    )
    with pytest.raises(LookupTableError) as info:
        load_lookup_table(path)
    assert info.value.line_number == 4


def test_skipped_lookup_rows_are_logged_not_dropped_silently(write_file, caplog):
    path = write_file(
        "lookup.csv", "dstport,protocol,tag\n25,tcp,mail,extra,fields\nx,tcp,bad\n53,udp,dns\n"
    )
    with caplog.at_level("WARNING", logger="flowlog_tagger.reference.lookup"):
        table = load_lookup_table(path, skip_malformed=True)
    assert len(table) == 2
    assert f"{path}:3" in caplog.text
