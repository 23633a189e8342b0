"""
Tests for the report differ
"""
import pytest

from opcov.differ import diff_files, read_lines, uncovered_lines


def test_uncovered_keeps_order_and_duplicates():
    assert list(uncovered_lines(["A", "B", "C"], ["A", "D", "D"])) == ["D", "D"]


def test_empty_first_passes_everything():
    assert list(uncovered_lines([], ["0x01", "CB 0x02", "0x01"])) == ["0x01", "CB 0x02", "0x01"]


def test_subset_gives_nothing():
    assert list(uncovered_lines(["0x00", "0x01", "0x02", "0x01"], ["0x02", "0x00"])) == []


def test_read_lines_normalizes_endings(tmp_path):
    path = tmp_path / "report.txt"
    path.write_bytes(b"0x00\r\nCB 0x00\r0x01\n  0x02 \n")
    assert read_lines(path) == ["0x00", "CB 0x00", "0x01", "  0x02 "]


def test_read_lines_blank_lines_and_bom(tmp_path):
    path = tmp_path / "report.txt"
    path.write_bytes(b"\xef\xbb\xbfA\n\nB")
    assert read_lines(path) == ["A", "", "B"]


def test_read_lines_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert read_lines(path) == []


def test_diff_files_literal_direction(write_report):
    first = write_report("first.txt", ["A", "B", "C"])
    second = write_report("second.txt", ["A", "D", "D"])
    assert list(diff_files(first, second)) == ["D", "D"]


def test_diff_files_reverse(write_report):
    first = write_report("first.txt", ["A", "B", "C", "B"])
    second = write_report("second.txt", ["A", "D"])
    assert list(diff_files(first, second, reverse=True)) == ["B", "C", "B"]


def test_diff_files_missing_input(write_report, tmp_path):
    first = write_report("first.txt", ["A"])
    with pytest.raises(FileNotFoundError):
        diff_files(first, tmp_path / "nope.txt")


def test_read_lines_replaces_undecodable_bytes(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"0x01 caf\xe9\n")
    assert read_lines(path) == ["0x01 caf�"]
