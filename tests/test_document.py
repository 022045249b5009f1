import pytest

from srecfix.checksum import compute_expected_checksum
from srecfix.checksum import extract_declared_checksum
from srecfix.document import Mismatch
from srecfix.document import RepairResult
from srecfix.document import ScanResult
from srecfix.document import SrecDocument
from srecfix.document import check_line
from srecfix.document import find_address
from srecfix.document import repair
from srecfix.document import repair_line
from srecfix.document import scan

GOOD_LINE = 'S1137AF00A0A0D0000000000000000000061'
BAD_LINE = 'S1137AF00A0A0D00000000000000000000FF'

DATA_0100 = 'S1130100000102030405060708090A0B0C0D0E0F73'

MIXED_LINES = [
    'S00F000068656C6C6F202020202000003C',
    'NOTAREC',
    'S1130100000102030405060708090A0B0C0D0E0F00',
]

FILE_LINES = [
    'S00600004844521B',
    'S1130100000102030405060708090A0B0C0D0E0F73',
    'S1130110101112131415161718191A1B1C1D1E1F63',
    'S208010000DEADBEEFBE',
    'S307000200001234B0',
    'S5030003F9',
    'S9030000FC',
]


def test_check_line():
    assert check_line(0, GOOD_LINE) is None
    assert check_line(3, BAD_LINE) == Mismatch(3, 0x61, 0xFF)
    assert check_line(0, 'NOTAREC') is None
    assert check_line(0, 'S9') is None
    assert check_line(0, 'S91') is None


def test_repair_line():
    assert repair_line(BAD_LINE) == GOOD_LINE
    assert repair_line(GOOD_LINE) is GOOD_LINE
    assert repair_line('NOTAREC') == 'NOTAREC'
    assert repair_line('S9') == 'S9'
    assert repair_line('S9030000FB\r\n') == 'S9030000FC\r\n'
    assert repair_line('S9030000fb') == 'S9030000FC'
    assert repair_line('S1 04 0000 01 FF') == 'S1 04 0000 01 FA'
    assert repair_line('S1 04 0000 01 F F ') == 'S1 04 0000 01 F A '


def test_scan_empty():
    assert list(scan([])) == []
    assert not scan([])
    assert len(scan([])) == 0


def test_scan_good():
    assert list(scan(FILE_LINES)) == []
    assert not scan(FILE_LINES)


def test_scan_single():
    mismatches = list(scan([BAD_LINE]))
    assert mismatches == [Mismatch(0, 0x61, 0xFF)]
    assert format(mismatches[0].expected, '02X') == '61'


def test_scan_mixed():
    result = scan(MIXED_LINES)
    assert isinstance(result, ScanResult)
    assert list(result) == [Mismatch(2, 0x73, 0x00)]
    assert len(result) == 1
    assert bool(result)


def test_scan_order():
    lines = [BAD_LINE, GOOD_LINE, 'S9030000FB', 'hello', 'S5030003F8']
    indices = [mismatch.index for mismatch in scan(lines)]
    assert indices == [0, 2, 4]


def test_scan_restartable():
    lines = [BAD_LINE, 'S9030000FB']
    result = scan(lines)
    assert list(result) == list(result)
    assert len(result) == 2

    lines[0] = GOOD_LINE
    assert [mismatch.index for mismatch in result] == [1]


def test_scan_repr():
    assert repr(scan([BAD_LINE])) == (
        '<ScanResult [Mismatch(index=0, expected=97, actual=255)]>'
    )


def test_repair_scenario():
    assert compute_checksums(GOOD_LINE) == (0x61, 0x61)

    result = repair([BAD_LINE])
    assert result == RepairResult([GOOD_LINE], 1)
    assert result.lines[0] == GOOD_LINE


def test_repair_mixed():
    lines = list(MIXED_LINES)
    result = repair(lines)
    assert result.count == 1
    assert result.lines[0] == MIXED_LINES[0]
    assert result.lines[1] == MIXED_LINES[1]
    assert result.lines[2] == DATA_0100
    assert lines == MIXED_LINES


def test_repair_nothing():
    result = repair(FILE_LINES)
    assert result.count == 0
    assert result.lines == FILE_LINES
    assert result.lines is not FILE_LINES


def test_repair_fixpoint():
    lines = [BAD_LINE, 'NOTAREC', 'S9030000FB', 'S9', 'S91', 'S1ABCD00']
    result = repair(lines)
    assert result.count == 3
    assert list(scan(result.lines)) == []

    again = repair(result.lines)
    assert again.count == 0
    assert again.lines == result.lines


def test_repair_generator():
    result = repair(line for line in [BAD_LINE, GOOD_LINE])
    assert result == RepairResult([GOOD_LINE, GOOD_LINE], 1)


def test_repair_untouched():
    lines = ['S9', 'NOTAREC', '', 'S91', 'S9123']
    result = repair(lines)
    assert result.count == 0
    assert result.lines == lines


def test_find_address_scenario():
    lines = ['S00600004844521B', DATA_0100, 'S9030000FC']
    assert find_address(lines, 0x100) == 1
    assert find_address(lines, 0x105) == 1
    assert find_address(lines, 0x10F) == 1
    assert find_address(lines, 0x110) is None
    assert find_address(lines, 0x200) is None
    assert find_address(lines, 0) is None


def test_find_address_widths():
    assert find_address(FILE_LINES, 0x0115) == 2
    assert find_address(FILE_LINES, 0x010000) == 3
    assert find_address(FILE_LINES, 0x010003) == 3
    assert find_address(FILE_LINES, 0x010004) is None
    assert find_address(FILE_LINES, 0x00020001) == 4
    assert find_address(FILE_LINES, 0x00020002) is None


def test_find_address_first_match():
    lines = [DATA_0100, DATA_0100]
    assert find_address(lines, 0x100) == 0


def test_find_address_ignores_bad_checksum():
    lines = ['NOTAREC', 'S1130100000102030405060708090A0B0C0D0E0F00']
    assert find_address(lines, 0x101) == 1


def test_find_address_negative():
    assert find_address(FILE_LINES, -1) is None


def test_find_address_empty():
    assert find_address([], 0) is None


class TestSrecDocument:

    def test_line_count(self):
        document = SrecDocument(list(FILE_LINES))
        assert document.line_count == len(FILE_LINES)

    def test_scan(self):
        document = SrecDocument(list(MIXED_LINES))
        assert list(document.scan()) == [Mismatch(2, 0x73, 0x00)]

    def test_repair_in_place(self):
        lines = list(MIXED_LINES)
        document = SrecDocument(lines)
        assert document.repair() == 1
        assert lines[2] == DATA_0100
        assert lines[:2] == MIXED_LINES[:2]
        assert document.repair() == 0
        assert not document.scan()

    def test_find_address(self):
        document = SrecDocument(list(FILE_LINES))
        assert document.find_address(0x0100) == 1
        assert document.find_address(0x0200) is None


def compute_checksums(line):
    return compute_expected_checksum(line), extract_declared_checksum(line)


@pytest.mark.parametrize('line', FILE_LINES)
def test_file_lines_valid(line):
    expected, actual = compute_checksums(line)
    assert expected == actual
