import pytest

from lzhkit.crc16 import Crc16, crc16

TEST_DATA = [
    (bytes([0xe5, 0x8a, 0xa7, 0x73, 0x01, 0xec, 0x50, 0xe2,
            0x3e, 0x0e, 0x02, 0x9e, 0x38, 0xe0, 0xc3, 0x78]), 0xBF43, 97),
    (bytes([0xb2, 0x4b, 0x17, 0x9f, 0x4d, 0x13, 0x4a, 0x3e,
            0xaa, 0x93, 0x5e, 0xcb, 0xff, 0xc5, 0x05, 0x38]), 0x5D13, 57),
    (bytes([0xc1, 0x87, 0x63, 0xa2, 0x62, 0xbd, 0x50, 0x38,
            0x18, 0x54, 0x78, 0x15, 0xaa, 0x52, 0x03, 0xa3]), 0xDF44, 101),
    (bytes([0x28, 0x8f, 0xf6, 0x98, 0xb5, 0xac, 0xc0, 0x72,
            0xaa, 0x28, 0x89, 0x71, 0x38, 0xfe, 0xde, 0xba]), 0xBF06, 36),
    (bytes([0x39, 0x97, 0x18, 0x48, 0xc5, 0x08, 0xea, 0x37,
            0xdb, 0xe4, 0xfb, 0x74, 0x91, 0xfa, 0x4e, 0x8f]), 0x7EBA, 63),
    (bytes([0x55, 0x70, 0xd5, 0x25, 0x77, 0xab, 0x3e, 0x89,
            0x1e, 0xc4, 0x25, 0x0b, 0xe0, 0x26, 0xb4, 0xb3]), 0x3396, 25),
    (bytes([0xde, 0xfb, 0x9d, 0x4b, 0xa4, 0x70, 0x0e, 0xf0,
            0xca, 0xcb, 0x60, 0xd4, 0x95, 0x27, 0xa9, 0x67]), 0xBFCA, 0),
    (bytes([0xce, 0xdc, 0x03, 0x02, 0xf0, 0x23, 0xcd, 0x77,
            0x03, 0x74, 0xd0, 0xa3, 0x42, 0x45, 0x4f, 0x6a]), 0xB42E, 127),
    (bytes([0xff] * 16), 0x7040, 8),
    (bytes([0x00] * 16), 0x0000, 77),
]


@pytest.mark.parametrize("data, expected, change_bit", TEST_DATA)
def test_crc16_pass(data, expected, change_bit):
    assert crc16(data) == expected


@pytest.mark.parametrize("chunk, case", [(i + 1, case) for i, case in enumerate(TEST_DATA)])
def test_crc16_progressive(chunk, case):
    data, expected, _ = case
    running = Crc16()
    for start in range(0, len(data), chunk):
        running.update(data[start:start + chunk])
    assert running.value == expected


@pytest.mark.parametrize("chunk, case", [(i + 1, case) for i, case in enumerate(TEST_DATA)])
def test_crc16_progressive_functional(chunk, case):
    data, expected, _ = case
    crc = 0
    for start in range(0, len(data), chunk):
        crc = crc16(data[start:start + chunk], crc)
    assert crc == expected


@pytest.mark.parametrize("data, expected, change_bit", TEST_DATA)
def test_crc16_fail(data, expected, change_bit):
    changed = bytearray(data)
    changed[change_bit // 8] ^= 1 << (change_bit % 8)
    assert crc16(changed) != expected
    assert crc16(data) == expected


def test_crc16_empty():
    assert crc16(b"") == 0
    assert Crc16().update(b"") == 0


def test_update_returns_value_and_int_conversion():
    data, expected, _ = TEST_DATA[0]
    running = Crc16()
    assert running.update(data) == expected
    assert int(running) == expected


def test_initial_value_is_continued():
    data, expected, _ = TEST_DATA[1]
    partial = crc16(data[:5])
    assert Crc16(partial).update(data[5:]) == expected