import pytest
from omni_codegen.address import (ADDRESS_LENGTH, Address, AddressError,
                                  InvalidEncodingError, MissingPrefixError,
                                  parse_address)


def test_parse_address_ok():
    addr = parse_address("0x000102030405060708090a0b0c0d0e0f10111213")
    assert bytes(addr) == bytes(range(20))
    assert addr == Address(bytes(range(20)))
    assert addr.hex() == "0x000102030405060708090a0b0c0d0e0f10111213"
    assert str(addr) == addr.hex()


def test_parse_address_accepts_uppercase_hex():
    addr = parse_address("0x" + "AB" * ADDRESS_LENGTH)
    assert bytes(addr) == b"\xab" * ADDRESS_LENGTH


def test_parse_address_missing_prefix():
    with pytest.raises(MissingPrefixError) as ei:
        parse_address("0000000000000000000000000000000000000000")
    assert ei.value.kind == "missing_prefix"
    assert isinstance(ei.value, AddressError)
    assert isinstance(ei.value, ValueError)


def test_parse_address_uppercase_prefix_is_missing_prefix():
    with pytest.raises(MissingPrefixError):
        parse_address("0X" + "00" * ADDRESS_LENGTH)


def test_parse_address_too_short():
    with pytest.raises(InvalidEncodingError) as ei:
        parse_address("0x0000000000000000")
    assert ei.value.kind == "invalid_encoding"


@pytest.mark.parametrize(
    "value",
    [
        "0x",
        "0x" + "00" * 21,
        "0x" + "0" * 39,
        "0x" + "zz" * ADDRESS_LENGTH,
        "0x " + "00" * 19 + "0",
        "0x0x" + "00" * 19,
    ],
)
def test_parse_address_invalid_encoding(value):
    with pytest.raises(InvalidEncodingError):
        parse_address(value)


def test_address_requires_twenty_bytes():
    with pytest.raises(InvalidEncodingError):
        Address(b"\x00" * 19)
    assert Address.from_hex("0x" + "11" * ADDRESS_LENGTH) == Address(b"\x11" * ADDRESS_LENGTH)
    assert len({Address(b"\x01" * 20), Address(bytearray(b"\x01" * 20))}) == 1
