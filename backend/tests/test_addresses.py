import pytest

from x402check.utils.addresses import has_case_information, is_checksum_address, to_checksum_address

EIP55_REFERENCE = [
    "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
    "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
    "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
]


@pytest.mark.parametrize("address", EIP55_REFERENCE)
def test_reference_addresses_round_trip(address):
    assert to_checksum_address(address.lower()) == address
    assert to_checksum_address(address.upper().replace("0X", "0x")) == address


@pytest.mark.parametrize("address", EIP55_REFERENCE)
def test_encoding_is_idempotent(address):
    once = to_checksum_address(address)
    assert to_checksum_address(once) == once


def test_prefix_is_optional_on_input():
    address = EIP55_REFERENCE[0]
    assert to_checksum_address(address[2:].lower()) == address


def test_digits_only_address_is_its_own_encoding():
    address = "0x" + "0" * 39 + "1"
    assert to_checksum_address(address) == address
    assert is_checksum_address(address)


@pytest.mark.parametrize(
    "bad",
    ["", "0x", "0x1234", "0x" + "g" * 40, "0x" + "a" * 41],
)
def test_rejects_malformed(bad):
    with pytest.raises(ValueError):
        to_checksum_address(bad)


def test_rejects_null():
    with pytest.raises(ValueError):
        to_checksum_address(None)


def test_is_checksum_address_detects_flipped_case():
    good = EIP55_REFERENCE[0]
    flipped = good[:3] + good[3].swapcase() + good[4:]
    assert is_checksum_address(good)
    assert not is_checksum_address(flipped)
    assert not is_checksum_address(good.lower())
    assert not is_checksum_address("not an address")


def test_case_information():
    assert has_case_information(EIP55_REFERENCE[0])
    assert not has_case_information(EIP55_REFERENCE[0].lower())
    assert not has_case_information("0x" + EIP55_REFERENCE[0][2:].upper())
