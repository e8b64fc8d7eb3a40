import pytest

from x402check.ingest.detector import detect_format
from x402check.models import ConfigFormat

from conftest import PAY_TO, VALID_CONFIG


def test_current_shape():
    assert detect_format(VALID_CONFIG) is ConfigFormat.CURRENT


def test_entry_list_without_markers_is_previous():
    document = {'x402Version': 1, 'accepts': []}
    assert detect_format(document) is ConfigFormat.PREVIOUS
    assert detect_format({'accepts': [{}]}) is ConfigFormat.PREVIOUS


@pytest.mark.parametrize('marker', ['payTo', 'amount', 'maxAmountRequired'])
def test_root_payment_fields_are_flat_legacy(marker):
    assert detect_format({marker: 'x'}) is ConfigFormat.FLAT_LEGACY


def test_entry_list_wins_over_flat_markers():
    document = {'accepts': [], 'payTo': PAY_TO}
    assert detect_format(document) is ConfigFormat.PREVIOUS


@pytest.mark.parametrize(
    'document',
    [
        {},
        {'x402Version': 2},
        {'accepts': 'nope', 'x402Version': 2, 'resource': {}},
        {'accepts': {'scheme': 'exact'}},
        [],
        'text',
        None,
        42,
    ],
)
def test_unrecognized(document):
    assert detect_format(document) is ConfigFormat.UNRECOGNIZED


def test_values_are_never_inspected():
    document = {'x402Version': 'garbage', 'resource': 17, 'accepts': [None, 3]}
    assert detect_format(document) is ConfigFormat.CURRENT
