import json

import pytest

from x402check import ConfigFormat, ErrorCode, ValidationOptions, apply_strict, detect, normalize, validate
from x402check.registry.networks import build_registry

from conftest import BASE_USDC, PAY_TO, SYSTEM_PROGRAM, VALID_CONFIG


def test_scenario_valid_config(valid_config):
    result = validate(valid_config)
    assert result.valid
    assert result.format is ConfigFormat.CURRENT
    assert result.errors == []
    assert result.warnings == []
    assert result.normalized.accepts[0].amount == '1000000'


def test_json_text_and_bytes_are_accepted(valid_config):
    text = json.dumps(valid_config)
    assert validate(text).valid
    assert validate(text.encode('utf-8')).valid


def test_scenario_empty_entry_list(valid_config):
    valid_config['accepts'] = []
    result = validate(valid_config)
    assert not result.valid
    assert [issue.code for issue in result.errors] == [ErrorCode.EMPTY_ACCEPTS]


def test_scenario_flipped_checksum_case(valid_config):
    flipped = PAY_TO[:3] + PAY_TO[3].swapcase() + PAY_TO[4:]
    valid_config['accepts'][0]['payTo'] = flipped

    result = validate(valid_config)
    assert not result.valid
    assert len(result.errors) == 1
    issue = result.errors[0]
    assert issue.code is ErrorCode.BAD_EVM_CHECKSUM
    assert issue.field == 'entries[0].payTo'
    assert issue.fix == PAY_TO


def test_scenario_all_ones_solana_recipient(solana_config):
    assert solana_config['accepts'][0]['payTo'] == SYSTEM_PROGRAM

    result = validate(solana_config)
    assert result.valid
    assert result.errors == []
    assert [issue.code for issue in result.warnings] == [ErrorCode.NO_SOLANA_CHECKSUM]
    assert result.warnings[0].field == 'entries[0].payTo'


def test_scenario_flat_legacy():
    document = {
        'scheme': 'exact',
        'network': 'eip155:8453',
        'amount': '1000000',
        'asset': BASE_USDC,
        'payTo': PAY_TO,
        'maxTimeoutSeconds': 60,
        'resource': 'https://example.com',
    }
    result = validate(document)
    assert result.format is ConfigFormat.FLAT_LEGACY
    assert result.valid
    assert len(result.normalized.accepts) == 1
    assert [issue.code for issue in result.warnings] == [ErrorCode.LEGACY_FORMAT]


def test_previous_format_collects_translation_warnings():
    document = {
        'x402Version': 1,
        'accepts': [
            {
                'scheme': 'exact',
                'network': 'base',
                'maxAmountRequired': '10000',
                'resource': 'https://example.com/weather',
                'asset': BASE_USDC,
                'payTo': PAY_TO,
                'maxTimeoutSeconds': 60,
            }
        ],
    }
    result = validate(document)
    assert result.valid
    assert result.format is ConfigFormat.PREVIOUS
    assert [issue.code for issue in result.warnings] == [
        ErrorCode.LEGACY_FORMAT,
        ErrorCode.LEGACY_FIELD,
        ErrorCode.NETWORK_ALIAS,
    ]


@pytest.mark.parametrize(
    'raw, code',
    [
        ('', ErrorCode.INVALID_JSON),
        ('{not valid json', ErrorCode.INVALID_JSON),
        ('[' * 100000, ErrorCode.INVALID_JSON),
        (b'\xff\xfe', ErrorCode.INVALID_JSON),
        ('[]', ErrorCode.NOT_OBJECT),
        ('"text"', ErrorCode.NOT_OBJECT),
        ('null', ErrorCode.NOT_OBJECT),
        ([], ErrorCode.NOT_OBJECT),
        ('{}', ErrorCode.UNKNOWN_FORMAT),
        ({}, ErrorCode.UNKNOWN_FORMAT),
        ({'accepts': 'nope'}, ErrorCode.INVALID_ACCEPTS),
    ],
)
def test_input_errors_are_single_and_fatal(raw, code):
    result = validate(raw)
    assert not result.valid
    assert result.format is ConfigFormat.UNRECOGNIZED
    assert result.normalized is None
    assert [issue.code for issue in result.errors] == [code]
    assert result.warnings == []


@pytest.mark.parametrize('raw', [123, None, 1.5, object()])
def test_unsupported_input_type_raises(raw):
    with pytest.raises(TypeError):
        validate(raw)


def test_structural_errors_do_not_stop_entry_rules(valid_config):
    del valid_config['x402Version']
    valid_config['resource'] = {'url': 'https://example.com'}
    valid_config['accepts'][0]['amount'] = '0'
    result = validate(valid_config)

    assert result.format is ConfigFormat.PREVIOUS
    error_codes = [issue.code for issue in result.errors]
    assert error_codes == [ErrorCode.MISSING_VERSION, ErrorCode.ZERO_AMOUNT]


def test_issues_follow_entry_order(valid_config):
    second = dict(valid_config['accepts'][0], payTo=PAY_TO.lower(), amount='-1')
    first = dict(valid_config['accepts'][0], network='nowhere')
    valid_config['accepts'] = [first, second]

    result = validate(valid_config)
    assert [issue.field for issue in result.errors] == ['entries[0].network', 'entries[1].amount']
    assert [issue.field for issue in result.warnings] == ['entries[1].payTo']


def test_every_entry_error_is_collected():
    document = {'x402Version': 2, 'resource': {'url': 'https://example.com'}, 'accepts': [{}, {'scheme': 'exact'}]}
    result = validate(document)
    assert len(result.errors) == 9
    assert result.errors[0].field == 'entries[0].scheme'
    assert result.errors[-1].field == 'entries[1].payTo'


@pytest.mark.parametrize(
    'document',
    [
        VALID_CONFIG,
        {'accepts': [None, 1, 'x', {'amount': {'nested': True}}]},
        {'payTo': ['list'], 'amount': None},
        {'x402Version': 2, 'resource': 5, 'accepts': [{'network': 'eip155:1', 'payTo': 'O' * 40, 'asset': 7}]},
        {'x402Version': 2, 'resource': {}, 'accepts': [{'network': 'solana:abc', 'payTo': 'I' * 60}]},
        {'x402Version': 2, 'accepts': [{'amount': '9e99999999999999999999'}, {'amount': '-9e99999999999999999999'}]},
    ],
)
def test_valid_flag_tracks_error_count(document):
    result = validate(document)
    assert result.valid == (len(result.errors) == 0)
    assert all(issue.severity == 'error' for issue in result.errors)
    assert all(issue.severity == 'warning' for issue in result.warnings)


def test_results_are_deterministic(valid_config):
    valid_config['accepts'][0]['payTo'] = PAY_TO.lower()
    assert validate(valid_config) == validate(valid_config)


def test_strict_mode_only_reclassifies(valid_config):
    valid_config['accepts'][0]['payTo'] = PAY_TO.lower()
    valid_config['accepts'][0]['network'] = 'base'

    lenient = validate(valid_config)
    strict = validate(valid_config, strict=True)

    assert lenient.valid
    assert len(lenient.warnings) == 2
    assert not strict.valid
    assert strict.warnings == []
    assert [issue.code for issue in strict.errors] == [issue.code for issue in lenient.warnings]
    assert all(issue.severity == 'error' for issue in strict.errors)
    assert apply_strict(lenient) == strict


def test_strict_mode_option_forms(valid_config):
    valid_config['accepts'][0]['payTo'] = PAY_TO.lower()
    assert not validate(valid_config, ValidationOptions(strict=True)).valid
    assert not validate(valid_config, {'strict': True}).valid
    assert validate(valid_config, {'strict': True}, strict=False).valid
    with pytest.raises(TypeError):
        validate(valid_config, 'strict')


def test_strict_mode_on_clean_config_changes_nothing(valid_config):
    assert validate(valid_config, strict=True) == validate(valid_config)


def test_custom_registry_is_used(valid_config):
    registry = build_registry()
    assert validate(valid_config, registry=registry).valid


def test_detect():
    assert detect(VALID_CONFIG) is ConfigFormat.CURRENT
    assert detect(json.dumps(VALID_CONFIG)) is ConfigFormat.CURRENT
    assert detect({'payTo': PAY_TO}) is ConfigFormat.FLAT_LEGACY
    assert detect('{broken') is ConfigFormat.UNRECOGNIZED
    assert detect(42) is ConfigFormat.UNRECOGNIZED


def test_normalize_returns_canonical_config():
    config = normalize({'payTo': PAY_TO, 'amount': '5', 'network': 'eip155:8453'})
    assert config.x402_version == 2
    assert config.accepts[0].pay_to == PAY_TO
    assert normalize('{}') is None


def test_non_object_entries_are_reported_once_each(valid_config):
    valid_config['accepts'] = ['oops', valid_config['accepts'][0], None]
    result = validate(valid_config)

    assert not result.valid
    assert [(issue.code, issue.field) for issue in result.errors] == [
        (ErrorCode.INVALID_ACCEPTS, 'entries[0]'),
        (ErrorCode.INVALID_ACCEPTS, 'entries[2]'),
    ]
    assert len(result.normalized.accepts) == 3


def test_current_version_list_without_resource_is_not_legacy(valid_config):
    del valid_config['resource']
    result = validate(valid_config)

    assert result.valid
    assert result.format is ConfigFormat.PREVIOUS
    assert result.warnings == []


def test_overflowing_exponent_amount_does_not_raise(valid_config):
    valid_config['accepts'][0]['amount'] = '9e99999999999999999999'
    result = validate(valid_config)

    assert [issue.code for issue in result.errors] == [ErrorCode.AMOUNT_EXPONENT]
    assert result.errors[0].field == 'entries[0].amount'
