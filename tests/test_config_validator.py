################################################################################
# File Name: test_config_validator.py
# Purpose/Description: Tests for configuration validation and defaults
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# ================================================================================
################################################################################

"""
Tests for the config_validator module.

Run with:
    pytest tests/test_config_validator.py -v
"""

import pytest

from common.config_validator import (
    DEFAULTS,
    ConfigValidationError,
    ConfigValidator,
    getNestedValue,
    setNestedValue,
)


class TestConfigValidator:
    """Tests for ConfigValidator.validate()."""

    def test_validate_emptyConfig_appliesAllDefaults(self):
        """
        Given: An empty configuration
        When: validate() is called with the built-in rules
        Then: Every default is present, including the required device name
        """
        result = ConfigValidator().validate({})

        assert result['delivery']['deviceName'] == 'ESP32_BLE'
        assert result['delivery']['queueCapacity'] == 20
        assert result['logging']['maskPII'] is True
        assert result['patterns'] == {'files': {}, 'inline': {}}

    def test_validate_explicitValues_areKept(self):
        """
        Given: A config that sets some delivery values
        When: validate() is called
        Then: The explicit values win over defaults
        """
        result = ConfigValidator().validate({'delivery': {'queueCapacity': 5, 'autoStart': False}})

        assert result['delivery']['queueCapacity'] == 5
        assert result['delivery']['autoStart'] is False
        assert result['delivery']['maxRetryAttempts'] == 3

    def test_validate_explicitNone_isNotReplaced(self):
        """
        Given: A key present with a None value
        When: validate() is called
        Then: The None is preserved
        """
        result = ConfigValidator().validate({'delivery': {'deviceAddress': None}})

        assert result['delivery']['deviceAddress'] is None
        assert 'deviceAddress' in result['delivery']

    def test_validate_input_isNotMutated(self):
        """
        Given: A raw configuration
        When: validate() is called
        Then: The caller's dict is untouched
        """
        raw = {'delivery': {'queueCapacity': 5}}

        ConfigValidator().validate(raw)

        assert raw == {'delivery': {'queueCapacity': 5}}

    def test_validate_mutableDefault_isCopied(self):
        """
        Given: Two validations of empty configs
        When: One result's inline patterns are modified
        Then: The other result and DEFAULTS are unaffected
        """
        first = ConfigValidator().validate({})
        second = ConfigValidator().validate({})

        first['patterns']['inline']['mcuFormats'] = {}

        assert second['patterns']['inline'] == {}
        assert DEFAULTS['patterns.inline'] == {}

    def test_validate_requiredBlank_raisesWithFieldList(self):
        """
        Given: A blank required device name
        When: validate() is called
        Then: ConfigValidationError names the field
        """
        with pytest.raises(ConfigValidationError) as excInfo:
            ConfigValidator().validate({'delivery': {'deviceName': ''}})

        assert excInfo.value.missingFields == ['delivery.deviceName']
        assert 'delivery.deviceName' in str(excInfo.value)

    def test_validate_customRules_reportsAllMissing(self):
        """
        Given: Custom required keys with no defaults
        When: validate() is called on an empty config
        Then: Both keys are reported
        """
        validator = ConfigValidator(requiredKeys=['a.b', 'c'], defaults={})

        with pytest.raises(ConfigValidationError) as excInfo:
            validator.validate({})

        assert excInfo.value.missingFields == ['a.b', 'c']


class TestNestedHelpers:
    """Tests for getNestedValue() and setNestedValue()."""

    def test_getNestedValue_existingPath_returnsValue(self):
        """
        Given: A nested dict
        When: A dotted path is read
        Then: The leaf value is returned
        """
        assert getNestedValue({'delivery': {'queueCapacity': 7}}, 'delivery.queueCapacity') == 7

    def test_getNestedValue_throughNonDict_returnsNone(self):
        """
        Given: A path that crosses a scalar
        When: It is read
        Then: None
        """
        assert getNestedValue({'delivery': 5}, 'delivery.queueCapacity') is None

    def test_setNestedValue_missingParents_areCreated(self):
        """
        Given: An empty dict
        When: A deep dotted key is set
        Then: Intermediate dicts are created
        """
        config: dict = {}

        setNestedValue(config, 'simulator.connectDelaySeconds', 1.5)

        assert config == {'simulator': {'connectDelaySeconds': 1.5}}

    def test_setNestedValue_scalarParent_isReplaced(self):
        """
        Given: A scalar where a section is expected
        When: A key under it is set
        Then: The scalar becomes a dict
        """
        config = {'pipeline': 'x'}

        setNestedValue(config, 'pipeline.historySize', 10)

        assert config == {'pipeline': {'historySize': 10}}
