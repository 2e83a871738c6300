################################################################################
# File Name: test_validate_config.py
# Purpose/Description: Tests for the configuration validation script
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
Tests for validate_config.py.

Run with:
    pytest tests/test_validate_config.py -v
"""

import sys
from pathlib import Path

projectRoot = Path(__file__).parent.parent
if str(projectRoot) not in sys.path:
    sys.path.insert(0, str(projectRoot))

from validate_config import (  # noqa: E402
    main,
    validateConfig,
    validatePatterns,
    validateSampleRender,
)


class TestValidateConfig:
    """Tests for the individual validation steps."""

    def test_validateConfig_validFile_returnsConfig(self, tempConfigFile, capsys, cleanEnv):
        """
        Given: The sample config on disk
        When: validateConfig() is called
        Then: The validated dict is returned and the device name is reported
        """
        config = validateConfig(str(tempConfigFile), str(tempConfigFile.parent / '.env'))

        assert config is not None
        assert 'ESP32_BLE' in capsys.readouterr().out

    def test_validateConfig_missingFile_returnsNone(self, tmp_path, capsys):
        """
        Given: A path with no file
        When: validateConfig() is called
        Then: None and a failure line
        """
        result = validateConfig(str(tmp_path / 'absent.json'), str(tmp_path / '.env'))

        assert result is None
        assert '[X] Config file exists' in capsys.readouterr().out

    def test_validatePatterns_defaults_reportsActiveFormat(self, tempConfigFile, capsys, cleanEnv):
        """
        Given: A validated sample config
        When: validatePatterns() is called
        Then: A pattern set with the esp32 format active
        """
        config = validateConfig(str(tempConfigFile), str(tempConfigFile.parent / '.env'))

        patternSet = validatePatterns(config)

        assert patternSet is not None
        assert patternSet.mcuFormats.activeFormat == 'esp32'
        assert '[OK] Active format - esp32' in capsys.readouterr().out

    def test_validateSampleRender_defaults_rendersPayload(self, patternSet, capsys):
        """
        Given: The default pattern set
        When: validateSampleRender() runs verbosely
        Then: The sample turn is rendered as ESP32 JSON
        """
        result = validateSampleRender(patternSet, verbose=True)

        output = capsys.readouterr().out
        assert result is True
        assert 'direction=LEFT' in output
        assert '"direction":"left"' in output


class TestMain:
    """Tests for the script's main()."""

    def test_main_validConfig_returnsZero(self, tempConfigFile, capsys, cleanEnv):
        """
        Given: The sample config and an installed project
        When: main() runs every check
        Then: Exit code 0 and the all-passed line
        """
        result = main(['--config', str(tempConfigFile), '--env-file', str(tempConfigFile.parent / '.env')])

        assert result == 0
        assert 'checks passed.' in capsys.readouterr().out

    def test_main_missingConfig_returnsOneAndNamesCheck(self, tmp_path, capsys):
        """
        Given: A config path with no file
        When: main() runs
        Then: Exit code 1 and the failed checks are named
        """
        result = main(['--config', str(tmp_path / 'absent.json'), '--env-file', str(tmp_path / '.env')])

        output = capsys.readouterr().out
        assert result == 1
        assert 'Configuration, Patterns' in output
