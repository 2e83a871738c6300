################################################################################
# File Name: test_secrets_loader.py
# Purpose/Description: Tests for .env loading and placeholder resolution
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
Tests for the secrets_loader module.

Run with:
    pytest tests/test_secrets_loader.py -v
"""

import json
import os

import pytest

from common.secrets_loader import loadEnvFile, loadJsonFile, resolveSecrets


class TestLoadEnvFile:
    """Tests for loadEnvFile()."""

    def test_loadEnvFile_newVariables_areExported(self, tmp_path, cleanEnv):
        """
        Given: A .env file with two variables
        When: loadEnvFile() is called
        Then: Both names are returned and set in the environment
        """
        envFile = tmp_path / '.env'
        envFile.write_text('NAVLINK_DEVICE_NAME=Dash_01\nNAVLINK_QUEUE=8\n', encoding='utf-8')

        names = loadEnvFile(str(envFile))

        assert names == ['NAVLINK_DEVICE_NAME', 'NAVLINK_QUEUE']
        assert os.environ['NAVLINK_DEVICE_NAME'] == 'Dash_01'

    def test_loadEnvFile_existingVariable_isNotOverridden(self, tmp_path, cleanEnv, monkeypatch):
        """
        Given: A variable already in the environment
        When: A .env file defines it differently
        Then: The environment value wins
        """
        monkeypatch.setenv('NAVLINK_DEVICE_NAME', 'FromShell')
        envFile = tmp_path / '.env'
        envFile.write_text('NAVLINK_DEVICE_NAME=FromFile\n', encoding='utf-8')

        loadEnvFile(str(envFile))

        assert os.environ['NAVLINK_DEVICE_NAME'] == 'FromShell'

    def test_loadEnvFile_missingFile_returnsEmpty(self, tmp_path):
        """
        Given: A path with no file
        When: loadEnvFile() is called
        Then: An empty list
        """
        assert loadEnvFile(str(tmp_path / 'absent.env')) == []


class TestResolveSecrets:
    """Tests for resolveSecrets()."""

    def test_resolveSecrets_nestedPlaceholders_areResolved(self, monkeypatch):
        """
        Given: Placeholders in nested dicts and lists
        When: resolveSecrets() is called
        Then: Each is replaced by the environment value
        """
        monkeypatch.setenv('NAVLINK_DEVICE_NAME', 'Dash_01')

        result = resolveSecrets({
            'delivery': {'deviceName': '${NAVLINK_DEVICE_NAME}'},
            'names': ['${NAVLINK_DEVICE_NAME}-a', 'plain'],
            'queueCapacity': 20
        })

        assert result == {
            'delivery': {'deviceName': 'Dash_01'},
            'names': ['Dash_01-a', 'plain'],
            'queueCapacity': 20
        }

    def test_resolveSecrets_unsetWithDefault_usesDefault(self, monkeypatch):
        """
        Given: An unset variable with a default
        When: resolveSecrets() is called
        Then: The default is used
        """
        monkeypatch.delenv('NAVLINK_LOG_LEVEL', raising=False)

        assert resolveSecrets('${NAVLINK_LOG_LEVEL:DEBUG}') == 'DEBUG'

    def test_resolveSecrets_emptyDefault_isAllowed(self, monkeypatch):
        """
        Given: An unset variable with an empty default
        When: resolveSecrets() is called
        Then: The empty string is used
        """
        monkeypatch.delenv('NAVLINK_DEVICE_ADDRESS', raising=False)

        assert resolveSecrets('${NAVLINK_DEVICE_ADDRESS:}') == ''

    def test_resolveSecrets_unsetWithoutDefault_keepsPlaceholder(self, monkeypatch, caplog):
        """
        Given: An unset variable and no default
        When: resolveSecrets() is called
        Then: The placeholder stays and a warning is logged
        """
        monkeypatch.delenv('NAVLINK_NOPE', raising=False)

        result = resolveSecrets('${NAVLINK_NOPE}')

        assert result == '${NAVLINK_NOPE}'
        assert 'NAVLINK_NOPE' in caplog.text


class TestLoadJsonFile:
    """Tests for loadJsonFile()."""

    def test_loadJsonFile_validFile_returnsData(self, tmp_path):
        """
        Given: A UTF-8 JSON file with non-ASCII text
        When: loadJsonFile() is called
        Then: The parsed document is returned
        """
        path = tmp_path / 'patterns.json'
        path.write_text(json.dumps({'keyword': 'Straße'}, ensure_ascii=False), encoding='utf-8')

        assert loadJsonFile(path) == {'keyword': 'Straße'}

    def test_loadJsonFile_missingFile_raisesFileNotFound(self, tmp_path):
        """
        Given: A missing path
        When: loadJsonFile() is called
        Then: FileNotFoundError
        """
        with pytest.raises(FileNotFoundError):
            loadJsonFile(tmp_path / 'absent.json')

    def test_loadJsonFile_brokenJson_raisesDecodeError(self, tmp_path):
        """
        Given: A file with invalid JSON
        When: loadJsonFile() is called
        Then: json.JSONDecodeError
        """
        path = tmp_path / 'broken.json'
        path.write_text('{broken', encoding='utf-8')

        with pytest.raises(json.JSONDecodeError):
            loadJsonFile(path)
