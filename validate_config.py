#!/usr/bin/env python3
################################################################################
# File Name: validate_config.py
# Purpose/Description: Validate NavLink configuration before running
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
Configuration validation script.

Checks the application config, every pattern section it names, the
Python dependencies and the project layout, then renders one sample
instruction in the active wire format.

Usage:
    python validate_config.py
    python validate_config.py --config path/to/navlink_config.json
    python validate_config.py --verbose
"""

import argparse
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

PROJECT_ROOT = Path(__file__).resolve().parent

srcPath = PROJECT_ROOT / 'src'
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

from navlink.config.exceptions import PatternConfigError  # noqa: E402
from navlink.config.loader import loadNavlinkConfig, loadPatternConfigSet  # noqa: E402
from navlink.config.types import PatternConfigSet  # noqa: E402
from navlink.parsing.text_parser import NavigationTextParser  # noqa: E402
from navlink.transform.exceptions import PayloadOverflowError  # noqa: E402
from navlink.transform.helpers import createTransformer  # noqa: E402

SAMPLE_INSTRUCTION = 'Turn left in 200 m onto Main St'

# Distribution names on the package index
REQUIRED_DISTRIBUTIONS = ('pydantic', 'python-dotenv')

REQUIRED_PATHS = (
    'src/common',
    'src/navlink',
    'src/navlink_config.json',
    'src/patterns/mcu_formats.json',
    'tests',
    'pyproject.toml',
)


def printHeader(message: str) -> None:
    """Print a section header."""
    print()
    print("=" * 60)
    print(f"  {message}")
    print("=" * 60)


def printStatus(label: str, status: bool, details: str = "") -> None:
    """One report line: [OK] or [X], label, optional details."""
    icon = "[OK]" if status else "[X]"
    detail = f" - {details}" if details else ""
    print(f"  {icon} {label}{detail}")


def validateEnvironment(envPath: str, verbose: bool = False) -> bool:
    """Report the .env file and the NAVLINK_* overrides in effect."""
    printHeader("Environment Variables")

    if Path(envPath).exists():
        printStatus(".env file exists", True, envPath)
    else:
        # Optional; every placeholder in the shipped config has a default
        printStatus(".env file exists", True, "not present, using defaults")

    overrides = sorted(name for name in os.environ if name.startswith('NAVLINK_'))
    if verbose:
        for name in overrides:
            print(f"    - {name}")
    printStatus("NAVLINK_* overrides", True, f"{len(overrides)} set")
    return True


def validateConfig(configPath: str, envPath: str, verbose: bool = False) -> dict[str, Any] | None:
    """Load and validate the application config."""
    printHeader("Configuration File")

    if not Path(configPath).exists():
        printStatus("Config file exists", False, f"{configPath} not found")
        return None

    printStatus("Config file exists", True, configPath)

    try:
        config = loadNavlinkConfig(configPath, envPath)
    except PatternConfigError as e:
        printStatus("Configuration valid", False, e.message)
        for field in e.missingFields:
            print(f"    - missing: {field}")
        for field in e.invalidFields:
            print(f"    - invalid: {field}")
        return None

    printStatus("Config format valid", True)
    printStatus("Required fields present", True)
    printStatus("Delivery target", True, config['delivery']['deviceName'])

    if verbose:
        print()
        print("  Configuration sections:")
        for key in config.keys():
            if not key.startswith('_'):
                print(f"    - {key}")

    return config


def validatePatterns(config: dict[str, Any], verbose: bool = False) -> PatternConfigSet | None:
    """Build every pattern section into its model."""
    printHeader("Pattern Configuration")

    try:
        patternSet = loadPatternConfigSet(config)
    except PatternConfigError as e:
        printStatus("Pattern sections valid", False, e.message)
        for field in e.missingFields + e.invalidFields:
            print(f"    - {field}")
        return None

    printStatus("Pattern sections valid", True)
    printStatus("Navigation apps", True, f"{len(patternSet.appPatterns.getEnabledApps())} enabled")
    printStatus("Device profiles", True, f"{len(patternSet.deviceProfiles.profiles)} defined")
    printStatus("Notification types", True, f"{len(patternSet.notificationTypes.getEnabledTypes())} enabled")
    printStatus("Active format", True, patternSet.mcuFormats.activeFormat)

    if verbose:
        print()
        print("  Formats:")
        for name, mcuFormat in patternSet.mcuFormats.formats.items():
            print(f"    - {name}: family={mcuFormat.family} maxPayload={mcuFormat.maxPayload}")

    return patternSet


def validateSampleRender(patternSet: PatternConfigSet, verbose: bool = False) -> bool:
    """Parse and render a sample instruction with the active format."""
    printHeader("Sample Render")

    textParser = NavigationTextParser(patternSet.navigationKeywords.resolve())
    navigationData = textParser.parse(SAMPLE_INSTRUCTION)
    if navigationData is None:
        printStatus("Sample parsed", False, SAMPLE_INSTRUCTION)
        return False
    printStatus("Sample parsed", True, f"direction={navigationData.direction.value}")

    try:
        transformer = createTransformer(patternSet.mcuFormats.getActiveFormat())
        payload = transformer.transformNavigation(navigationData)
    except (PatternConfigError, PayloadOverflowError) as e:
        printStatus("Sample rendered", False, str(e))
        return False

    printStatus("Sample rendered", True, f"{transformer.payloadSize(payload)} bytes")
    if verbose:
        print(f"    {payload}")
    return True


def validateDependencies(verbose: bool = False) -> bool:
    """Report the installed version of each runtime distribution."""
    printHeader("Dependencies")

    missing = []
    for distribution in REQUIRED_DISTRIBUTIONS:
        try:
            installed = version(distribution)
        except PackageNotFoundError:
            missing.append(distribution)
            printStatus(distribution, False, "not installed")
            continue
        printStatus(distribution, True, installed if verbose else "")

    if missing:
        print()
        print(f"  To fix: pip install -e .   (missing: {', '.join(missing)})")

    return not missing


def validateProjectStructure(verbose: bool = False) -> bool:
    """Check that the files the CLI expects are present next to this script."""
    printHeader("Project Structure")

    absent = [path for path in REQUIRED_PATHS if not (PROJECT_ROOT / path).exists()]
    for path in REQUIRED_PATHS:
        printStatus(path, path not in absent)

    return not absent


def main(argv: list[str] | None = None) -> int:
    """Run every check and print a summary; returns the process exit code."""
    parser = argparse.ArgumentParser(description='Validate NavLink configuration')
    parser.add_argument('--config', '-c', default=str(PROJECT_ROOT / 'src' / 'navlink_config.json'),
                        help='Path to configuration file')
    parser.add_argument('--env-file', '-e', default=str(PROJECT_ROOT / '.env'),
                        help='Path to environment file')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Show detailed output')
    args = parser.parse_args(argv)

    print()
    print("NavLink Configuration Validation")
    print("================================")

    checks = [
        ('Project Structure', validateProjectStructure(args.verbose)),
        ('Dependencies', validateDependencies(args.verbose)),
        ('Environment', validateEnvironment(args.env_file, args.verbose)),
    ]

    config = validateConfig(args.config, args.env_file, args.verbose)
    checks.append(('Configuration', config is not None))

    patternSet = validatePatterns(config, args.verbose) if config is not None else None
    checks.append(('Patterns', patternSet is not None))

    if patternSet is not None:
        checks.append(('Sample Render', validateSampleRender(patternSet, args.verbose)))

    printHeader("Summary")
    for name, passed in checks:
        printStatus(name, passed)

    failed = [name for name, passed in checks if not passed]
    print()
    if failed:
        print(f"{len(failed)} of {len(checks)} checks failed: {', '.join(failed)}")
        return 1

    print(f"All {len(checks)} checks passed.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
