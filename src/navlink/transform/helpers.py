################################################################################
# File Name: helpers.py
# Purpose/Description: Transformer factory and active-format selection
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
Transformer helper functions.

Provides:
- createTransformer(): factory from an MCUFormat's family
- TransformerSelector: the transformer for the active format of the current
  config snapshot, so switching activeFormat needs no other component to
  know which format is in use
"""

import logging
import threading

from navlink.config.exceptions import PatternConfigError
from navlink.config.store import ConfigStore
from navlink.config.types import MCUFormat

from .base import DataTransformer
from .compact import CompactTransformer
from .esp32 import Esp32JsonTransformer

logger = logging.getLogger(__name__)

TRANSFORMER_FAMILIES: dict[str, type[DataTransformer]] = {
    Esp32JsonTransformer.family: Esp32JsonTransformer,
    CompactTransformer.family: CompactTransformer,
}


def createTransformer(mcuFormat: MCUFormat) -> DataTransformer:
    """
    Create the transformer for a format's family.

    Args:
        mcuFormat: Wire format configuration

    Returns:
        DataTransformer bound to the format

    Raises:
        PatternConfigError: If the family is not supported
    """
    transformerClass = TRANSFORMER_FAMILIES.get(mcuFormat.family)
    if transformerClass is None:
        raise PatternConfigError(
            f"Unknown transformer family: '{mcuFormat.family}'. "
            f"Must be one of: {', '.join(TRANSFORMER_FAMILIES)}",
            invalidFields=[f"mcuFormats.formats.{mcuFormat.name}.family"]
        )

    logger.debug(f"Created transformer | family={mcuFormat.family} format={mcuFormat.name}")
    return transformerClass(mcuFormat)


class TransformerSelector:
    """Returns the transformer for the currently active MCU format."""

    def __init__(self, configStore: ConfigStore):
        self._configStore = configStore
        self._cache: dict[str, tuple[MCUFormat, DataTransformer]] = {}
        self._lock = threading.Lock()

    def current(self) -> DataTransformer:
        """
        Transformer for the active format of the current snapshot.

        Cached per format name; a replaced format definition builds a new one.

        Raises:
            PatternConfigError: If the active format's family is not supported
        """
        formats = self._configStore.get().mcuFormats
        name = formats.activeFormat
        mcuFormat = formats.getActiveFormat()

        with self._lock:
            cached = self._cache.get(name)
            if cached is not None and cached[0] == mcuFormat:
                return cached[1]

            transformer = createTransformer(mcuFormat)
            self._cache[name] = (mcuFormat, transformer)

        logger.info(f"Active transformer | format={name} family={mcuFormat.family}")
        return transformer
