"""
ACH Tables Core

Configuration, exceptions and logging shared by the conversion modules.
"""

from .config import Config, ConversionConfig, get_config, set_config, load_config
from .exceptions import (
    ACHTablesException,
    ACHValidationError,
    ConfigurationException,
    ControlRecalculationFailure,
    DeepCopyFailure,
    IndexOutOfRangeError,
    InvalidInputError,
    MalformedIndexError,
    MalformedValueError,
)

__all__ = [
    "Config",
    "ConversionConfig",
    "get_config",
    "set_config",
    "load_config",
    "ACHTablesException",
    "ACHValidationError",
    "ConfigurationException",
    "ControlRecalculationFailure",
    "DeepCopyFailure",
    "IndexOutOfRangeError",
    "InvalidInputError",
    "MalformedIndexError",
    "MalformedValueError",
]
