"""Utility functions for dropsim simulations."""

from .io import history_to_frame, load_params, params_from_dict, save_history
from .validation import (
    validate_finite,
    validate_non_negative,
    validate_params,
    validate_positive,
)

__all__ = [
    "history_to_frame",
    "save_history",
    "load_params",
    "params_from_dict",
    "validate_finite",
    "validate_positive",
    "validate_non_negative",
    "validate_params",
]
