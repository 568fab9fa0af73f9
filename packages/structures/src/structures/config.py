"""
Structures Configuration
========================
Element rules, floating-point error policy and comparison tolerances.
Single source of truth for Vector and Matrix.

Usage:
    from structures.config import CONFIG, get
    rtol = get('comparison.rtol')

Overrides:
    load_overrides('structures.yaml')   # deep-merged into CONFIG
    STRUCTURES_CONFIG=/path/to.yaml     # merged at import
"""

import copy
import logging
import math
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)

ENV_VAR = 'STRUCTURES_CONFIG'

_DEFAULTS = {

    # =================================================================
    # Element validation
    # =================================================================
    'elements': {
        # bool is an int subclass; accepting it is opt-in
        'allow_bool': False,
    },

    # =================================================================
    # numpy floating-point error state (ignore | warn | raise | call)
    # =================================================================
    'float_errors': {
        'divide': 'ignore',
        'invalid': 'ignore',
        'over': 'ignore',
    },

    # =================================================================
    # allclose() defaults
    # =================================================================
    'comparison': {
        'rtol': 1e-09,
        'atol': 0.0,
    },

    # =================================================================
    # Element-wise transforms
    # =================================================================
    'log': {
        'default_base': math.e,
    },
}

CONFIG: Dict[str, Any] = copy.deepcopy(_DEFAULTS)


def get(path: str, default=None):
    """
    Look up a setting by its dotted key. Returns default when any segment
    is missing or a leaf is reached before the key runs out.

        get('float_errors.divide')      → 'ignore'
        get('elements.missing', False)  → False
    """
    node = CONFIG
    for part in path.split('.'):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value


def load_overrides(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Deep-merge a YAML file into CONFIG. Returns the parsed overrides.
    An empty file is a no-op; a non-mapping document raises ValueError.
    """
    with open(path) as f:
        overrides = yaml.safe_load(f) or {}
    if not isinstance(overrides, dict):
        raise ValueError(f"Config overrides must be a mapping, got {type(overrides).__name__}: {path}")
    _merge(CONFIG, overrides)
    logger.info(f"Loaded structures config overrides from {path}")
    return overrides


def reset() -> None:
    """Restore the built-in defaults."""
    CONFIG.clear()
    CONFIG.update(copy.deepcopy(_DEFAULTS))


def float_errstate() -> Dict[str, str]:
    """Keyword arguments for np.errstate() from the current config."""
    return dict(get('float_errors', {}))


if os.environ.get(ENV_VAR):
    load_overrides(os.environ[ENV_VAR])
