"""
Discovery and loading of bundled reference data.

This module provides functions to:

- Load the `tissues.json` lookup of relative tissue densities
- Query the density of a single tissue

File paths are resolved using :mod:`importlib.resources`, making them portable
within installed packages or local development environments.
"""

import os
import json
import logging
from typing import Dict

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)


def load_tissue_table() -> Dict[str, Dict]:
    """
    Load the tissue lookup table from a JSON file.

    Tries to load `tissues.json` from the installed package, with a fallback
    to a local relative file during development.

    :returns: Dictionary mapping tissue keys to their properties.
    :rtype: dict[str, dict]

    :raises FileNotFoundError: If the tissues.json file cannot be found.
    :raises json.JSONDecodeError: If the file content is not valid JSON.
    """
    try:
        from importlib.resources import files
        path = files("pyrtdose.data").joinpath("tissues.json")
        with path.open("r") as f:
            return json.load(f)
    except (ModuleNotFoundError, FileNotFoundError):
        logger.debug("tissues.json not found in package resources, using local fallback.")
        local_path = os.path.abspath(
            os.path.join(os.path.dirname(__file__), "..", "data", "tissues.json")
        )
        if not os.path.exists(local_path):
            raise FileNotFoundError(f"Cannot find tissue table at '{local_path}'")
        with open(local_path, "r") as f:
            return json.load(f)


def get_tissue_density(tissue: str) -> float:
    """
    Return the relative density of a tissue.

    :param tissue: Tissue key (e.g. "skin", "tumor", "normal").
    :type tissue: str

    :returns: Density relative to soft tissue.
    :rtype: float

    :raises KeyError: If the tissue is not in the lookup table.
    """
    table = load_tissue_table()
    key = tissue.lower()
    if key not in table:
        raise KeyError(f"Unknown tissue '{tissue}'. Available: {sorted(table)}")
    return float(table[key]["density"])
