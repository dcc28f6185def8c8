"""User-level configuration management for the module build tool."""

import os
import json


CONFIG_DIR = os.path.expanduser("~/.modbuild")
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.json")


def ensure_config_exists():
    """Ensure the configuration directory and file exist."""
    if not os.path.exists(CONFIG_DIR):
        os.makedirs(CONFIG_DIR)

    if not os.path.exists(CONFIG_FILE):
        with open(CONFIG_FILE, "w") as f:
            json.dump({}, f)


def get_config():
    """Get the current configuration.

    Returns:
        dict: Current configuration.
    """
    ensure_config_exists()
    with open(CONFIG_FILE, "r") as f:
        return json.load(f)


def update_config(updates):
    """Update the configuration with new values.

    Args:
        updates (dict): Dictionary of configuration values to update.
    """
    config = get_config()
    config.update(updates)

    with open(CONFIG_FILE, "w") as f:
        json.dump(config, f, indent=2)


def get_default_syati_dir():
    """Get the Syati checkout used when none is given on the command line.

    Returns:
        str: Stored path, or None when unset.
    """
    return get_config().get("syati_dir")


def set_default_syati_dir(path):
    """Remember the Syati checkout to build against.

    Args:
        path (str): Path to the Syati repository.
    """
    update_config({"syati_dir": os.path.abspath(path)})
