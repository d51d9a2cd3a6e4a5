"""
The configuration file, config.yaml, and its upgrade path.
"""
import copy
import sys
from pathlib import Path

import yaml

from .scheme import Scheme

LAST_CONFIG_VERSION = 2

UPGRADES = {
    1: {
        "default_region": "",
        "error_log": None,
        "log_retention": {
            "max_lines": -1,
            "max_age": 2419200,
        },
    },
    2: {
        "default_favorites": ["EC2", "S3"],
    },
}
"""
Keys introduced by each configuration version, with their default values. A None error_log stands for error.log in the configuration
directory.
"""


def default_config_path():
    return Path.home() / ".config" / "awsome"


class Config:
    """
    The loaded configuration, along with the style scheme stored beside it.

    Item access goes to the parsed config.yaml. Keys missing from an outdated file are filled in by initialize().

    Attributes
    ----------
    path : pathlib.Path
        The configuration directory.
    config_path : pathlib.Path
        config.yaml within path.
    scheme : awsome.config.scheme.Scheme
        The style scheme.
    config : dict
        The parsed configuration.
    """

    def __init__(self, path=None):
        """
        Loads the configuration, creating the directory and a default configuration on first run.

        Parameters
        ----------
        path : str, optional
            The configuration directory. Defaults to ~/.config/awsome.
        """
        print("Initializing AWSome configuration...", file=sys.stderr)
        self.path = default_config_path() if path is None else Path(path)
        self.path.mkdir(parents=True, exist_ok=True)
        self.scheme = Scheme(self)
        self.config_path = self.path / "config.yaml"
        if self.config_path.exists():
            with self.config_path.open("r", encoding="utf-8") as file:
                self.config = yaml.safe_load(file.read()) or {}
        else:
            print("Creating first time configuration...", file=sys.stderr)
            self.config = {"version": 0}

    def initialize(self):
        """
        Brings the configuration up to LAST_CONFIG_VERSION and saves it. Call once before the configuration is used.

        Every upgrade step runs regardless of the stored version, so keys removed from an up to date file by hand are restored too.
        """
        version = self.config.get("version", 0)
        for step in range(1, LAST_CONFIG_VERSION + 1):
            if 0 < version < step:
                print(f"Performing config update to version {step}", file=sys.stderr)
            self.upgrade(step)
        self.config["version"] = max(version, LAST_CONFIG_VERSION)
        self.write_config()

    def upgrade(self, version):
        """
        Adds the keys introduced by a configuration version, leaving existing values alone.

        Parameters
        ----------
        version : int
            The version to upgrade to.
        """
        for key, value in UPGRADES[version].items():
            if key == "error_log" and value is None:
                value = str(self.path / "error.log")
            self.config.setdefault(key, copy.deepcopy(value))

    def write_config(self):
        with self.config_path.open("w", encoding="utf-8") as file:
            file.write(yaml.dump(self.config))

    def __contains__(self, item):
        return item in self.config

    def __getitem__(self, item):
        return self.config[item]

    def __setitem__(self, item, value):
        self.config[item] = value

    @property
    def region(self):
        """
        The configured region, or None to leave the choice to the AWS credential chain.
        """
        return self.config.get("default_region") or None
