"""
The style scheme, style.yaml.
"""
import sys

import yaml


def _c(foreground, background=0):
    return {"foreground": foreground, "background": background}


def _continuous():
    return {
        "horizontal": "─",
        "vertical": "│",
        "TL": "┌",
        "TR": "┐",
        "BL": "└",
        "BR": "┘",
    }


class Scheme:
    """
    Color and border style scheme, stored as style.yaml next to the configuration.

    Colors are 256 color palette codes. Missing entries fall back to the defaults, so a partially edited file keeps working.
    """

    def __init__(self, config):
        self.style_file = config.path / "style.yaml"
        self.config = config
        if not self.style_file.exists():
            self.create_default_config()
        else:
            self.parse_config()

    @staticmethod
    def defaults():
        return {
            "colors": {
                "generic": _c(15),
                "generic_border": _c(15),
                "border_title": _c(111),
                "border_title_info": _c(70),
                "column_title": _c(0, 208),
                "selection": _c(15, 240),
                "header_title": _c(51),
                "header_active": _c(226),
                "header_favorite": _c(15),
                "header_hint": _c(245),
                "status_idle": _c(15),
                "status_loading": _c(226),
                "status_loaded": _c(40),
                "status_error": _c(196),
                "error_row": _c(203),
                "error_selection": _c(196, 240),
                "message_idle": _c(51),
                "message_loading": _c(226),
                "message_loaded": _c(40),
                "message_error": _c(196),
                "popup_border": _c(51),
                "popup_generic": _c(15),
                "popup_favorite": _c(51),
                "popup_selection": _c(226, 240),
                "popup_help": _c(245),
                "popup_help_key": _c(226),
            },
            "borders": {
                "default": _continuous(),
                "resource_list": _continuous(),
                "modal": _continuous(),
            },
        }

    def backup_and_reset(self):
        """
        Moves style.yaml to style.yaml.bak and writes the default scheme in its place.
        """
        print(
            "Restoring style scheme to defaults. Creating backup of pre-restore scheme.",
            file=sys.stderr,
        )
        backup = self.config.path / "style.yaml.bak"
        self.style_file.replace(backup)
        self.create_default_config()

    def create_default_config(self):
        print("Creating first time style scheme...", file=sys.stderr)
        self.style = self.defaults()
        with self.style_file.open("w", encoding="utf-8") as file:
            file.write(yaml.dump(self.style, allow_unicode=True))

    def __getitem__(self, item):
        return self.style[item]

    def parse_config(self):
        """
        Loads style.yaml over the defaults. A file which is not a YAML mapping is moved aside to style.yaml.bak and replaced by the
        defaults.
        """
        with self.style_file.open("r", encoding="utf-8") as file:
            try:
                loaded = yaml.safe_load(file.read())
            except yaml.YAMLError:
                loaded = False
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            self.backup_and_reset()
            return
        self.style = self.defaults()
        for section, entries in loaded.items():
            if isinstance(entries, dict) and section in self.style:
                self.style[section].update(entries)
