"""
Resolves BandPulse resource paths across environments.

Works the same from a source checkout and from a compiled binary
(Nuitka, PyInstaller), so ``config/bandpulse.json`` is found either way.
"""

import os

import sys

PLATFORM = sys.platform.lower()

APP_NAME = "BandPulse"

DEFAULT_CONFIG = os.path.join("config", "bandpulse.json")


def root_path(filename):
    """
    Determines the absolute path of a resource shipped with the application.

    Args:
        filename (str): The name of the file or directory relative to the application's root.

    Returns:
        str: The absolute path to the specified file or directory.

    Examples:
        >> root_path('config/bandpulse.json')
        '/path/to/app/config/bandpulse.json'
    """

    if compiled():  # Running from a compiled binary (Nuitka, PyInstaller)
        if PLATFORM == "darwin":  # macOS APP structure
            base_path = os.path.dirname(os.path.dirname(sys.argv[0]))  # Contents/
            # Nuitka puts files in the same dir as the binary
            return os.path.join(base_path, "MacOS", filename)
        if "NUITKA_ONEFILE_PARENT" in os.environ:
            # one-file build extracts next to the launcher, in its own folder
            base_path = os.path.join(os.path.dirname(sys.argv[0]), APP_NAME)
        else:
            base_path = os.path.dirname(sys.argv[0])
        return os.path.join(base_path, filename)

    # Running in development mode (not compiled)
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), filename)


def default_config_path():
    return root_path(DEFAULT_CONFIG)


def compiled():
    return bool(getattr(sys, 'frozen', False) or '__compiled__' in globals())
