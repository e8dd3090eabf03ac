"""
mirrorsync -- content-hash directory mirroring.

Reads a list of (source, target) directory pairs and brings each
target up to date with its source, copying only the files whose
content hash is missing or different.
"""

import os

__version__ = "0.1.0"

DEFAULT_CONFIG_PATH = os.environ.get("MIRRORSYNC_CONFIG", "config")
