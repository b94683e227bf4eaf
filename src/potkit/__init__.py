"""
potkit - Potential values for remote-data state.

Re-exports the public API of ``potkit.core``.
"""

__version__ = "0.1.0"

from potkit.core import *  # noqa
