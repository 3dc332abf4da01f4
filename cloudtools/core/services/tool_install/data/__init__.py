"""
L0 Data — artifact catalog.
"""

from cloudtools.core.services.tool_install.data.artifacts import (  # noqa: F401
    ARTIFACTS,
    PLUGIN_HOST,
)
