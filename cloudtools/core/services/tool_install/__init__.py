"""
Artifact installation service — package re-exports.

    from cloudtools.core.services.tool_install import install, install_many

Each symbol lives in its single-responsibility module inside the
appropriate layer (data → domain → resolver → detection → execution →
orchestration).
"""

# ── L0: Data ──
from cloudtools.core.services.tool_install.data.artifacts import (  # noqa: F401
    ARTIFACTS,
    PLUGIN_HOST,
)

# ── L1: Domain ──
from cloudtools.core.services.tool_install.domain.validation import (  # noqa: F401
    ensure_binaries,
    ensure_download_url,
    ensure_env,
    is_boolean,
    parse_boolean,
    require_binaries,
    require_env,
)

# ── L2: Resolver ──
from cloudtools.core.services.tool_install.resolver.urls import (  # noqa: F401
    build_url,
    get_artifact,
)
from cloudtools.core.services.tool_install.resolver.version import (  # noqa: F401
    normalize_version,
    resolve_version,
)

# ── L3: Detection ──
from cloudtools.core.services.tool_install.detection.binaries import (  # noqa: F401
    installed_plugins,
    is_installed,
    is_plugin_installed,
)
from cloudtools.core.services.tool_install.detection.platform import (  # noqa: F401
    detect_linux_architecture,
    detect_mac_architecture,
    detect_os,
    detect_platform,
)

# ── L4: Execution ──
from cloudtools.core.services.tool_install.execution.installer import (  # noqa: F401
    install_binary,
)
from cloudtools.core.services.tool_install.execution.plugins import (  # noqa: F401
    install_plugin,
)

# ── L5: Orchestration ──
from cloudtools.core.services.tool_install.orchestration.orchestrator import (  # noqa: F401
    install,
    install_many,
    install_requests,
)
