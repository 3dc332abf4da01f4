"""
L0 Data — Installable artifact catalog.

Pure data, no logic.  One entry per binary artifact, keyed by the
artifact ID used on the command line.

Fields:
    label            Human-readable name.
    binary           Executable name on the search path and at the destination.
    url_template     Download URL; ``{version}``, ``{os}``, ``{arch}`` placeholders.
    url_overrides    ``(os, arch) → template`` for pairs that break the pattern.
    latest_template  Used for ``latest`` instead of consulting a release index.
    os_map           Our OS name → the name the publisher uses in URLs.
    release_index    ``{"url", "kind", "tag_prefix"}`` for resolving ``latest``.
                     kind ``github`` reads JSON ``tag_name``; ``pointer`` reads
                     a plain-text stable-version file.
    archive_member   Path of the binary inside a .tgz archive (None = raw binary).
"""

from __future__ import annotations

ARTIFACTS: dict[str, dict] = {

    "jq": {
        "label": "jq (JSON processor)",
        "binary": "jq",
        "url_template": (
            "https://github.com/jqlang/jq/releases/download/"
            "jq-{version}/jq-{os}-{arch}"
        ),
        "latest_template": (
            "https://github.com/jqlang/jq/releases/latest/download/jq-{os}-{arch}"
        ),
        "archive_member": None,
    },

    "kubectl": {
        "label": "kubectl (Kubernetes CLI)",
        "binary": "kubectl",
        # dl.k8s.io keeps the leading "v" in its release paths
        "url_template": "https://dl.k8s.io/release/v{version}/bin/{os}/{arch}/kubectl",
        "os_map": {"macos": "darwin"},
        "release_index": {
            "url": "https://dl.k8s.io/release/stable.txt",
            "kind": "pointer",
        },
        "archive_member": None,
    },

    "ibmcloud": {
        "label": "IBM Cloud CLI",
        "binary": "ibmcloud",
        "url_template": (
            "https://download.clis.cloud.ibm.com/ibm-cloud-cli-dn/{version}/binaries/"
            "IBM_Cloud_CLI_{version}_{os}_{arch}.tgz"
        ),
        # Intel macOS builds are published without an architecture suffix.
        "url_overrides": {
            ("macos", "amd64"): (
                "https://download.clis.cloud.ibm.com/ibm-cloud-cli-dn/{version}/binaries/"
                "IBM_Cloud_CLI_{version}_macos.tgz"
            ),
        },
        "release_index": {
            "url": "https://api.github.com/repos/IBM-Cloud/ibm-cloud-cli-release/releases/latest",
            "kind": "github",
        },
        "archive_member": "IBM_Cloud_CLI/ibmcloud",
    },
}

# IBM Cloud CLI plugins are installed through the CLI itself.
PLUGIN_HOST = "ibmcloud"
