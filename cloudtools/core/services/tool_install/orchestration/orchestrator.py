"""
L5 Orchestration — Top-level coordinators.

``install`` dispatches a single request to the right installer.
``install_many`` applies it to a list of artifacts, keeps going past
individual failures, and aggregates the verdict at the end.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cloudtools.core.errors import CloudToolsError, InvalidArgument
from cloudtools.core.models.install import (
    BatchResult,
    InstallOptions,
    InstallOutcome,
    InstallRequest,
)
from cloudtools.core.services.tool_install.execution.installer import install_binary
from cloudtools.core.services.tool_install.execution.plugins import install_plugin

logger = logging.getLogger(__name__)


def install(request: InstallRequest, *, escalate: bool | None = None) -> InstallOutcome:
    """Install one artifact (binary or IBM Cloud plugin).

    Args:
        request: The artifact to install.
        escalate: Binary installs only; see ``install_binary``.
    """
    if request.kind == "plugin":
        return install_plugin(request)
    return install_binary(request, escalate=escalate)


def install_requests(
    requests: Iterable[InstallRequest],
    *,
    escalate: bool | None = None,
) -> BatchResult:
    """Install every request, continuing past failures.

    Errors raised by an installer for one item (unknown artifact,
    missing ``ibmcloud``, unresolvable ``latest``, ...) are recorded as a
    failed outcome for that item; the remaining items still run.

    Raises:
        InvalidArgument: No requests at all.
    """
    requests = list(requests)
    if not requests:
        raise InvalidArgument("At least one artifact name is required")

    result = BatchResult()
    for req in requests:
        logger.info("Processing %s: %s", req.kind, req.artifact)
        try:
            outcome = install(req, escalate=escalate)
        except CloudToolsError as exc:
            outcome = InstallOutcome.failed(req.artifact, str(exc))

        if not outcome.ok:
            logger.info("Failed: %s (%s)", req.artifact, outcome.error)
        result.add(outcome)

    _log_summary(result)
    return result


def install_many(
    names: Iterable[str],
    options: InstallOptions | None = None,
    *,
    escalate: bool | None = None,
) -> BatchResult:
    """Install each of ``names`` with the same ``options``.

    Returns:
        A ``BatchResult``; ``result.ok`` is False iff any item failed.
    """
    options = options or InstallOptions()
    return install_requests(
        (InstallRequest.from_options(name, options) for name in names),
        escalate=escalate,
    )


def _log_summary(result: BatchResult) -> None:
    if result.installed:
        logger.info("Installed (%d): %s", len(result.installed), " ".join(result.installed))
    if result.skipped:
        logger.info("Skipped (%d): %s", len(result.skipped), " ".join(result.skipped))
    if result.failed:
        logger.info("Failed (%d): %s", len(result.failed), " ".join(result.failed))
