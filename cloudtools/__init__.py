"""cloudtools — installers for the IBM Cloud CLI toolchain and IAM token helpers."""

__version__ = "0.1.0"
