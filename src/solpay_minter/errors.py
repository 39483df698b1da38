"""
solpay_minter.errors

Failure taxonomy for the mint pipeline.

Responsibilities:
- Give every recognized failure a stable, non-sensitive `code` for server-side logs.
- Separate request-scoped failures (`MintError`) from startup misconfiguration.
"""

from __future__ import annotations


class MintError(Exception):
    """
    Base class for failures that end a mint request on the unified error path.
    The message is for logs only; it never reaches the caller.
    """

    code = "MINT_ERROR"


class UnknownItem(MintError):
    code = "UNKNOWN_ITEM"


class CatalogUnavailable(MintError):
    code = "CATALOG_UNAVAILABLE"


class InvalidAccountInput(MintError):
    code = "INVALID_ACCOUNT_INPUT"


class InvalidDescriptor(MintError):
    code = "INVALID_DESCRIPTOR"


class InstructionBuildFailure(MintError):
    code = "INSTRUCTION_BUILD_FAILURE"


class UpstreamNetworkFailure(MintError):
    code = "UPSTREAM_NETWORK_FAILURE"


class ConfigurationError(Exception):
    """Raised while building the runtime config; the process should not start."""


# --- Module Notes -----------------------------------------------------------
# Codes are part of the optional client diagnostics surface (MINTER_EXPOSE_ERROR_CODES);
# renaming one is a breaking change for anyone keying on it.
