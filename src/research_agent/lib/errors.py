"""Failure taxonomy for external capabilities.

Library code raises these; each component catches them at its own boundary
and substitutes its documented fallback (empty list, degraded profile,
unranked results).
"""


class CapabilityError(Exception):
    """Base class for failures of an external capability."""

    def __init__(self, capability: str, message: str):
        super().__init__(f"{capability}: {message}")
        self.capability = capability


class MissingCredentialError(CapabilityError):
    """The capability has no credential configured."""

    def __init__(self, capability: str, setting: str):
        super().__init__(capability, f"missing {setting}")
        self.setting = setting


class ProviderError(CapabilityError):
    """Transient upstream failure: network error, timeout or non-2xx status."""


class MalformedPayloadError(CapabilityError):
    """The capability answered, but not with the JSON shape we expect."""


class ProfileCacheError(CapabilityError):
    """The profile cache backend could not be read or written."""
