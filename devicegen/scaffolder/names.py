"""Derivation of every name used in a generated service."""

from __future__ import annotations

from .models import DerivedNames, Invocation

SERVICE_NAME_FORMAT = "device-{}-go"
SERVICE_ID_FORMAT = "device-{}"
MODULE_QUALIFIER_FORMAT = "device_{}"
DRIVER_TYPE_FORMAT = "{}Driver"


def derive_camel_name(device_name: str, display_name: str | None = None) -> str:
    """Return the display form of *device_name*.

    An explicit *display_name* wins. Otherwise only the first character is
    upper-cased; dashes stay where they are, so ``my-device`` becomes
    ``My-device`` rather than ``MyDevice``.
    """
    if display_name:
        return display_name
    return device_name[:1].upper() + device_name[1:]


def derive_names(invocation: Invocation, camel_name: str | None = None) -> DerivedNames:
    """Compute :class:`DerivedNames` for *invocation*."""
    name = invocation.device_name
    camel = camel_name or derive_camel_name(name, invocation.display_name)
    return DerivedNames(
        device_name=name,
        camel_name=camel,
        service_name=SERVICE_NAME_FORMAT.format(name),
        service_id=SERVICE_ID_FORMAT.format(name),
        # Dashes are kept verbatim, matching the version.go template.
        module_qualifier=MODULE_QUALIFIER_FORMAT.format(name),
        driver_type=DRIVER_TYPE_FORMAT.format(camel),
    )
