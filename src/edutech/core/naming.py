"""Portal naming rules and derived paths."""

import re

from edutech.core.errors import PortalValidationError

PORTAL_NAME_PATTERN = re.compile(r"[a-z0-9-]+")

METADATA_FILENAME = ".portal-config.json"


def validate_portal_name(name: str, *, kind: str = "portal") -> str:
    """Return `name` unchanged if it is a legal portal name.

    Raises:
        PortalValidationError: If the name has anything besides lowercase
            letters, digits and hyphens
    """
    if not PORTAL_NAME_PATTERN.fullmatch(name):
        raise PortalValidationError(
            f'Invalid {kind} name "{name}"',
            hint=(
                f"{kind.capitalize()} names may only contain "
                "lowercase letters, numbers and hyphens"
            ),
        )
    return name


def normalize_locator(locator: str, github_host: str = "https://github.com") -> str:
    """Expand `owner/repo` shorthand into a full URL.

    Full URLs (anything with "://") and SSH locators ("git@...") pass through.
    """
    if "://" in locator or locator.startswith("git@"):
        return locator
    return f"{github_host.rstrip('/')}/{locator}"


def workspace_entry(name: str, portals_dir: str = "portals") -> str:
    """Relative path of a portal as listed in the workspace manifest."""
    return f"{portals_dir}/{name}"


def app_name(portal_name: str) -> str:
    """Process-manager app name for a portal."""
    return f"{portal_name}-portal"
