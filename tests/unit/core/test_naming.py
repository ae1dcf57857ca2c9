import pytest

from edutech.core.errors import PortalValidationError
from edutech.core.naming import app_name, normalize_locator, validate_portal_name, workspace_entry


@pytest.mark.parametrize("name", ["cbt", "academic", "cbt-2", "a", "123", "my-portal-v2"])
def test_validate_portal_name_accepts_legal_names(name: str) -> None:
    assert validate_portal_name(name) == name


@pytest.mark.parametrize(
    "name",
    ["", "CBT", "my_portal", "my portal", "cbt/evil", "../escape", "portal.js", "café", "cbt\n"],
)
def test_validate_portal_name_rejects_illegal_names(name: str) -> None:
    with pytest.raises(PortalValidationError) as exc_info:
        validate_portal_name(name)

    assert f'Invalid portal name "{name}"' in str(exc_info.value)
    assert exc_info.value.hint is not None
    assert "lowercase letters" in exc_info.value.hint


def test_validate_portal_name_uses_kind_in_messages() -> None:
    with pytest.raises(PortalValidationError) as exc_info:
        validate_portal_name("Harvard", kind="institution")

    assert str(exc_info.value) == 'Invalid institution name "Harvard"'
    assert exc_info.value.hint is not None
    assert exc_info.value.hint.startswith("Institution names")


@pytest.mark.parametrize(
    ("locator", "expected"),
    [
        ("org/cbt-default", "https://github.com/org/cbt-default"),
        ("https://gitlab.com/org/cbt", "https://gitlab.com/org/cbt"),
        ("git@github.com:org/cbt.git", "git@github.com:org/cbt.git"),
        ("file:///srv/templates/cbt", "file:///srv/templates/cbt"),
    ],
)
def test_normalize_locator(locator: str, expected: str) -> None:
    assert normalize_locator(locator) == expected


def test_normalize_locator_uses_configured_host() -> None:
    assert (
        normalize_locator("org/cbt", "https://git.example.edu/")
        == "https://git.example.edu/org/cbt"
    )


def test_derived_names() -> None:
    assert workspace_entry("cbt") == "portals/cbt"
    assert workspace_entry("cbt", "apps") == "apps/cbt"
    assert app_name("cbt") == "cbt-portal"
