"""Architectural boundary tests using pytest-archon.

These tests verify that the codebase follows clean architecture principles:
- Domain layer has no dependencies on adapters or application services
- Application services don't depend on adapters
- Adapters depend on the domain only
- Only the entry points wire adapters and services together
"""

from pytest_archon import archrule


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should not import anything outside the domain models."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("bikeshare_sync.domain.models*")
        .should_not_import("bikeshare_sync.adapters*")
        .should_not_import("bikeshare_sync.application*")
        .should_not_import("bikeshare_sync.domain.ports*")
        .may_import("bikeshare_sync.domain.models*")
        .check("bikeshare_sync")
    )


def test_domain_ports_have_no_dependencies() -> None:
    """Domain ports (interfaces) should not import adapters or application."""
    (
        archrule("domain ports", comment="Domain ports should be independent")
        .match("bikeshare_sync.domain.ports*")
        .should_not_import("bikeshare_sync.adapters*")
        .should_not_import("bikeshare_sync.application*")
        .may_import("bikeshare_sync.domain.ports*")
        .may_import("bikeshare_sync.domain.models*")
        .check("bikeshare_sync")
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("bikeshare_sync.application*")
        .should_not_import("bikeshare_sync.adapters*")
        .should_not_import("bikeshare_sync.main")
        .should_not_import("bikeshare_sync.cli")
        .may_import("bikeshare_sync.domain*")
        .may_import("bikeshare_sync.application*")
        .check("bikeshare_sync")
    )


def test_adapters_dont_import_application() -> None:
    """Adapters should not import application services (to avoid cycles)."""
    (
        archrule(
            "adapters independence", comment="Adapters should not depend on application services"
        )
        .match("bikeshare_sync.adapters*")
        .should_not_import("bikeshare_sync.application*")
        .should_not_import("bikeshare_sync.main")
        .should_not_import("bikeshare_sync.cli")
        .may_import("bikeshare_sync.domain*")
        .may_import("bikeshare_sync.adapters*")
        .check("bikeshare_sync", only_direct_imports=True)
    )


def test_no_circular_dependencies_in_domain() -> None:
    """Domain layer should not have circular dependencies."""
    (
        archrule("domain no cycles", comment="Domain layer should not have circular dependencies")
        .match("bikeshare_sync.domain*")
        .should_not_import("bikeshare_sync.adapters*")
        .should_not_import("bikeshare_sync.application*")
        .may_import("bikeshare_sync.domain*")
        .check("bikeshare_sync", only_direct_imports=True)
    )
