"""
Root conftest.py for pytest configuration

Registers the project markers and applies them from each test's location.
"""
from tests.markers import DOMAIN_MARKERS, PRIMARY_MARKERS, apply_auto_markers


def pytest_configure(config):
    """
    Configure pytest with custom markers.
    """
    for marker_name in PRIMARY_MARKERS:
        config.addinivalue_line("markers", f"{marker_name}: {marker_name} tests")

    for marker_name, description in DOMAIN_MARKERS.items():
        config.addinivalue_line("markers", f"{marker_name}: {description}")


def pytest_collection_modifyitems(config, items):
    """Apply automatic markers to all collected items"""
    for item in items:
        apply_auto_markers(item)
