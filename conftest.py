"""Set up Django before collecting the test suite with pytest."""
import os

import django


def pytest_configure(config):
    """Configure Django with the test project settings."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tests.settings")
    django.setup()
