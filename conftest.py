"""
Root pytest configuration for the Django project.

Points pytest at the Django settings when tests are run from the
repository root. Project-wide hooks live in app/conftest.py and
app-specific fixtures in each app's tests/conftest.py.
"""

import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
