import os

import django
import pytest

# Setup Django
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'vistax_project.settings')
django.setup()


@pytest.fixture(autouse=True)
def clear_market_state():
    from django.core.cache import caches
    caches['market_state'].clear()
    yield
    caches['market_state'].clear()
