#!/usr/bin/env python
"""
Load environment variables from .env file
"""

import logging
import os

logger = logging.getLogger(__name__)


def load_env(env_file='.env'):
    """Load environment variables from .env file; real env vars win"""
    if not os.path.exists(env_file):
        logger.debug(f"{env_file} file not found")
        return False

    logger.info(f"Loading environment variables from {env_file}")

    with open(env_file, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#'):
                if '=' in line:
                    key, value = line.split('=', 1)
                    value = value.strip().strip('"').strip("'")
                    os.environ.setdefault(key.strip(), value)

    return True


if __name__ == "__main__":
    load_env()

    # Show what the service will pick up (secrets masked)
    print("VistaX Configuration:")
    print(f"   - Calendar Provider: {os.environ.get('CALENDAR_PROVIDER', 'forexfactory')}")
    print(f"   - Use Mock Calendar: {os.environ.get('USE_MOCK_CALENDAR', 'Not set')}")
    print(f"   - Allowed Origin: {os.environ.get('ALLOWED_ORIGIN', 'per-endpoint default')}")
    print(f"   - TE API Key: {'set' if os.environ.get('TE_API_KEY') else 'Not set'}")
    print(f"   - Webhook Secret: {'set' if os.environ.get('TV_WEBHOOK_SECRET') else 'Not set'}")
