"""Pytest configuration shared by the API and text parser suites.

``apps.api.core.config`` builds its Settings at import time, so the
Supabase variables must exist before any API module is collected.
"""

import os

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
