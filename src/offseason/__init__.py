"""
Offseason - onboarding backend for the Offseason training app.

Wraps the onboarding flow resolver with a Supabase-backed profile store,
a FastAPI router for the mobile client, and a small CLI.
"""

__version__ = "1.0.0"
