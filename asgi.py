"""
ASGI entry point.

Run with:
    HCAPTCHA_SECRET=... HCAPTCHA_SITE_KEY=... uvicorn asgi:app --port 3000
"""

from app import create_app

app = create_app()
