"""
asgi.py -- Application assembly for Postdesk.

This is the ONLY file that imports from both api/ and web/. It joins the JSON
API and the static browser client into a single ASGI app without coupling
them to each other.

Run with:  uvicorn asgi:app --reload
           python main.py serve
"""

from fastapi.staticfiles import StaticFiles

from api.main import app
from web.routes import STATIC_DIR
from web.routes import router as web_router

app.include_router(web_router, tags=["Web UI"])
# Mounted last: the catch-all "/" mount must not shadow /api or /config.js.
app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="static")
