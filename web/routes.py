"""
web/routes.py -- Routes serving the static browser client.

The client itself is plain HTML/JS under web/static/, mounted by asgi.py.
This module only adds the dynamic piece: GET /config.js, which publishes the
API base URL to the browser as window.APP_CONFIG. Only values that are safe
to expose belong in that payload.

Routes:
  GET /config.js  -- JavaScript assigning window.APP_CONFIG
"""

import json
import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import Response

from core.config import get_settings

logger = logging.getLogger("postdesk.web")

STATIC_DIR = Path(__file__).parent / "static"

router = APIRouter()


@router.get("/config.js", include_in_schema=False)
def client_config() -> Response:
    config = {"API_URL": get_settings().api_url}
    body = f"window.APP_CONFIG = {json.dumps(config, indent=2)};"
    return Response(content=body, media_type="application/javascript")
