"""Web interface routes implementation."""

import os
from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse

from shortlink.common.logging_config import get_logger
from shortlink.errors import NotFoundError

router = APIRouter()
logger = get_logger("shortlink.web")

# Landing page and assets live outside the package; both are optional
template_dir = os.path.join(os.path.dirname(__file__), "..", "..", "ux", "web")

FALLBACK_HOMEPAGE = """<!DOCTYPE html>
<html>
<head><title>URL Shortener</title></head>
<body>
  <h1>URL Shortener</h1>
  <form method="post" action="shorten">
    <input type="text" name="url" placeholder="Long URL" required>
    <input type="text" name="custom_alias" placeholder="Custom alias (optional)">
    <button type="submit">Shorten</button>
  </form>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the landing page, or a bare form when no page is installed."""
    html_file = os.path.join(template_dir, "index.html")

    if os.path.exists(html_file):
        with open(html_file, "r", encoding="utf-8") as f:
            return HTMLResponse(content=f.read())

    return HTMLResponse(content=FALLBACK_HOMEPAGE, status_code=200)


@router.get("/r/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL."""
    service = request.app.state.service

    try:
        original_url = await service.resolve(short_code)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{short_code}' not found",
        )
    except Exception as e:
        logger.exception(f"Error resolving {short_code}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error resolving short code",
        )

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
