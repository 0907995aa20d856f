"""
Iron Clad Leaderboard - Main FastAPI Application
"""

import logging
import os
from dataclasses import asdict
from typing import List, Optional

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import config
from name_utils import (
    name_to_slug, format_activity, format_timestamp,
    truncate_notes, detect_install_platform,
)
from scoring import get_podium_level
from sheets_client import SheetsError, sheet_edit_url, sheet_row_url
from standings import Standings, find_profile, load_standings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

VALID_TABS = {"ranks", "challenges", "gwot"}


# Rate limiter - disabled in test mode
limiter = Limiter(key_func=get_remote_address, enabled=not config.TESTING)


app = FastAPI(
    title="Iron Clad Leaderboard",
    description="Challenge leaderboard built from Google Sheets exports.",
    version="1.0.0",
    openapi_tags=[
        {"name": "public", "description": "HTML pages"},
        {"name": "api", "description": "JSON API endpoints"},
    ],
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

templates = Jinja2Templates(directory=os.path.join(BASE_DIR, "templates"))
templates.env.globals.update(
    config=config,
    name_to_slug=name_to_slug,
    format_activity=format_activity,
    format_timestamp=format_timestamp,
    truncate_notes=truncate_notes,
    sheet_row_url=sheet_row_url,
    get_podium_level=get_podium_level,
)


async def standings_or_502() -> Standings:
    """
    Load this request's standings.

    Raises:
        HTTPException: 502 if any sheet cannot be fetched
    """
    try:
        return await load_standings()
    except SheetsError as e:
        logger.error(f"Could not load sheets: {e}")
        raise HTTPException(status_code=502, detail="Could not load the leaderboard data")


def parse_route(segments: Optional[List[str]] = None) -> dict:
    """
    Work out the active tab and open modals from URL path segments.

    '/ranks/submit' shows the ranks tab with the submit form open. Unknown
    segments are ignored and the tab defaults to 'info'.
    """
    route = {"tab": "info", "show_submit": False, "show_install": False, "show_mileage_submit": False}
    for seg in segments or []:
        if seg == "submit":
            route["show_submit"] = True
        elif seg == "install":
            route["show_install"] = True
        elif seg == "log-miles":
            route["show_mileage_submit"] = True
        elif seg in VALID_TABS:
            route["tab"] = seg
    return route


def tab_path(tab: str) -> str:
    """Base URL for a tab; modal links are built by appending to it."""
    return "/" if tab == "info" else f"/{tab}"


def find_or_404(slug: str, standings: Standings):
    """Resolve a profile slug to its view, or raise 404."""
    profile = find_profile(standings, slug)
    if profile is None:
        raise HTTPException(status_code=404, detail="Participant not found")
    return profile


@app.middleware("http")
async def sheet_redirect_middleware(request: Request, call_next):
    """Send every visitor to the spreadsheet when the site is switched off."""
    if config.REDIRECT_ALL_TO_SHEET:
        return RedirectResponse(url=sheet_edit_url(), status_code=307)
    return await call_next(request)


@app.middleware("http")
async def security_headers_middleware(request: Request, call_next):
    """Add security headers to all responses."""
    response = await call_next(request)

    # Prevent MIME type sniffing
    response.headers["X-Content-Type-Options"] = "nosniff"

    # Control referrer information
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

    # The Google Forms are embedded in modals
    response.headers["Content-Security-Policy"] = (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline'; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data:; "
        "frame-src https://docs.google.com; "
        "frame-ancestors 'none';"
    )
    return response


# ============================================================
# PUBLIC ENDPOINTS
# ============================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/sheet", tags=["public"])
async def sheet_redirect():
    """Redirect to the underlying spreadsheet."""
    return RedirectResponse(url=sheet_edit_url(), status_code=307)


@app.get("/profile/{slug}", response_class=HTMLResponse, tags=["public"])
async def profile_page(request: Request, slug: str):
    """Participant profile: rank, podium progress, GWOT progress and history."""
    standings = await standings_or_502()
    profile = find_or_404(slug, standings)
    return templates.TemplateResponse(request, "profile.html", {
        "profile": profile,
    })


# ============================================================
# JSON API
# ============================================================

@app.get("/api/leaderboard", tags=["api"])
@limiter.limit(config.RATE_LIMIT_API)
async def api_leaderboard(request: Request):
    """Point leaderboard, highest first."""
    standings = await standings_or_502()
    return [
        {**asdict(entry), "slug": name_to_slug(entry.name), "podium_level": get_podium_level(entry.points)}
        for entry in standings.leaderboard
    ]


@app.get("/api/mileage", tags=["api"])
@limiter.limit(config.RATE_LIMIT_API)
async def api_mileage(request: Request):
    """GWOT mileage leaderboard, highest first."""
    standings = await standings_or_502()
    return [asdict(entry) for entry in standings.mileage_leaderboard]


@app.get("/api/challenges", tags=["api"])
@limiter.limit(config.RATE_LIMIT_API)
async def api_challenges(request: Request):
    """The challenge point table, in sheet order."""
    standings = await standings_or_502()
    return [asdict(c) for c in standings.challenges]


@app.get("/api/profile/{slug}", tags=["api"])
@limiter.limit(config.RATE_LIMIT_API)
async def api_profile(request: Request, slug: str):
    """A single participant's profile."""
    standings = await standings_or_502()
    profile = find_or_404(slug, standings)
    data = asdict(profile)
    for sub in data["submissions"]:
        sub["sheet_url"] = sheet_row_url(sub["row_index"])
    return data


# Mount static files directory
app.mount("/static", StaticFiles(directory=os.path.join(BASE_DIR, "static")), name="static")


@app.get("/", response_class=HTMLResponse, tags=["public"])
@app.get("/{segments:path}", response_class=HTMLResponse, tags=["public"])
async def dashboard(request: Request, segments: str = ""):
    """Dashboard with info, ranks, challenges and GWOT tabs."""
    parts = [s for s in segments.split("/") if s]
    # Unmatched API paths must not fall through to the dashboard
    if parts and parts[0] == "api":
        raise HTTPException(status_code=404, detail="Not found")
    route = parse_route(parts)
    standings = await standings_or_502()

    return templates.TemplateResponse(request, "dashboard.html", {
        **route,
        "tab_path": tab_path(route["tab"]),
        "leaderboard": standings.leaderboard,
        "profile_names": {entry.name for entry in standings.leaderboard},
        "mileage_leaderboard": standings.mileage_leaderboard,
        "standard_challenges": [c for c in standings.challenges if c.section == "Standard"],
        "special_challenges": [c for c in standings.challenges if c.section == "Special"],
        "install_platform": detect_install_platform(request.headers.get("user-agent")),
    })


# ============================================================
# ERROR HANDLERS
# ============================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    detail = getattr(exc, 'detail', None) or "An error occurred"

    accept_header = request.headers.get("accept", "")
    is_api_request = (
        request.url.path == "/api" or
        request.url.path.startswith("/api/") or
        "application/json" in accept_header
    )

    if is_api_request:
        return JSONResponse(status_code=exc.status_code, content={"detail": detail})

    if exc.status_code == 404 and request.url.path.startswith("/profile/"):
        return templates.TemplateResponse(request, "error.html", {
            "error_code": 404,
            "error_title": "Participant Not Found",
            "error_message": "We couldn't find anyone with that name in the leaderboard.",
        }, status_code=404)

    if exc.status_code == 404:
        return templates.TemplateResponse(request, "error.html", {
            "error_code": 404,
            "error_title": "Page Not Found",
            "error_message": "The page you're looking for doesn't exist.",
        }, status_code=404)

    return templates.TemplateResponse(request, "error.html", {
        "error_code": exc.status_code,
        "error_title": "Error",
        "error_message": detail,
    }, status_code=exc.status_code)


@app.exception_handler(500)
async def server_error_handler(request: Request, exc: Exception):
    """Handle 500 errors."""
    logger.error(f"Internal server error: {exc}", exc_info=True)
    if request.url.path.startswith("/api/") or request.headers.get("accept") == "application/json":
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return templates.TemplateResponse(request, "error.html", {
        "error_code": 500,
        "error_title": "Server Error",
        "error_message": "Something went wrong. Please try again later.",
    }, status_code=500)


# Run with uvicorn
if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
