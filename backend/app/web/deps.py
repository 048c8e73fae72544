"""
Shared dependencies for the HTML pages.

Provides the Jinja2 templates used by every page route.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from ..config import get_settings

_WEB_DIR = Path(__file__).parent

templates = Jinja2Templates(directory=_WEB_DIR / "templates")
templates.env.globals["app_name"] = get_settings().app_name
