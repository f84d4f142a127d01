from pathlib import Path
from fastapi.templating import Jinja2Templates
from app.core.config import settings
from app.utils.formatting import format_money, initials

BASE_DIR = Path(__file__).resolve().parents[2]

templates_dir = Path(settings.TEMPLATES_DIR)
if not templates_dir.is_absolute():
    templates_dir = BASE_DIR / templates_dir

templates = Jinja2Templates(directory=str(templates_dir))
templates.env.filters["money"] = format_money
templates.env.filters["initials"] = initials
