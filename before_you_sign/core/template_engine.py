from fastapi.templating import Jinja2Templates
from datetime import datetime

from .config import settings

# -----------------------------------------------------
# 📁 Template Directory Setup
# -----------------------------------------------------
templates = Jinja2Templates(directory=settings.TEMPLATES_DIR)

# Expose globals to Jinja templates
templates.env.globals.update({
    "datetime": datetime,
    "APP_NAME": settings.PROJECT_NAME,
})
