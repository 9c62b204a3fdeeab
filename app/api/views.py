"""
View rendering - Jinja2 templates for the HTML pages.
"""
import os

from fastapi.templating import Jinja2Templates

from app.schemas.schemas import COURSES

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")

templates = Jinja2Templates(directory=TEMPLATES_DIR)

# Every form needs the course list for its <select>
templates.env.globals["courses"] = COURSES
