"""
Moteur de templates partagé (Jinja2) et filtres de présentation.
"""
from fastapi.templating import Jinja2Templates

from daniel_award.config import TEMPLATES_DIR
from daniel_award.utils.formatting import money

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["money"] = money
