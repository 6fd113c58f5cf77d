from fastapi import FastAPI
from dotenv import load_dotenv

from app.core.logging import configure_logging
from app.core.settings import get_settings
from app.routes.training_teams import router as training_teams_router

load_dotenv()
configure_logging(get_settings().log_level)

app = FastAPI(title="Training Team Generator")

app.include_router(training_teams_router)
