from pathlib import Path


# Project root
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

LOG_DIR = BASE_DIR / 'logs'

ALEMBIC_INI = BASE_DIR / 'alembic.ini'
