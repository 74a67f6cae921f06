import os
from pathlib import Path

from .constants import DATA_DIR, DATA_DIR_ENV, DB_FILE_NAME

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_PATH = Path(os.environ.get(DATA_DIR_ENV) or BASE_DIR / DATA_DIR)
DB_PATH = DATA_PATH / DB_FILE_NAME


def ensure_data_dir() -> Path:
    DATA_PATH.mkdir(parents=True, exist_ok=True)
    return DATA_PATH
