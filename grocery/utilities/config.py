"""Configuration management for the grocery engine."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

from grocery.utilities import constants

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


# Date Format
DATE_FORMAT: Final[str] = os.getenv('GROCERY_DATE_FORMAT', constants.DATE_FORMAT)

# Servings
MIN_SERVINGS: Final[int] = int(os.getenv('GROCERY_MIN_SERVINGS', str(constants.MIN_SERVINGS)))
MAX_SERVINGS: Final[int] = int(os.getenv('GROCERY_MAX_SERVINGS', str(constants.MAX_SERVINGS)))
DEFAULT_SERVINGS: Final[int] = int(os.getenv('GROCERY_DEFAULT_SERVINGS', str(constants.DEFAULT_SERVINGS)))
# When true, rescaling a recipe whose stored servings are missing or zero is rejected
STRICT_SERVINGS: Final[bool] = _flag('GROCERY_STRICT_SERVINGS')

# Logging
LOG_LEVEL: Final[str] = os.getenv('GROCERY_LOG_LEVEL', 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = BASE_DIR / 'data'
STORE_FILE: Final[Path] = Path(os.getenv('GROCERY_STORE_FILE', str(DATA_DIR / 'store.json')))
