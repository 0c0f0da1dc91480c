from pathlib import Path
import os
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

# Load environment variables
load_dotenv(BASE_DIR / "secret.env")

TMDB_API_KEY = os.getenv("TMDB_API_KEY")

# File / folder paths
DATA_DIR      = Path(os.getenv("STREAMBOX_DATA_DIR", BASE_DIR / "data"))
DATABASE_PATH = DATA_DIR / "streambox.sqlite"
LOG_PATH      = DATA_DIR / "streambox_debug.log"

# API URLs
TMDB_BASE_URL       = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
AUTH_BASE_URL       = os.getenv("STREAMBOX_AUTH_URL", "https://dummyjson.com")
YOUTUBE_WATCH_URL   = "https://www.youtube.com/watch?v={key}"

HTTP_TIMEOUT       = 10        # seconds
TMDB_MIN_DELAY     = 0.4       # ≈ 2.5 req/sec, well under 40 req / 10 s
TOKEN_EXPIRES_MINS = 60
MAX_CAST           = 10

# Storage keys
USER_KEY             = "@streambox_user"
TOKEN_KEY            = "@streambox_token"
REGISTERED_USERS_KEY = "@streambox_registered_users"
FAVORITES_KEY        = "@streambox_favorites"
RATINGS_KEY          = "@streambox_ratings"

MIN_RATING = 1
MAX_RATING = 5
