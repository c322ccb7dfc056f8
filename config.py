import os
from dotenv import load_dotenv

# load .env before reading anything from the environment
load_dotenv()

BASE_DIR = os.path.dirname(__file__)

# database
SQLALCHEMY_DATABASE_URI = os.getenv("DB_URI")
if not SQLALCHEMY_DATABASE_URI:
    # local development fallback
    SQLALCHEMY_DATABASE_URI = "sqlite:///{}".format(os.path.join(BASE_DIR, "devflow.db"))

SQLALCHEMY_TRACK_MODIFICATIONS = False

SECRET_KEY = os.getenv("FLASK_SECRET_KEY", "dev")
WTF_CSRF_ENABLED = False   # JSON API, no browser forms

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# paging
QUESTIONS_PER_PAGE = 20
ANSWERS_PER_PAGE = 10
MAX_PAGE_SIZE = 100

# reputation deltas
REPUTATION_VOTER = 2                    # voter, per vote toggled on/off
REPUTATION_ANSWER_AUTHOR_VOTE = 10      # answer author, per vote on their answer
REPUTATION_QUESTION_AUTHOR_VOTE = 0     # question author, per vote on their question
REPUTATION_ASK_QUESTION = 5
REPUTATION_ANSWER = 10
