import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev_key")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # MongoDB
    MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB_NAME = os.environ.get("MONGO_DB_NAME", "Bookly")
    MONGO_TIMEOUT_MS = int(os.environ.get("MONGO_TIMEOUT_MS", 5000))

    # Botpress tables holding the chatbot conversations
    BOTPRESS_API_URL = os.environ.get("BOTPRESS_API_URL", "https://api.botpress.cloud")
    BOTPRESS_TOKEN = os.environ.get("BOTPRESS_TOKEN")
    BOTPRESS_BOT_ID = os.environ.get("BOTPRESS_BOT_ID")
    CONVERSATIONS_TABLE = os.environ.get("CONVERSATIONS_TABLE", "Int_Connor_Conversations_Table")
    CONVERSATION_FETCH_LIMIT = int(os.environ.get("CONVERSATION_FETCH_LIMIT", 50))

    # Dashboards
    ROWS_PER_PAGE = 10
    TOP_SERVICES_LIMIT = 5


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test_key"
    MONGO_DB_NAME = "Bookly_test"
    BOTPRESS_TOKEN = "test-token"
    BOTPRESS_BOT_ID = "test-bot"
