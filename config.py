from dotenv import load_dotenv
import os

load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///fitto.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Drop stale pooled connections before use
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()]
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Generative AI (fitness Q&A)
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-flash-latest")
    AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "15"))
    AI_MAX_RETRIES = int(os.getenv("AI_MAX_RETRIES", "1"))

    # Exercise calorie lookup and USDA food search
    NINJAS_API_KEY = os.getenv("NINJAS_API_KEY")
    NINJAS_API_URL = os.getenv("NINJAS_API_URL", "https://api.api-ninjas.com/v1/caloriesburned")
    USDA_API_KEY = os.getenv("USDA_API_KEY")
    USDA_API_URL = os.getenv("USDA_API_URL", "https://api.nal.usda.gov/fdc/v1/foods/search")
    HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "5"))
