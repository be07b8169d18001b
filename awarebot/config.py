import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "awarebot-dev-secret")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", os.environ.get("SQLALCHEMY_DATABASE_URI", "sqlite:///awarebot.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    GROQ_API_KEY = os.environ.get("GROQ_API_KEY", "")
    GROQ_MODEL = os.environ.get("GROQ_MODEL", "llama3-8b-8192")

    # 'record' | 'reject' | 'reward' -- see awarebot.training.ledger
    REPEAT_COMPLETION_POLICY = os.environ.get("REPEAT_COMPLETION_POLICY", "record")
    RECOMMENDATION_LIMIT = int(os.environ.get("RECOMMENDATION_LIMIT", 2))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
