import os

basedir = os.path.abspath(os.path.dirname(__file__))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "a-hard-to-guess-string"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    CACHE_TYPE = os.environ.get("CACHE_TYPE", "SimpleCache")
    # Lifetime of the cached prompt listing. Every write invalidates it,
    # so this only bounds staleness when another process writes.
    try:
        PROMPT_CACHE_TIMEOUT = int(os.environ.get('PROMPT_CACHE_TIMEOUT', '3600'))
    except ValueError:
        PROMPT_CACHE_TIMEOUT = 3600


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DEV_DATABASE_URL"
    ) or "sqlite:///" + os.path.join(basedir, "prompts-dev.db")


class TestingConfig(Config):
    TESTING = True
    CACHE_TYPE = "SimpleCache"
    SQLALCHEMY_DATABASE_URI = (
        os.environ.get("TEST_DATABASE_URL") or "sqlite://"
    )  # In-memory database


class ProductionConfig(Config):
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL"
    ) or "sqlite:///" + os.path.join(basedir, "prompts.db")


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
