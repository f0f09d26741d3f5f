# config.py


class DefaultConfig:
    SECRET_KEY = "dev-secret"
    DATA_DIR = None            # None keeps everything in memory
    SEED_SAMPLE_DATA = True
    MIN_MOBILE_DIGITS = 10
    REVENUE_SERIES_MONTHS = 6
    CURRENCY_SYMBOL = "₹"
    HOTEL_NAME = "Hotel Management System"
    LOG_LEVEL = "INFO"
