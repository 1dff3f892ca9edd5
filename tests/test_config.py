from pharmacy_pos.core.config import Settings, settings


def test_database_url_wins():
    assert settings.SQLALCHEMY_DATABASE_URI == "sqlite://"


def test_mysql_uri_built_from_parts():
    s = Settings(DATABASE_URL="", DB_DRIVER="pymysql",
                 MYSQL_USER="pos", MYSQL_PASSWORD="p@ss word",
                 MYSQL_HOST="db", MYSQL_PORT=3307, MYSQL_DB="shop")
    assert s.SQLALCHEMY_DATABASE_URI == (
        "mysql+pymysql://pos:p%40ss+word@db:3307/shop?charset=utf8mb4")


def test_only_consumed_settings_exposed():
    assert "CURRENCY_SYMBOL" not in Settings.model_fields
    assert settings.LOW_STOCK_THRESHOLD == 50
    assert settings.NEAR_EXPIRY_DAYS == 30
    assert settings.INVOICE_PREFIX == "INV-"
