import os


class Settings:
    def __init__(self):
        self.app_name = "Tutor Fee Manager"
        self.api_version = "1.0.0"
        self.environment = os.getenv("TUTOR_ENV", "development")
        self.secret_key = os.getenv("TUTOR_SECRET_KEY", "CHANGE_ME")
        self.SECRET_KEY = self.secret_key
        self.access_token_expire_minutes = 60
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.access_token_expire_minutes
        self.database_url = os.getenv("TUTOR_DATABASE_URL", "sqlite:///./tutor_backend.db")
        self.log_level = os.getenv("TUTOR_LOG_LEVEL", "INFO")
        self.cors_origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

        # Payment account printed on invoices and encoded in the VietQR link
        self.bank_name = "Vietcombank"
        self.bank_code = "970436"
        self.bank_account_number = "1041819355"
        self.bank_account_name = "GIA SU TIENG ANH"
        self.vietqr_base_url = "https://img.vietqr.io/image"
        self.vietqr_template = "compact2"

        # TTF with Vietnamese glyphs; common DejaVuSans locations are searched when unset
        self.pdf_font_path = os.getenv("TUTOR_PDF_FONT_PATH")


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
