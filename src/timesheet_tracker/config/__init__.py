import os


def get_settings_module() -> str:
    # Lấy giá trị môi trường từ biến APP_ENV, mặc định là 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "timesheet_tracker.config.production"

    if env in {"test", "testing"}:
        return "timesheet_tracker.config.testing"

    return "timesheet_tracker.config.development"
