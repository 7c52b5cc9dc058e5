"""Centralized branding constants — single source of truth for version."""


class AppBranding:
    """Library identity constants."""

    APP_NAME = "LaunchGate"
    VERSION = "1.0.0"

    @classmethod
    def dialog_title(cls) -> str:
        return cls.APP_NAME

    @classmethod
    def user_agent(cls) -> str:
        return f"{cls.APP_NAME}/{cls.VERSION}"
