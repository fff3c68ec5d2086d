from shared.config import Settings, settings as default_settings

SLACK_WEBHOOK_KEY = "SLACK_WEBHOOK"
ALCHEMY_API_KEY = "ALCHEMY_API_KEY"


class Secrets:
    """Read-only secret lookup by key. Empty values read as missing."""

    def __init__(self, values: dict[str, str] | None = None):
        self._values = dict(values or {})

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Secrets":
        s = settings or default_settings
        return cls({
            SLACK_WEBHOOK_KEY: s.SLACK_WEBHOOK,
            ALCHEMY_API_KEY: s.ALCHEMY_API_KEY,
        })

    def get(self, key: str) -> str | None:
        return self._values.get(key) or None
