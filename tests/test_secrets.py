from shared.config import Settings
from shared.secrets import Secrets, SLACK_WEBHOOK_KEY, ALCHEMY_API_KEY


def test_empty_values_read_as_missing():
    secrets = Secrets({SLACK_WEBHOOK_KEY: "", ALCHEMY_API_KEY: "key"})

    assert secrets.get(SLACK_WEBHOOK_KEY) is None
    assert secrets.get(ALCHEMY_API_KEY) == "key"
    assert secrets.get("UNKNOWN") is None


def test_from_settings_is_read_only():
    secrets = Secrets.from_settings(Settings(_env_file=None, SLACK_WEBHOOK="https://hooks", ALCHEMY_API_KEY=""))

    assert secrets.get(SLACK_WEBHOOK_KEY) == "https://hooks"
    assert secrets.get(ALCHEMY_API_KEY) is None
    assert not hasattr(secrets, "put")
