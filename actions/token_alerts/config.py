from shared.config import settings

ACTION_NAME = "token_alerts"

# Storage keys
TOKEN_THRESHOLD_KEY = "TOKEN_THRESHOLD"
HEART_BEAT_COUNTER_KEY = "HEART_BEAT_COUNTER"

# Sentinel used in config to mean the chain's native currency
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
NATIVE_TOKEN_DECIMALS = 18

# Heartbeat
HEARTBEAT_INTERVAL = settings.HEARTBEAT_INTERVAL
HEARTBEAT_TITLE = "*_Tenderly Token Alerts - System Heartbeat 💓_*"
HEARTBEAT_MESSAGE = (
    "Tenderly Token Alerts has executed {count} cycles. "
    "Web3 Actions are operating as expected."
)
