"""
Service starter — reads SERVICE env var and starts the matching app.
Used by Docker/Railway deployments.
"""
import os
import sys
import uvicorn

SERVICE = os.environ.get("SERVICE", "token_alerts")
PORT = int(os.environ.get("PORT", 0))

SERVICES = {
    "token_alerts": ("actions.token_alerts.main:app", 8010),
}


def main():
    if SERVICE not in SERVICES:
        print(f"ERROR: Unknown service '{SERVICE}'. Options: {', '.join(SERVICES.keys())}")
        sys.exit(1)

    app_path, default_port = SERVICES[SERVICE]
    port = PORT or default_port

    print(f"Starting {SERVICE} on port {port}...")
    uvicorn.run(
        app_path,
        host="0.0.0.0",
        port=port,
        log_level=os.environ.get("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
