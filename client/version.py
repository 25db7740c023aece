from __future__ import annotations

PACKAGE_NAME = "linebot-http"
PACKAGE_VERSION = "0.1.0"
USER_AGENT = f"{PACKAGE_NAME}/{PACKAGE_VERSION}"
