from __future__ import annotations

USER_AGENT = "DMSPicker-Client/0.1.0"
DEFAULT_TIMEOUT = 10
