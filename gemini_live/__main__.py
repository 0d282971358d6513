"""Run the relay server: ``python -m gemini_live``."""

from __future__ import annotations

import uvicorn

from gemini_live.config.relay import RELAY_APP_IMPORT_PATH
from gemini_live.runtime.settings_loader import load_relay_settings


def main() -> None:
    settings = load_relay_settings()
    uvicorn.run(
        RELAY_APP_IMPORT_PATH,
        host=settings.host,
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
