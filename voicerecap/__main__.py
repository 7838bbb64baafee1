"""Run the VoiceRecap server: ``python -m voicerecap``."""

import uvicorn

from voicerecap.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "voicerecap.api.app:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
