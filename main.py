# main.py

import sys
from subprocess import run

from blogapp.configs import settings


def start(cmmd: list[str]) -> None:
    run(cmmd, check=True)


def main() -> None:
    cmmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "blogapp.main:app",
        "--host",
        settings.HOST,
        "--port",
        str(settings.PORT),
        "--log-level",
        settings.LOG_LEVEL.lower(),
    ]
    if settings.DEBUG:
        cmmd.append("--reload")
    start(cmmd)


if __name__ == "__main__":
    main()
