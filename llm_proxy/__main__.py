"""Run the proxy with uvicorn: ``python -m llm_proxy``."""

import uvicorn

from llm_proxy.config import settings


def main() -> None:
    uvicorn.run("llm_proxy.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
