import uvicorn

from .config import get_settings


def main():
    settings = get_settings()
    uvicorn.run("footprint_api.main:app", host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
