"""Point d'entrée : python -m spotfinder"""
import uvicorn

from spotfinder.config import settings
from spotfinder.logger import logger


def main():
    logger.info("Server listening on {host}:{port}...", host=settings.HOST, port=settings.PORT)
    uvicorn.run("spotfinder.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
