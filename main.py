import uvicorn
from dotenv import load_dotenv

from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings
from server import server

load_dotenv()

server_app = server.handler
logger = get_module_logger()


def main():
    """Serve the API with uvicorn on the configured host and port."""
    settings = get_settings()
    logger.info(
        "server_starting",
        host=settings.server.HOST,
        port=settings.server.PORT,
    )
    uvicorn.run(server_app, host=settings.server.HOST, port=settings.server.PORT)


if __name__ == "__main__":
    main()
