import uvicorn
from dotenv import load_dotenv

# must run before src.config.settings reads the environment
load_dotenv(".env.local")

from src.config.settings import settings  # noqa: E402

if __name__ == "__main__":
    uvicorn.run(
        "src.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
