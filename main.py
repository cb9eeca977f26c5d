"""Main entry point for the Magic 8 Ball API."""

import uvicorn
from dotenv import load_dotenv

from models.schemas import SystemConfig

# Load environment variables
load_dotenv()

if __name__ == "__main__":
    system_config = SystemConfig.from_env()

    uvicorn.run(
        "api.server:app",
        host="0.0.0.0",
        port=system_config.apiPort,
        log_level=system_config.logLevel.lower()
    )
